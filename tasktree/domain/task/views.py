"""Task list view: titled sections of task rows, drop targets and indicators.

The view is recomputed from state on every request and never stored.
"""

from typing import Literal, Union

from pydantic import BaseModel

from tasktree.domain.forest import (
    Handle,
    IndentedListItem,
    valid_insert_locations_below,
)

from .filters import (
    TaskList,
    expand_filter,
    filter_tasks_into_list,
    filter_title,
    is_subtask_filter_relevant,
    with_filter,
)
from .models import (
    Badge,
    DropTargetHandle,
    FilterId,
    ListDropId,
    SubtaskFilterId,
    SubtaskFilterState,
    TaskData,
    TaskKind,
    TaskListState,
)
from .status import TaskProperty, badges, task_is


class TaskView(BaseModel):
    """One task row."""

    type: Literal["task"] = "task"
    id: Handle
    title: str
    indentation: int
    done: bool
    paused: bool
    archived: bool
    project: bool
    today: bool
    badges: list[Badge]
    border_below: bool


class DropTargetView(BaseModel):
    """A drop affordance; the deepest one at a position spans the full width."""

    type: Literal["dropTarget"] = "dropTarget"
    width: int | Literal["full"]
    indentation: int
    handle: DropTargetHandle


class DropIndicatorView(BaseModel):
    """Marks where the hovered drop target would put the dragged task."""

    type: Literal["dropIndicator"] = "dropIndicator"
    indentation: int


Row = Union[TaskView, DropTargetView, DropIndicatorView]  # noqa: UP007


class TaskListSection(BaseModel):
    """The rows shown for one filter."""

    title: str | None
    filter: FilterId
    rows: list[Row]


class FilterBarEntry(BaseModel):
    id: SubtaskFilterId
    label: str
    state: Literal["neutral"] | SubtaskFilterState


class FilterBarView(BaseModel):
    filters: list[FilterBarEntry]


# =============================================================================
# Rows
# =============================================================================


def _task_view(state: TaskListState, item: IndentedListItem[TaskData], border_below: bool) -> TaskView:
    handle = item.id
    return TaskView(
        id=handle,
        title=item.data.title,
        indentation=item.indentation,
        done=task_is(state, handle, TaskProperty.DONE),
        paused=task_is(state, handle, TaskProperty.PAUSED) or task_is(state, handle, TaskProperty.WAITING),
        archived=task_is(state, handle, TaskProperty.ARCHIVED),
        project=item.data.kind == TaskKind.PROJECT,
        today=task_is(state, handle, TaskProperty.TODAY_OR_DUE_TODAY),
        badges=list(badges(state, handle)),
        border_below=border_below,
    )


def _drop_targets_below(
    state: TaskListState,
    items: TaskList,
    filter_id: FilterId,
    index: int,
) -> list[DropTargetView]:
    dragging = state.task_drag.dragging
    if dragging is None:
        return []

    locations = valid_insert_locations_below(state.tasks, items, dragging.id, index)
    deepest = max((location.indentation for location in locations), default=0)
    return [
        DropTargetView(
            width="full" if location.indentation == deepest else 1,
            indentation=location.indentation,
            handle=DropTargetHandle(location=location, filter=filter_id),
        )
        for location in locations
    ]


def _drop_indicators_below(state: TaskListState, handle: Handle | None, filter_id: FilterId) -> list[DropIndicatorView]:
    hovering = state.task_drag.hovering
    if (
        isinstance(hovering, ListDropId)
        and hovering.target.location.previous_sibling == handle
        and hovering.target.filter == filter_id
    ):
        return [DropIndicatorView(indentation=hovering.target.location.indentation)]
    return []


def _section(state: TaskListState, filter_id: FilterId, title: str | None) -> TaskListSection:
    filtered = with_filter(state, filter_id)
    items = filter_tasks_into_list(filtered)

    rows: list[Row] = [
        *_drop_indicators_below(state, None, filter_id),
        *_drop_targets_below(state, items, filter_id, -1),
    ]
    for index, item in enumerate(items):
        rows.append(_task_view(filtered, item, index < len(items) - 1))
        rows.extend(_drop_indicators_below(state, item.id, filter_id))
        rows.extend(_drop_targets_below(state, items, filter_id, index))

    return TaskListSection(title=title, filter=filter_id, rows=rows)


def task_list_view(state: TaskListState) -> list[TaskListSection]:
    """Sections for the selected filter.

    A section filter yields one titled section per sub-filter; any other
    filter yields a single untitled section. While a task is dragged every
    position carries its valid drop targets, and the hovered target is
    marked with a drop indicator.
    """
    filters = expand_filter(state)
    show_titles = len(filters) > 1
    return [
        _section(state, filter_id, filter_title(state.tasks, filter_id) if show_titles else None)
        for filter_id in filters
    ]


# =============================================================================
# Filter Bar
# =============================================================================

_FILTER_BAR_LABELS: dict[str, str] = {
    "paused": "Paused",
    "done": "Completed",
    "ready": "Ready",
}


def filter_bar_view(state: TaskListState) -> FilterBarView:
    """Filter bar entries that are set or would change the current list."""
    entries: list[FilterBarEntry] = []
    for filter_id in ("paused", "done", "ready"):
        current = next((f.state for f in state.subtask_filters if f.id == filter_id), "neutral")
        if current != "neutral" or is_subtask_filter_relevant(state, filter_id):
            entries.append(FilterBarEntry(id=filter_id, label=_FILTER_BAR_LABELS[filter_id], state=current))
    return FilterBarView(filters=entries)
