"""Scenario helpers for driving the reducer the way a user would.

A scenario is a nested list of modifications. Each modification is an
event, a function from the current view to more modifications, or a list
of modifications; ``update_all`` applies them in order.
"""

from collections.abc import Callable, Sequence
from datetime import date
from typing import Any, Union

from tasktree.application import (
    AppState,
    CheckEvent,
    Component,
    DragTaskEvent,
    DropEvent,
    Effect,
    EditorEvent,
    FilterView,
    HoverEvent,
    PickerComponent,
    SelectEditingTaskEvent,
    SelectFilterEvent,
    TextFieldEdit,
    TextFieldSubmit,
    View,
    dispatch,
    view,
)
from tasktree.domain.task import DropId, DropTargetView, FilterDropId, FilterId, ListDropId, TaskView

TODAY = date(2020, 3, 15)

Modifications = Union[Any, Callable[[View], "Modifications"], Sequence["Modifications"]]  # noqa: UP007


# =============================================================================
# Running Scenarios
# =============================================================================


def view_of(state: AppState) -> View:
    return view(state, TODAY)


def viewed(state_or_view: AppState | View) -> View:
    return state_or_view if isinstance(state_or_view, View) else view_of(state_or_view)


def state_and_effects_after(state: AppState, mods: Modifications) -> tuple[AppState, list[Effect]]:
    """Apply modifications; the effects are those of the last event applied."""
    if isinstance(mods, (list, tuple)):
        effects: list[Effect] = []
        for mod in mods:
            state, effects = state_and_effects_after(state, mod)
        return state, effects
    if callable(mods):
        return state_and_effects_after(state, mods(view_of(state)))
    return dispatch(state, mods, TODAY)


def update_all(state: AppState, *mods: Modifications) -> AppState:
    return state_and_effects_after(state, list(mods))[0]


# =============================================================================
# Reading Views
# =============================================================================


def task_rows(state_or_view: AppState | View) -> list[TaskView]:
    return [
        row
        for section in viewed(state_or_view).task_list
        for row in section.rows
        if isinstance(row, TaskView)
    ]


def tasks(state_or_view: AppState | View, *props: str) -> list[Any]:
    """One value per task row, or a tuple of values when several properties are asked for."""
    rows = task_rows(state_or_view)
    if len(props) == 1:
        return [getattr(row, props[0]) for row in rows]
    return [tuple(getattr(row, prop) for prop in props) for row in rows]


def tasks_in_section(state_or_view: AppState | View, title: str, prop: str) -> list[Any]:
    return [
        getattr(row, prop)
        for section in viewed(state_or_view).task_list
        if section.title == title
        for row in section.rows
        if isinstance(row, TaskView)
    ]


def badge_labels(state_or_view: AppState | View) -> list[list[str]]:
    return [[badge.label for badge in row.badges] for row in task_rows(state_or_view)]


def nth_task(state_or_view: AppState | View, n: int) -> TaskView:
    return task_rows(state_or_view)[n]


def drop_target_rows_after(state_or_view: AppState | View, n: int) -> list[DropTargetView]:
    """Drop targets between the ``n``-th task row and the next task row; -1 for the top."""
    current = viewed(state_or_view)
    start = None if n == -1 else nth_task(current, n).id
    found = n == -1
    result: list[DropTargetView] = []
    for section in current.task_list:
        for row in section.rows:
            if isinstance(row, TaskView):
                if start is not None and row.id == start:
                    found = True
                elif found:
                    return result
            elif isinstance(row, DropTargetView) and found:
                result.append(row)
    return result


def drop_targets_after(state_or_view: AppState | View, n: int) -> list[tuple[int | str, int]]:
    return [(target.width, target.indentation) for target in drop_target_rows_after(state_or_view, n)]


def _drop_target(current: View, n: int, side: str, indentation: int) -> DropTargetView:
    for target in drop_target_rows_after(current, n - 1 if side == "above" else n):
        if target.indentation == indentation:
            return target
    raise LookupError(f"No drop target {side} task {n} at indentation {indentation}")


def side_bar_filters(state_or_view: AppState | View) -> list[FilterView]:
    return [f for section in viewed(state_or_view).side_bar for f in section.filters]


def filter_called(state_or_view: AppState | View, label: str) -> FilterView:
    for f in side_bar_filters(state_or_view):
        if f.label == label:
            return f
    raise LookupError(f"No filter called {label!r}")


def indicator_for_filter(state_or_view: AppState | View, label: str) -> Any:
    return filter_called(state_or_view, label).indicator


def side_bar_active_projects(state_or_view: AppState | View) -> list[FilterView]:
    for section in viewed(state_or_view).side_bar:
        if section.title == "Active projects":
            return section.filters
    return []


def component_titled(state_or_view: AppState | View, title: str) -> Component | None:
    editor = viewed(state_or_view).editor
    if editor is None:
        return None
    for section in editor.sections:
        for group in section:
            if group.title == title:
                return group.components[0]
    return None


def picker_options(state_or_view: AppState | View, title: str) -> list[str]:
    component = component_titled(state_or_view, title)
    if not isinstance(component, PickerComponent):
        return []
    return [option.value for option in component.options]


def picker_value(state_or_view: AppState | View, title: str) -> str:
    component = component_titled(state_or_view, title)
    if not isinstance(component, PickerComponent):
        return ""
    return next((option.value for option in component.options if option.active), "")


def filter_bar_labels(state_or_view: AppState | View) -> list[str]:
    return [entry.label for entry in viewed(state_or_view).filter_bar.filters]


def filter_bar_state(state_or_view: AppState | View, label: str) -> str:
    for entry in viewed(state_or_view).filter_bar.filters:
        if entry.label == label:
            return entry.state
    raise LookupError(f"No filter bar entry {label!r}")


# =============================================================================
# Building Scenarios
# =============================================================================


def switch_to_filter(filter_id: FilterId) -> list[SelectFilterEvent]:
    return [SelectFilterEvent(filter=filter_id)]


def switch_to_filter_called(label: str) -> Callable[[View], Modifications]:
    return lambda current: switch_to_filter(filter_called(current, label).filter)


def drag_and_drop(task_id: str, target: DropId) -> list[Any]:
    return [DragTaskEvent(id=task_id, x=100, y=100), HoverEvent(target=target), DropEvent()]


def start_drag_nth(n: int) -> Callable[[View], Modifications]:
    return lambda current: [DragTaskEvent(id=nth_task(current, n).id, x=100, y=100)]


def hover_nth(n: int, side: str, indentation: int) -> Callable[[View], Modifications]:
    return lambda current: [HoverEvent(target=ListDropId(target=_drop_target(current, n, side, indentation).handle))]


def drag_and_drop_nth(m: int, n: int, side: str, indentation: int) -> list[Modifications]:
    """Drag the ``m``-th task to the drop target above or below the ``n``-th task."""
    return [
        start_drag_nth(m),
        lambda current: drag_and_drop(
            nth_task(current, m).id,
            ListDropId(target=_drop_target(current, n, side, indentation).handle),
        ),
    ]


def drag_to_filter(n: int, filter_id: FilterId) -> Callable[[View], Modifications]:
    return lambda current: drag_and_drop(nth_task(current, n).id, FilterDropId(id=filter_id))


def drag_to_tab(n: int, label: str) -> Callable[[View], Modifications]:
    def mods(current: View) -> Modifications:
        target = filter_called(current, label).drop_target
        if target is None:
            raise LookupError(f"Filter {label!r} is not a drop target")
        return drag_and_drop(nth_task(current, n).id, target)

    return mods


def open_nth(n: int) -> Callable[[View], Modifications]:
    return lambda current: [SelectEditingTaskEvent(id=nth_task(current, n).id)]


def check_nth(n: int) -> Callable[[View], Modifications]:
    return lambda current: [CheckEvent(id=nth_task(current, n).id)]


def set_component_value(title: str, value: str) -> Callable[[View], Modifications]:
    def mods(current: View) -> Modifications:
        component = component_titled(current, title)
        if component is None:
            raise LookupError(f"No editor component titled {title!r}")
        return [EditorEvent(component=component.id, value=value)]

    return mods


def add_task(title: str, *opts: int | str) -> list[Modifications]:
    """Type a title and submit it, then optionally nest, file and convert the new task.

    Args:
        title: Title of the new task
        opts: An int nests the task at that indentation below the task above
            it; ``"project"`` turns it into a project; any other string is a
            filter the task is dragged to
    """
    indentation = next((o for o in opts if isinstance(o, int)), 0)
    filters = [o for o in opts if isinstance(o, str) and o != "project"]
    project = "project" in opts

    def last(current: View) -> int:
        return len(task_rows(current)) - 1

    return [
        [TextFieldEdit(field="addTitle", value=title), TextFieldSubmit(field="addTitle")],
        lambda current: (
            [] if indentation == 0 else drag_and_drop_nth(last(current), last(current) - 1, "below", indentation)
        ),
        lambda current: [drag_to_filter(last(current), f) for f in filters],
        lambda current: [open_nth(last(current)), set_component_value("Type", "project")] if project else [],
    ]
