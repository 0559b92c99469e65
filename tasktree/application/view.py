"""Application view: everything a front end needs to render one frame."""

from datetime import date
from typing import Literal, Union

from pydantic import BaseModel

from tasktree.domain.task import (
    FilterBarView,
    FilterDropId,
    FilterId,
    ProjectFilter,
    SectionFilter,
    TaskListSection,
    TaskListState,
    active_project_list,
    active_subprojects,
    counts,
    filter_bar_view,
    filter_title,
    is_subfilter,
    task_list_view,
)

from . import editor as task_editor
from .app_service import AppState
from .text_fields import text_field_value


class TextIndicator(BaseModel):
    type: Literal["text"] = "text"
    text: str
    color: str


class DotIndicator(BaseModel):
    type: Literal["dot"] = "dot"


FilterIndicator = Union[TextIndicator, DotIndicator]  # noqa: UP007


class FilterView(BaseModel):
    """A sidebar entry."""

    label: str
    filter: FilterId
    selected: bool
    drop_target: FilterDropId | None
    indicator: FilterIndicator | None = None


class SideBarSection(BaseModel):
    title: str
    filter: FilterId
    filters: list[FilterView]


class AddTaskView(BaseModel):
    value: str


class View(BaseModel):
    file_controls: Literal["saveLoad"] | None
    add_task: AddTaskView
    side_bar: list[SideBarSection]
    task_list: list[TaskListSection]
    filter_bar: FilterBarView
    editor: task_editor.EditorView | None


def _counter(count: int, color: str) -> TextIndicator | None:
    return TextIndicator(text=str(count), color=color) if count > 0 else None


def _side_bar(state: TaskListState) -> list[SideBarSection]:
    def filter_view(filter_id: FilterId, indicator: FilterIndicator | None = None) -> FilterView:
        return FilterView(
            label=filter_title(state.tasks, filter_id),
            filter=filter_id,
            selected=is_subfilter(state, state.filter, filter_id),
            drop_target=FilterDropId(id=filter_id),
            indicator=indicator,
        )

    def project_view(project_id: str, count: int, is_stalled: bool) -> FilterView:
        indicator: FilterIndicator | None = _counter(count, "project")
        if indicator is None and is_stalled:
            indicator = DotIndicator()
        return filter_view(ProjectFilter(project=project_id), indicator)

    totals = counts(state)
    sections = [
        SideBarSection(
            title="Actions",
            filter=SectionFilter(section="actions"),
            filters=[
                filter_view("today", _counter(totals.today, "red")),
                filter_view("ready", _counter(totals.ready, "green")),
                filter_view("stalled", _counter(totals.stalled, "orange")),
            ],
        ),
        SideBarSection(
            title="Tasks",
            filter=SectionFilter(section="tasks"),
            filters=[
                filter_view("waiting", _counter(totals.waiting, "grey")),
                filter_view("paused"),
                filter_view("all"),
                filter_view("not-done"),
                filter_view("done"),
            ],
        ),
        SideBarSection(
            title="Active projects",
            filter=SectionFilter(section="activeProjects"),
            filters=[project_view(p.id, p.count, p.is_stalled) for p in active_project_list(state)],
        ),
    ]

    subprojects = active_subprojects(state)
    if subprojects is not None:
        sections.append(
            SideBarSection(
                title=subprojects.title,
                filter=ProjectFilter(project=subprojects.parent_project),
                filters=[project_view(p.id, 0, p.is_stalled) for p in subprojects.children],
            )
        )

    sections.append(
        SideBarSection(
            title="Archive",
            filter=SectionFilter(section="archive"),
            filters=[filter_view("archive")],
        )
    )
    return sections


def view(state: AppState, today: date) -> View:
    """Project the application state into a renderable view."""
    task_list_state = state.task_list_state(today)
    return View(
        file_controls="saveLoad",
        add_task=AddTaskView(value=text_field_value(state.text_fields, "addTitle")),
        side_bar=_side_bar(task_list_state),
        task_list=task_list_view(task_list_state),
        filter_bar=filter_bar_view(task_list_state),
        editor=task_editor.view(state.editor),
    )
