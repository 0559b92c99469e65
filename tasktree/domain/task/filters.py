"""Filter engine: which tasks a filter shows, and the data behind the sidebar.

All functions in this module are pure - no I/O, no side effects.
"""

from dataclasses import replace

from pydantic import BaseModel

from tasktree.domain.forest import (
    Handle,
    IndentedListItem,
    any_descendant,
    any_descendant_in_list,
    filter_list,
    filter_nodes,
    flatten_handles,
    is_descendant,
    is_descendant_in_list,
    pick_into_list,
    zoom_into_list,
)

from .models import (
    FilterId,
    ProjectFilter,
    SectionFilter,
    SectionId,
    SubtaskFilter,
    SubtaskFilterId,
    SubtaskFilterState,
    TaskData,
    TaskListState,
    Tasks,
    TaskStatus,
)
from .status import TaskProperty, task_is

TaskList = tuple[IndentedListItem[TaskData], ...]

FILTER_PROPERTIES: dict[str, TaskProperty] = {
    "stalled": TaskProperty.STALLED,
    "ready": TaskProperty.READY_ITSELF,
    "done": TaskProperty.DONE,
    "paused": TaskProperty.PAUSED,
    "waiting": TaskProperty.WAITING,
    "today": TaskProperty.TODAY_OR_DUE_TODAY,
    "not-done": TaskProperty.NOT_DONE,
    "archive": TaskProperty.ARCHIVED,
}

# (exclude property, include property) per filter bar entry
SUBTASK_FILTER_PROPERTIES: dict[str, tuple[TaskProperty, TaskProperty]] = {
    "paused": (TaskProperty.PAUSED, TaskProperty.PAUSED),
    "done": (TaskProperty.DONE, TaskProperty.DONE),
    "ready": (TaskProperty.READY_SUBTREE, TaskProperty.READY_TASK_ITSELF),
}


# =============================================================================
# Task Lists
# =============================================================================


def is_task_included_in_filter(state: TaskListState, handle: Handle) -> bool:
    """Whether the selected filter keeps a task.

    Archived tasks only show up in the archive. Scalar filters keep a task
    when it, or anything below it, has the filter's property; project and
    section filters keep everything that is not archived.
    """
    if task_is(state, handle, TaskProperty.ARCHIVED) and state.filter != "archive":
        return False

    if isinstance(state.filter, str) and state.filter in FILTER_PROPERTIES:
        prop = FILTER_PROPERTIES[state.filter]
        return task_is(state, handle, prop) or any_descendant(
            state.tasks, handle, lambda h: task_is(state, h, prop)
        )

    return True


def matches_subtask_filter(
    state: TaskListState,
    full_list: TaskList,
    item: IndentedListItem[TaskData],
    subtask_filter: SubtaskFilter,
) -> bool:
    """Whether a list item passes one filter bar setting.

    Args:
        state: Task forest and the current date
        full_list: The list the item belongs to
        item: The item to test
        subtask_filter: Filter bar entry and its state

    Returns:
        For ``include``: the item or one of its list descendants has the
        include property. For ``exclude``: the item or one of its list
        descendants lacks the exclude property.
    """
    exclude_prop, include_prop = SUBTASK_FILTER_PROPERTIES[subtask_filter.id]
    if subtask_filter.state == "include":
        return any_descendant_in_list(full_list, item.id, lambda t: task_is(state, t.id, include_prop))
    return any_descendant_in_list(full_list, item.id, lambda t: not task_is(state, t.id, exclude_prop))


def filter_tasks_into_list(state: TaskListState) -> TaskList:
    """The flattened list of tasks shown for the selected filter.

    A project filter zooms into the project so its direct children are the
    top-level rows. Rows excluded by the filter are dropped with their
    subtrees, then the filter bar settings are applied to what remains.
    """
    root = state.filter.project if isinstance(state.filter, ProjectFilter) else None
    global_list = zoom_into_list(state.tasks, root)
    full_list = filter_list(global_list, lambda item: is_task_included_in_filter(state, item.id))
    return filter_list(
        full_list,
        lambda item: all(matches_subtask_filter(state, full_list, item, f) for f in state.subtask_filters),
    )


def is_subtask_filter_relevant(state: TaskListState, filter_id: SubtaskFilterId) -> bool:
    """Whether a filter bar entry would make a difference to the current list."""
    full_list = filter_tasks_into_list(state)

    def would_any_match(filter_state: SubtaskFilterState) -> bool:
        subtask_filter = SubtaskFilter(id=filter_id, state=filter_state)
        return any(matches_subtask_filter(state, full_list, item, subtask_filter) for item in full_list)

    return would_any_match("exclude") and would_any_match("include")


def set_subtask_filter(
    filters: tuple[SubtaskFilter, ...],
    filter_id: SubtaskFilterId,
    filter_state: SubtaskFilterState,
) -> tuple[SubtaskFilter, ...]:
    """Toggle a filter bar entry: selecting the current state resets it.

    A new entry is appended; changing an existing entry keeps its position.
    """
    if not any(f.id == filter_id for f in filters):
        return (*filters, SubtaskFilter(id=filter_id, state=filter_state))
    return tuple(
        SubtaskFilter(id=filter_id, state=filter_state) if f.id == filter_id else f
        for f in filters
        if f.id != filter_id or f.state != filter_state
    )


# =============================================================================
# Projects and Counters
# =============================================================================


class ActiveProject(BaseModel):
    """An active project as listed in the sidebar."""

    id: Handle
    title: str
    count: int = 0
    is_stalled: bool = False


class ActiveSubprojects(BaseModel):
    """The sub-projects of the project family currently being looked at."""

    title: str
    parent_project: Handle
    children: list[ActiveProject]


class Counts(BaseModel):
    """Sidebar counters."""

    today: int
    ready: int
    stalled: int
    waiting: int


def _is_active_project(state: TaskListState, handle: Handle) -> bool:
    return task_is(state, handle, TaskProperty.PROJECT) and not task_is(
        state, handle, TaskProperty.INACTIVE
    )


def active_projects(state: TaskListState) -> list[ActiveProject]:
    """Every project whose own status is active and that is not archived, in pre-order."""
    return [
        ActiveProject(
            id=node.id,
            title=node.data.title,
            is_stalled=task_is(state, node.id, TaskProperty.STALLED),
        )
        for node in filter_nodes(
            state.tasks,
            lambda h: task_is(state, h, TaskProperty.PROJECT)
            and state.tasks.data[h].status == TaskStatus.ACTIVE
            and not task_is(state, h, TaskProperty.ARCHIVED),
        )
    ]


def active_project_list(state: TaskListState) -> list[ActiveProject]:
    """Outermost active projects, each with its number of active sub-projects."""
    projects = pick_into_list(state.tasks, lambda h: _is_active_project(state, h))

    def count_subprojects(project: IndentedListItem[TaskData]) -> int:
        return sum(
            1
            for item in projects
            if _is_active_project(state, item.id) and is_descendant_in_list(projects, item.id, project.id)
        )

    return [
        ActiveProject(
            id=item.id,
            title=item.data.title,
            count=count_subprojects(item),
            is_stalled=task_is(state, item.id, TaskProperty.STALLED),
        )
        for item in projects
        if item.indentation == 0
    ]


def active_subprojects(state: TaskListState) -> ActiveSubprojects | None:
    """Sub-projects of the outermost active project around the selected one.

    Returns:
        None unless a project filter is selected and that project family
        has active sub-projects
    """
    if not isinstance(state.filter, ProjectFilter):
        return None

    selected = state.filter.project
    projects = pick_into_list(state.tasks, lambda h: _is_active_project(state, h))
    superproject = next(
        (item.id for item in projects if is_descendant_in_list(projects, selected, item.id)),
        selected,
    )
    subprojects = filter_nodes(
        state.tasks,
        lambda h: _is_active_project(state, h) and is_descendant(state.tasks, h, superproject),
    )
    if not subprojects:
        return None

    return ActiveSubprojects(
        title=filter_title(state.tasks, ProjectFilter(project=superproject)),
        parent_project=superproject,
        children=[
            ActiveProject(
                id=node.id,
                title=node.data.title,
                is_stalled=task_is(state, node.id, TaskProperty.STALLED),
            )
            for node in subprojects
        ],
    )


def counts(state: TaskListState) -> Counts:
    """Number of tasks behind each sidebar counter, archive excluded."""
    handles = [
        h
        for h, _ in flatten_handles(state.tasks)
        if not task_is(state, h, TaskProperty.ARCHIVED)
    ]

    def count(prop: TaskProperty) -> int:
        return sum(1 for h in handles if task_is(state, h, prop))

    return Counts(
        today=count(TaskProperty.NON_COMPLETED_TODAY_OR_DUE_TODAY),
        ready=count(TaskProperty.READY_ITSELF),
        stalled=count(TaskProperty.STALLED),
        waiting=count(TaskProperty.WAITING),
    )


# =============================================================================
# Sections and Titles
# =============================================================================

_SECTION_TITLES: dict[str, str] = {
    "actions": "Actions",
    "tasks": "Tasks",
    "activeProjects": "Active Projects",
    "archive": "Archive",
}

_FILTER_TITLES: dict[str, str] = {
    "ready": "Ready",
    "done": "Completed",
    "stalled": "Stalled",
    "not-done": "Unfinished",
    "archive": "Archive",
    "all": "All",
    "paused": "Paused",
    "today": "Today",
    "waiting": "Waiting",
}


def subfilters(state: TaskListState, section: SectionId) -> list[FilterId]:
    """The filters a section filter is made of, in display order."""
    if section == "actions":
        return ["today", "ready", "stalled"]
    if section == "tasks":
        return ["waiting", "paused", "all", "not-done", "done"]
    if section == "activeProjects":
        return [ProjectFilter(project=p.id) for p in active_project_list(state)]
    return ["archive"]


def expand_filter(state: TaskListState) -> list[FilterId]:
    """The filters whose lists make up the view of the selected filter."""
    if isinstance(state.filter, SectionFilter):
        return subfilters(state, state.filter.section)
    return [state.filter]


def is_subfilter(state: TaskListState, parent: FilterId, filter_id: FilterId) -> bool:
    """Whether ``filter_id`` is ``parent`` or one of the filters it contains."""
    if isinstance(parent, str):
        return parent == filter_id
    if isinstance(parent, ProjectFilter):
        return isinstance(filter_id, ProjectFilter) and parent.project == filter_id.project
    return any(is_subfilter(state, sub, filter_id) for sub in subfilters(state, parent.section))


def filter_title(tasks: Tasks, filter_id: FilterId) -> str:
    """Human-readable title of a filter; projects are titled after the project."""
    if isinstance(filter_id, SectionFilter):
        return _SECTION_TITLES[filter_id.section]
    if isinstance(filter_id, ProjectFilter):
        data = tasks.data.get(filter_id.project)
        return data.title if data is not None else ""
    return _FILTER_TITLES[filter_id]


def with_filter(state: TaskListState, filter_id: FilterId) -> TaskListState:
    """The same state looking at another filter."""
    return replace(state, filter=filter_id)
