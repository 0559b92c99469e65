"""Derived task properties and badges.

Every property is a pure function of the forest, a handle and ``today``.
Properties that look at ancestors or descendants read the forest
structure, so a task can be paused, archived or waiting because one of
its ancestors is.
"""

from collections.abc import Callable
from datetime import date
from enum import Enum

from tasktree.domain.forest import Handle, any_ancestor, any_descendant

from .models import Badge, TaskData, TaskKind, TaskListState, Tasks, TaskStatus


class TaskProperty(str, Enum):
    """Named derived properties of a task."""

    DONE = "done"
    NOT_DONE = "not-done"
    PAUSED = "paused"
    ARCHIVED = "archived"
    TODAY = "today"
    DUE_TODAY = "due-today"
    OVERDUE = "overdue"
    TODAY_OR_DUE_TODAY = "today-or-due-today"
    NON_COMPLETED_TODAY_OR_DUE_TODAY = "non-completed-today-or-due-today"
    INACTIVE = "inactive"
    PROJECT = "project"
    READY_ITSELF = "ready-itself"
    READY_TASK_ITSELF = "ready-task-itself"
    READY_SUBTREE = "ready-subtree"
    STALLED = "stalled"
    STALLED_SUBTREE = "stalled-subtree"
    WAITING_ITSELF = "waiting-itself"
    WAITING = "waiting"


_Check = Callable[[Tasks, date, Handle], bool]


def _data(tasks: Tasks, handle: Handle) -> TaskData:
    return tasks.data[handle]


def _not(prop: TaskProperty) -> _Check:
    return lambda tasks, today, handle: not _PROPERTIES[prop](tasks, today, handle)


def _done(tasks: Tasks, today: date, handle: Handle) -> bool:
    return _data(tasks, handle).status == TaskStatus.DONE


def _paused(tasks: Tasks, today: date, handle: Handle) -> bool:
    return any_ancestor(tasks, handle, lambda h: _data(tasks, h).status == TaskStatus.PAUSED)


def _archived(tasks: Tasks, today: date, handle: Handle) -> bool:
    return any_ancestor(tasks, handle, lambda h: _data(tasks, h).archived)


def _today(tasks: Tasks, today: date, handle: Handle) -> bool:
    planned = _data(tasks, handle).planned
    if planned is None:
        return False
    return planned == today or (planned < today and not _done(tasks, today, handle))


def _due_today(tasks: Tasks, today: date, handle: Handle) -> bool:
    due = _data(tasks, handle).due
    return due is not None and due <= today


def _overdue(tasks: Tasks, today: date, handle: Handle) -> bool:
    due = _data(tasks, handle).due
    return due is not None and due < today


def _today_or_due_today(tasks: Tasks, today: date, handle: Handle) -> bool:
    return _today(tasks, today, handle) or _due_today(tasks, today, handle)


def _non_completed_today_or_due_today(tasks: Tasks, today: date, handle: Handle) -> bool:
    return _today_or_due_today(tasks, today, handle) and not _done(tasks, today, handle)


def _waiting_itself(tasks: Tasks, today: date, handle: Handle) -> bool:
    wait = _data(tasks, handle).wait
    return wait is not None and wait > today


def _waiting(tasks: Tasks, today: date, handle: Handle) -> bool:
    return any_ancestor(tasks, handle, lambda h: _waiting_itself(tasks, today, h))


def _inactive(tasks: Tasks, today: date, handle: Handle) -> bool:
    return (
        _paused(tasks, today, handle)
        or _done(tasks, today, handle)
        or _archived(tasks, today, handle)
        or _waiting(tasks, today, handle)
    )


def _project(tasks: Tasks, today: date, handle: Handle) -> bool:
    return _data(tasks, handle).kind == TaskKind.PROJECT


def _ready_itself(tasks: Tasks, today: date, handle: Handle) -> bool:
    if _project(tasks, today, handle):
        return any_descendant(tasks, handle, lambda h: _ready_itself(tasks, today, h))
    return (
        _data(tasks, handle).actionable
        and not _inactive(tasks, today, handle)
        and not any_descendant(tasks, handle, lambda h: not _done(tasks, today, h))
    )


def _ready_task_itself(tasks: Tasks, today: date, handle: Handle) -> bool:
    return not _project(tasks, today, handle) and _ready_itself(tasks, today, handle)


def _ready_subtree(tasks: Tasks, today: date, handle: Handle) -> bool:
    return _ready_itself(tasks, today, handle) or any_descendant(
        tasks, handle, lambda h: _ready_itself(tasks, today, h)
    )


def _stalled(tasks: Tasks, today: date, handle: Handle) -> bool:
    return (
        not _ready_itself(tasks, today, handle)
        and not _inactive(tasks, today, handle)
        and (
            _project(tasks, today, handle)
            or not any_descendant(tasks, handle, lambda h: not _inactive(tasks, today, h))
        )
    )


def _stalled_subtree(tasks: Tasks, today: date, handle: Handle) -> bool:
    return _stalled(tasks, today, handle) or any_descendant(
        tasks, handle, lambda h: _stalled(tasks, today, h)
    )


_PROPERTIES: dict[TaskProperty, _Check] = {
    TaskProperty.DONE: _done,
    TaskProperty.NOT_DONE: _not(TaskProperty.DONE),
    TaskProperty.PAUSED: _paused,
    TaskProperty.ARCHIVED: _archived,
    TaskProperty.TODAY: _today,
    TaskProperty.DUE_TODAY: _due_today,
    TaskProperty.OVERDUE: _overdue,
    TaskProperty.TODAY_OR_DUE_TODAY: _today_or_due_today,
    TaskProperty.NON_COMPLETED_TODAY_OR_DUE_TODAY: _non_completed_today_or_due_today,
    TaskProperty.INACTIVE: _inactive,
    TaskProperty.PROJECT: _project,
    TaskProperty.READY_ITSELF: _ready_itself,
    TaskProperty.READY_TASK_ITSELF: _ready_task_itself,
    TaskProperty.READY_SUBTREE: _ready_subtree,
    TaskProperty.STALLED: _stalled,
    TaskProperty.STALLED_SUBTREE: _stalled_subtree,
    TaskProperty.WAITING_ITSELF: _waiting_itself,
    TaskProperty.WAITING: _waiting,
}


def task_is(state: TaskListState, handle: Handle, prop: TaskProperty) -> bool:
    """Evaluate a derived property of one task.

    Args:
        state: Task forest and the current date
        handle: The task to look at
        prop: Property to evaluate

    Returns:
        Whether the task has the property
    """
    return _PROPERTIES[prop](state.tasks, state.today, handle)


# =============================================================================
# Badges
# =============================================================================

_SIMPLE_BADGES: tuple[tuple[TaskProperty, Badge], ...] = (
    (TaskProperty.PROJECT, Badge(id="project", color="project", icon="project", label="Project")),
    (TaskProperty.TODAY, Badge(id="today", color="red", icon="today", label="Today")),
    (TaskProperty.STALLED, Badge(id="stalled", color="orange", icon="stalled", label="Stalled")),
    (TaskProperty.READY_ITSELF, Badge(id="ready", color="green", icon="ready", label="Ready")),
)


def badges(state: TaskListState, handle: Handle) -> tuple[Badge, ...]:
    """Badges for a task: project, today, stalled, ready, waiting, due."""
    result = [badge for prop, badge in _SIMPLE_BADGES if task_is(state, handle, prop)]
    data = _data(state.tasks, handle)

    if data.wait is not None and task_is(state, handle, TaskProperty.WAITING_ITSELF):
        days = (data.wait - state.today).days
        result.append(Badge(id="waiting", color="grey", icon="waiting", label=f"Waiting | {days}d"))

    if data.due is not None:
        days = (data.due - state.today).days
        if days < 0:
            label = f"Overdue | {-days}d"
        elif days == 0:
            label = "Due | Today"
        else:
            label = f"Due | {days}d"
        result.append(Badge(id="due", color="red", icon="due", label=label))

    return tuple(result)
