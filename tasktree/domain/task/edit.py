"""Task edit operations.

Edits form a closed set of small immutable operations. ``edit`` folds a
sequence of them over the forest; ``None`` entries are skipped so callers
can pass optional operations without filtering them first.
"""

from collections.abc import Sequence
from dataclasses import replace
from datetime import date, timedelta
from typing import Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict

from tasktree.domain.forest import (
    Handle,
    NodeNotFoundError,
    TreeNode,
    insert,
    is_descendant,
    merge,
    move_into,
    move_item_in_sublist_of_tree,
)

from .filters import filter_tasks_into_list, with_filter
from .models import (
    DropTargetHandle,
    FilterId,
    ProjectFilter,
    TaskData,
    TaskKind,
    TaskListState,
    Tasks,
    TaskStatus,
)


class _Operation(BaseModel):
    model_config = ConfigDict(frozen=True)


class SetTitle(_Operation):
    type: Literal["setTitle"] = "setTitle"
    value: str


class SetStatus(_Operation):
    type: Literal["setStatus"] = "setStatus"
    value: TaskStatus


class SetKind(_Operation):
    type: Literal["setKind"] = "setKind"
    value: TaskKind


class SetActionable(_Operation):
    type: Literal["setActionable"] = "setActionable"
    value: bool


class SetArchived(_Operation):
    type: Literal["setArchived"] = "setArchived"
    value: bool


class SetPlanned(_Operation):
    type: Literal["setPlanned"] = "setPlanned"
    value: date | None


class SetWait(_Operation):
    type: Literal["setWait"] = "setWait"
    value: date | None


class SetDue(_Operation):
    type: Literal["setDue"] = "setDue"
    value: date | None


class Move(_Operation):
    """Drop the task at a position of a displayed list."""

    type: Literal["move"] = "move"
    target: DropTargetHandle


class MoveToFilter(_Operation):
    """Change the task so that it shows up under a filter."""

    type: Literal["moveToFilter"] = "moveToFilter"
    filter: FilterId


SetOperation = Union[  # noqa: UP007
    SetTitle, SetStatus, SetKind, SetActionable, SetArchived, SetPlanned, SetWait, SetDue
]
EditOperation = Union[SetOperation, Move, MoveToFilter]  # noqa: UP007

_SET_FIELDS: dict[type, str] = {
    SetTitle: "title",
    SetStatus: "status",
    SetKind: "kind",
    SetActionable: "actionable",
    SetArchived: "archived",
    SetPlanned: "planned",
    SetWait: "wait",
    SetDue: "due",
}


def new_handle(tasks: Tasks) -> Handle:
    """A fresh eight-character handle not yet used in ``tasks``."""
    while True:
        handle = uuid4().hex[:8]
        if handle not in tasks:
            return handle


def add(state: TaskListState, title: str, handle: Handle | None = None) -> Tasks:
    """Insert a new task as the last root, then move it into the selected filter.

    Args:
        state: Current tasks, date and selected filter
        title: Title of the new task
        handle: Handle to use; a fresh one is generated when omitted

    Returns:
        The updated forest
    """
    handle = handle or new_handle(state.tasks)
    tasks = insert(state.tasks, TreeNode(id=handle, data=TaskData(title=title)))
    return edit(replace(state, tasks=tasks), handle, [MoveToFilter(filter=state.filter)])


def _filter_update(filter_id: FilterId, today: date) -> SetOperation | None:
    if filter_id == "ready":
        return SetActionable(value=True)
    if filter_id == "done":
        return SetStatus(value=TaskStatus.DONE)
    if filter_id == "stalled":
        return SetActionable(value=False)
    if filter_id == "not-done":
        return SetStatus(value=TaskStatus.ACTIVE)
    if filter_id == "archive":
        return SetArchived(value=True)
    if filter_id == "today":
        return SetPlanned(value=today)
    if filter_id == "paused":
        return SetStatus(value=TaskStatus.PAUSED)
    if filter_id == "waiting":
        return SetWait(value=today + timedelta(days=1))
    return None


def _move_to_filter(state: TaskListState, tasks: Tasks, handle: Handle, filter_id: FilterId) -> Tasks:
    if isinstance(filter_id, ProjectFilter):
        project = filter_id.project
        if project not in tasks or project == handle or is_descendant(tasks, project, handle):
            return tasks
        return move_into(tasks, handle, project)

    unarchive = SetArchived(value=False) if filter_id != "archive" else None
    return edit(replace(state, tasks=tasks), handle, [_filter_update(filter_id, state.today), unarchive])


def _move(state: TaskListState, tasks: Tasks, handle: Handle, target: DropTargetHandle) -> Tasks:
    moved = _move_to_filter(state, tasks, handle, target.filter)
    sublist = filter_tasks_into_list(with_filter(state, target.filter))
    root = target.filter.project if isinstance(target.filter, ProjectFilter) else None
    return move_item_in_sublist_of_tree(moved, sublist, handle, target.location, sublist_root=root)


def edit(
    state: TaskListState,
    handle: Handle,
    operations: Sequence[EditOperation | None],
) -> Tasks:
    """Apply edit operations to one task, in order.

    ``Move`` resolves its location against the list the user was looking
    at, i.e. the target filter's list computed from ``state.tasks`` before
    any of the operations were applied.

    Args:
        state: Current tasks, date, filter and filter bar settings
        handle: The task to edit
        operations: Operations to apply; None entries are ignored

    Returns:
        The updated forest

    Raises:
        NodeNotFoundError: If the task is not in the forest.
    """
    if handle not in state.tasks:
        raise NodeNotFoundError(handle)

    tasks = state.tasks
    for operation in operations:
        if operation is None:
            continue
        if isinstance(operation, MoveToFilter):
            tasks = _move_to_filter(state, tasks, handle, operation.filter)
        elif isinstance(operation, Move):
            tasks = _move(state, tasks, handle, operation.target)
        else:
            field = _SET_FIELDS[type(operation)]
            tasks = merge(tasks, [(handle, tasks.data[handle].model_copy(update={field: operation.value}))])
    return tasks
