"""Task domain models.

Task payloads, filter identifiers and drag-and-drop identifiers. Uses
Pydantic so that everything here can be read from and written to JSON by
the outer layers.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from tasktree.domain.drag import DragState
from tasktree.domain.forest import Forest, Handle, ListInsertLocation


class TaskStatus(str, Enum):
    """Workflow status of a task."""

    ACTIVE = "active"
    PAUSED = "paused"
    DONE = "done"


class TaskKind(str, Enum):
    """Whether a node is a plain task or a project grouping other tasks."""

    TASK = "task"
    PROJECT = "project"


class TaskData(BaseModel):
    """Payload of a task node.

    The handle is the node's key in the forest and is not repeated here.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    status: TaskStatus = TaskStatus.ACTIVE
    kind: TaskKind = TaskKind.TASK
    actionable: bool = False
    archived: bool = False
    planned: date | None = None
    wait: date | None = None
    due: date | None = None


Tasks = Forest[TaskData]


# =============================================================================
# Filters
# =============================================================================

ScalarFilter = Literal[
    "all",
    "today",
    "ready",
    "done",
    "stalled",
    "not-done",
    "archive",
    "paused",
    "waiting",
]

SectionId = Literal["actions", "tasks", "activeProjects", "archive"]


class ProjectFilter(BaseModel):
    """Everything inside one project."""

    model_config = ConfigDict(frozen=True)

    type: Literal["project"] = "project"
    project: Handle


class SectionFilter(BaseModel):
    """A group of filters shown together as titled sections."""

    model_config = ConfigDict(frozen=True)

    type: Literal["section"] = "section"
    section: SectionId


FilterId = Union[ScalarFilter, ProjectFilter, SectionFilter]  # noqa: UP007


SubtaskFilterId = Literal["paused", "done", "ready"]
SubtaskFilterState = Literal["include", "exclude"]


class SubtaskFilter(BaseModel):
    """A filter bar setting applied on top of the selected filter."""

    model_config = ConfigDict(frozen=True)

    id: SubtaskFilterId
    state: SubtaskFilterState


# =============================================================================
# Drag and Drop Identifiers
# =============================================================================


class DropTargetHandle(BaseModel):
    """A drop position in the list displayed for ``filter``."""

    model_config = ConfigDict(frozen=True)

    location: ListInsertLocation
    filter: FilterId


class FilterDropId(BaseModel):
    """Dropping onto a sidebar filter."""

    model_config = ConfigDict(frozen=True)

    type: Literal["filter"] = "filter"
    id: FilterId


class ListDropId(BaseModel):
    """Dropping between rows of a task list."""

    model_config = ConfigDict(frozen=True)

    type: Literal["list"] = "list"
    target: DropTargetHandle


DropId = Union[FilterDropId, ListDropId]  # noqa: UP007

TaskDragState = DragState[Handle, DropId]


class Badge(BaseModel):
    """A status badge shown next to a task title."""

    model_config = ConfigDict(frozen=True)

    id: str
    color: str
    icon: str
    label: str


@dataclass(frozen=True)
class TaskListState:
    """Everything the task list computations read.

    Attributes:
        tasks: The task forest.
        today: The calendar date used by every date-based property.
        filter: The selected filter.
        subtask_filters: Active filter bar settings.
        task_drag: Current drag state, used for drop targets and indicators.
    """

    tasks: Tasks
    today: date
    filter: FilterId = "ready"
    subtask_filters: tuple[SubtaskFilter, ...] = ()
    task_drag: TaskDragState = field(default_factory=DragState)
