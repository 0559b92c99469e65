"""Task domain - status derivation, filters, edits and the task list view.

All exports are pure (no I/O, no side effects). Tasks live in an ordered
forest (see ``tasktree.domain.forest``) keyed by handle.

Key Types:
    TaskData - Task payload (title, status, kind, flags, dates)
    TaskStatus / TaskKind - Payload enumerations
    FilterId - Scalar, project or section filter
    SubtaskFilter - Filter bar setting
    DropId / DropTargetHandle - Drag and drop targets
    TaskListState - Inputs of every filter computation

Status:
    task_is - Evaluate a derived property
    badges - Badges for a task

Filters:
    filter_tasks_into_list - Rows shown for a filter
    active_projects / active_project_list / active_subprojects
    counts - Sidebar counters
    subfilters / is_subfilter / filter_title

Edits:
    add - Create a task in the selected filter
    edit - Apply edit operations

Persisted format:
    save_string / load_string - JSON task records

View:
    task_list_view - Sections with rows, drop targets and indicators
    filter_bar_view - Filter bar entries
"""

from .edit import (
    EditOperation,
    Move,
    MoveToFilter,
    SetActionable,
    SetArchived,
    SetDue,
    SetKind,
    SetPlanned,
    SetStatus,
    SetTitle,
    SetWait,
    add,
    edit,
    new_handle,
)
from .filters import (
    ActiveProject,
    ActiveSubprojects,
    Counts,
    active_project_list,
    active_projects,
    active_subprojects,
    counts,
    expand_filter,
    filter_tasks_into_list,
    filter_title,
    is_subfilter,
    is_subtask_filter_relevant,
    is_task_included_in_filter,
    set_subtask_filter,
    subfilters,
    with_filter,
)
from .models import (
    Badge,
    DropId,
    DropTargetHandle,
    FilterDropId,
    FilterId,
    ListDropId,
    ProjectFilter,
    ScalarFilter,
    SectionFilter,
    SectionId,
    SubtaskFilter,
    SubtaskFilterId,
    SubtaskFilterState,
    TaskData,
    TaskDragState,
    TaskKind,
    TaskListState,
    Tasks,
    TaskStatus,
)
from .serialization import TaskRecord, load_string, save_string
from .status import TaskProperty, badges, task_is
from .views import (
    DropIndicatorView,
    DropTargetView,
    FilterBarEntry,
    FilterBarView,
    TaskListSection,
    TaskView,
    filter_bar_view,
    task_list_view,
)

__all__ = [
    # Models
    "TaskData",
    "TaskStatus",
    "TaskKind",
    "Tasks",
    "TaskListState",
    "Badge",
    # Filters
    "FilterId",
    "ScalarFilter",
    "ProjectFilter",
    "SectionFilter",
    "SectionId",
    "SubtaskFilter",
    "SubtaskFilterId",
    "SubtaskFilterState",
    # Drag and drop
    "DropId",
    "FilterDropId",
    "ListDropId",
    "DropTargetHandle",
    "TaskDragState",
    # Status
    "TaskProperty",
    "task_is",
    "badges",
    # Filter engine
    "filter_tasks_into_list",
    "is_task_included_in_filter",
    "is_subtask_filter_relevant",
    "set_subtask_filter",
    "active_projects",
    "active_project_list",
    "active_subprojects",
    "ActiveProject",
    "ActiveSubprojects",
    "counts",
    "Counts",
    "subfilters",
    "expand_filter",
    "is_subfilter",
    "filter_title",
    "with_filter",
    # Edits
    "EditOperation",
    "SetTitle",
    "SetStatus",
    "SetKind",
    "SetActionable",
    "SetArchived",
    "SetPlanned",
    "SetWait",
    "SetDue",
    "Move",
    "MoveToFilter",
    "add",
    "edit",
    "new_handle",
    # Persisted format
    "TaskRecord",
    "save_string",
    "load_string",
    # View
    "TaskView",
    "DropTargetView",
    "DropIndicatorView",
    "TaskListSection",
    "FilterBarEntry",
    "FilterBarView",
    "task_list_view",
    "filter_bar_view",
]
