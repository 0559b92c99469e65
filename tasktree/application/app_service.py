"""Application reducer.

Merges one event into the application state and describes the effects the
platform should perform for it. Everything here is pure: ``today`` is
passed in, and effects are returned as data instead of being executed.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from tasktree.domain.drag import DragState, dropped, update
from tasktree.domain.forest import empty
from tasktree.domain.shared import Err
from tasktree.domain.task import (
    FilterDropId,
    FilterId,
    ListDropId,
    Move,
    MoveToFilter,
    SetStatus,
    SubtaskFilter,
    TaskDragState,
    TaskListState,
    Tasks,
    TaskStatus,
    add,
    edit,
    load_string,
    save_string,
    set_subtask_filter,
)

from .editor import EditorEvent, EditorState, edit_operations_for, load, reload
from .events import (
    CheckEvent,
    ClickLoadButton,
    ClickSaveButton,
    DragTaskEvent,
    DropEvent,
    Event,
    FilterBarEvent,
    HoverEvent,
    LeaveEvent,
    LoadFile,
    SelectEditingTaskEvent,
    SelectFilterEvent,
)
from .text_fields import TextFieldEdit, TextFieldSubmit, text_field_value, update_text_fields

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "tasks.json"


@dataclass(frozen=True)
class AppState:
    """Everything the application remembers between events.

    Attributes:
        tasks: The task forest.
        filter: The selected sidebar filter.
        text_fields: Current value of each text input.
        editor: Snapshot of the task open in the editor, if any.
        task_drag: Drag-and-drop state for tasks.
        subtask_filters: Filter bar settings.
    """

    tasks: Tasks = field(default_factory=empty)
    filter: FilterId = "ready"
    text_fields: Mapping[str, str] = field(default_factory=lambda: {"addTitle": ""})
    editor: EditorState | None = None
    task_drag: TaskDragState = field(default_factory=DragState)
    subtask_filters: tuple[SubtaskFilter, ...] = ()

    def task_list_state(self, today: date) -> TaskListState:
        return TaskListState(
            tasks=self.tasks,
            today=today,
            filter=self.filter,
            subtask_filters=self.subtask_filters,
            task_drag=self.task_drag,
        )


# =============================================================================
# Effects
# =============================================================================


class _Effect(BaseModel):
    model_config = ConfigDict(frozen=True)


class FileDownload(_Effect):
    """Offer ``contents`` to the user as a file called ``name``."""

    type: Literal["fileDownload"] = "fileDownload"
    name: str
    contents: str


class FileUpload(_Effect):
    """Ask the user for a file; the platform answers with a ``LoadFile`` event."""

    type: Literal["fileUpload"] = "fileUpload"


class SaveLocalStorage(_Effect):
    """Persist the serialized forest."""

    type: Literal["saveLocalStorage"] = "saveLocalStorage"
    value: str


Effect = Union[FileDownload, FileUpload, SaveLocalStorage]  # noqa: UP007


# =============================================================================
# Reducer
# =============================================================================

_Handler = Callable[[AppState, TaskListState, Event], AppState]


def _handle_check(app: AppState, before: TaskListState, event: Event) -> AppState:
    if not isinstance(event, CheckEvent):
        return app
    if event.id not in app.tasks:
        logger.warning(f"Ignoring check of unknown task {event.id}")
        return app
    current = app.tasks.data[event.id].status
    value = TaskStatus.ACTIVE if current == TaskStatus.DONE else TaskStatus.DONE
    tasks = edit(before, event.id, [SetStatus(value=value)])
    return replace(app, tasks=tasks, editor=reload(tasks, app.editor))


def _handle_editor(app: AppState, before: TaskListState, event: Event) -> AppState:
    if not isinstance(event, EditorEvent):
        return app
    task_id = event.component.task_id
    if app.editor is None or task_id not in app.tasks:
        logger.warning(f"Ignoring editor input for task {task_id}")
        return app
    tasks = edit(before, task_id, edit_operations_for(event))
    return replace(app, tasks=tasks, editor=reload(tasks, app.editor))


def _handle_select_filter(app: AppState, before: TaskListState, event: Event) -> AppState:
    if not isinstance(event, SelectFilterEvent):
        return app
    return replace(app, filter=event.filter)


def _handle_filter_bar(app: AppState, before: TaskListState, event: Event) -> AppState:
    if not isinstance(event, FilterBarEvent):
        return app
    return replace(app, subtask_filters=set_subtask_filter(app.subtask_filters, event.id, event.state))


def _handle_select_editing_task(app: AppState, before: TaskListState, event: Event) -> AppState:
    if not isinstance(event, SelectEditingTaskEvent):
        return app
    editor = load(app.tasks, event.id)
    if editor is None:
        logger.warning(f"Cannot edit unknown task {event.id}")
    return replace(app, editor=editor)


def _is_drag_event(event: Event) -> bool:
    return isinstance(event, (DragTaskEvent, HoverEvent, LeaveEvent, DropEvent))


def _handle_drop(app: AppState, before: TaskListState, event: Event) -> AppState:
    if not _is_drag_event(event):
        return app
    result = dropped(app.task_drag, event.to_machine_event())
    if result is None:
        return app

    task_id, target = result
    if task_id not in app.tasks:
        logger.warning(f"Ignoring drop of unknown task {task_id}")
        return app

    if isinstance(target, FilterDropId):
        tasks = edit(before, task_id, [MoveToFilter(filter=target.id)])
        return replace(app, tasks=tasks, editor=reload(tasks, app.editor))
    if isinstance(target, ListDropId):
        tasks = edit(before, task_id, [Move(target=target.target)])
        return replace(app, tasks=tasks, editor=reload(tasks, app.editor))
    return app


def _handle_drag_state(app: AppState, before: TaskListState, event: Event) -> AppState:
    if not _is_drag_event(event):
        return app
    return replace(app, task_drag=update(app.task_drag, event.to_machine_event(), lambda drag, drop: True))


def _handle_text_field(app: AppState, before: TaskListState, event: Event) -> AppState:
    if not isinstance(event, (TextFieldEdit, TextFieldSubmit)):
        return app
    result = replace(app, text_fields=update_text_fields(app.text_fields, event))
    if isinstance(event, TextFieldSubmit):
        return replace(result, tasks=add(before, text_field_value(app.text_fields, event.field)))
    return result


def _handle_storage(app: AppState, before: TaskListState, event: Event) -> AppState:
    if not isinstance(event, LoadFile):
        return app
    loaded = load_string(event.contents)
    if isinstance(loaded, Err):
        logger.warning(f"Could not load {event.name}: {loaded.error}")
        return app
    logger.info(f"Loaded {len(loaded.value)} tasks from {event.name}")
    return AppState(tasks=loaded.value)


_HANDLERS: tuple[_Handler, ...] = (
    _handle_check,
    _handle_editor,
    _handle_select_filter,
    _handle_filter_bar,
    _handle_select_editing_task,
    _handle_drop,
    _handle_drag_state,
    _handle_text_field,
    _handle_storage,
)


def update_app(state: AppState, event: Event, today: date) -> AppState:
    """Apply one event to the application state.

    Every edit is resolved against the state as it was before the event,
    so a drop lands where the user saw the drop target.

    Args:
        state: Current state
        event: The event to apply
        today: Current date

    Returns:
        The next state; events that refer to tasks that no longer exist
        leave it unchanged
    """
    logger.debug(f"Handling {event.tag} event")
    before = state.task_list_state(today)
    app = state
    for handler in _HANDLERS:
        app = handler(app, before, event)
    return app


def _effects_for(state: AppState, next_state: AppState, event: Event, export_name: str) -> list[Effect]:
    if isinstance(event, ClickSaveButton):
        return [FileDownload(name=export_name, contents=save_string(state.tasks))]
    if isinstance(event, ClickLoadButton):
        return [FileUpload()]
    if next_state.tasks != state.tasks:
        return [SaveLocalStorage(value=save_string(next_state.tasks))]
    return []


def effects(
    state: AppState,
    event: Event,
    today: date,
    export_name: str = DEFAULT_EXPORT_NAME,
) -> list[Effect]:
    """Effects to perform for an event applied to ``state``.

    Saving offers the current forest as a download and loading asks for a
    file. Any other event that changes the forest persists the result.
    """
    return _effects_for(state, update_app(state, event, today), event, export_name)


def dispatch(
    state: AppState,
    event: Event,
    today: date,
    export_name: str = DEFAULT_EXPORT_NAME,
) -> tuple[AppState, list[Effect]]:
    """The next state and the effects of one event, in a single pass."""
    next_state = update_app(state, event, today)
    return next_state, _effects_for(state, next_state, event, export_name)
