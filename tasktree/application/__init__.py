"""Application layer for tasktree.

Turns user events into new application state and effect descriptions, and
projects state into views. Nothing in this package performs I/O; effects
are executed by the platform in ``tasktree.infrastructure``.

Modules:
    events - The event union and its JSON parser
    app_service - Application state, reducer and effects
    editor - Task editor snapshot and form projection
    text_fields - Text input state
    view - The renderable application view

Example usage:
    >>> from datetime import date
    >>> from tasktree.application import AppState, dispatch, parse_event
    >>>
    >>> today = date(2020, 3, 15)
    >>> state, effects = dispatch(
    ...     AppState(), parse_event('{"tag": "textField", "type": "edit", "field": "addTitle", "value": "Buy milk"}'), today
    ... )
    >>> state, effects = dispatch(
    ...     state, parse_event('{"tag": "textField", "type": "submit", "field": "addTitle"}'), today
    ... )
    >>> len(state.tasks)
    1
"""

from tasktree.application.app_service import (
    DEFAULT_EXPORT_NAME,
    AppState,
    Effect,
    FileDownload,
    FileUpload,
    SaveLocalStorage,
    dispatch,
    effects,
    update_app,
)
from tasktree.application.editor import (
    Component,
    ComponentId,
    DateComponent,
    EditorEvent,
    EditorGroup,
    EditorState,
    EditorView,
    PickerComponent,
    PickerOption,
    TextComponent,
    edit_operations_for,
    parse_date_input,
)
from tasktree.application.events import (
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
    parse_event,
)
from tasktree.application.text_fields import TextFieldEdit, TextFieldSubmit, text_field_value, update_text_fields
from tasktree.application.view import (
    AddTaskView,
    DotIndicator,
    FilterView,
    SideBarSection,
    TextIndicator,
    View,
    view,
)

__all__ = [
    # State and reducer
    "AppState",
    "update_app",
    "effects",
    "dispatch",
    "DEFAULT_EXPORT_NAME",
    # Effects
    "Effect",
    "FileDownload",
    "FileUpload",
    "SaveLocalStorage",
    # Events
    "Event",
    "parse_event",
    "CheckEvent",
    "SelectFilterEvent",
    "SelectEditingTaskEvent",
    "FilterBarEvent",
    "DragTaskEvent",
    "HoverEvent",
    "LeaveEvent",
    "DropEvent",
    "ClickSaveButton",
    "ClickLoadButton",
    "LoadFile",
    "TextFieldEdit",
    "TextFieldSubmit",
    "EditorEvent",
    # Editor
    "EditorState",
    "EditorView",
    "EditorGroup",
    "Component",
    "ComponentId",
    "TextComponent",
    "PickerComponent",
    "PickerOption",
    "DateComponent",
    "edit_operations_for",
    "parse_date_input",
    # Text fields
    "update_text_fields",
    "text_field_value",
    # View
    "View",
    "view",
    "SideBarSection",
    "FilterView",
    "TextIndicator",
    "DotIndicator",
    "AddTaskView",
]
