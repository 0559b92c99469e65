"""User events consumed by the reducer.

Events are tagged JSON objects. ``tag`` selects the event family and, for
families with several members, ``type`` selects the member, e.g.::

    {"tag": "check", "id": "a1b2c3d4"}
    {"tag": "drag", "type": "hover", "target": {"type": "filter", "id": "done"}}
    {"tag": "storage", "type": "loadFile", "name": "tasks.json", "contents": "[]"}
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from tasktree.domain.drag import Drag, Drop, Hover, Leave
from tasktree.domain.forest import Handle
from tasktree.domain.task import DropId, FilterId, SubtaskFilterId, SubtaskFilterState

from .editor import EditorEvent
from .text_fields import TextFieldEdit, TextFieldSubmit


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)


class CheckEvent(_Event):
    """Toggle a task between done and active."""

    tag: Literal["check"] = "check"
    id: Handle


class SelectFilterEvent(_Event):
    tag: Literal["selectFilter"] = "selectFilter"
    filter: FilterId


class SelectEditingTaskEvent(_Event):
    tag: Literal["selectEditingTask"] = "selectEditingTask"
    id: Handle


class FilterBarEvent(_Event):
    tag: Literal["filterBar"] = "filterBar"
    type: Literal["set"] = "set"
    id: SubtaskFilterId
    state: SubtaskFilterState


# =============================================================================
# Drag and Drop
# =============================================================================


class DragTaskEvent(_Event):
    tag: Literal["drag"] = "drag"
    type: Literal["drag"] = "drag"
    id: Handle
    x: float = 0
    y: float = 0

    def to_machine_event(self) -> Drag[Handle]:
        return Drag(id=self.id, x=self.x, y=self.y)


class HoverEvent(_Event):
    tag: Literal["drag"] = "drag"
    type: Literal["hover"] = "hover"
    target: DropId

    def to_machine_event(self) -> Hover[DropId]:
        return Hover(target=self.target)


class LeaveEvent(_Event):
    tag: Literal["drag"] = "drag"
    type: Literal["leave"] = "leave"
    target: DropId

    def to_machine_event(self) -> Leave[DropId]:
        return Leave(target=self.target)


class DropEvent(_Event):
    tag: Literal["drag"] = "drag"
    type: Literal["drop"] = "drop"

    def to_machine_event(self) -> Drop:
        return Drop()


# =============================================================================
# Storage
# =============================================================================


class ClickSaveButton(_Event):
    tag: Literal["storage"] = "storage"
    type: Literal["clickSaveButton"] = "clickSaveButton"


class ClickLoadButton(_Event):
    tag: Literal["storage"] = "storage"
    type: Literal["clickLoadButton"] = "clickLoadButton"


class LoadFile(_Event):
    """A file picked by the user, with its contents."""

    tag: Literal["storage"] = "storage"
    type: Literal["loadFile"] = "loadFile"
    name: str
    contents: str


TextFieldEvent = Annotated[Union[TextFieldEdit, TextFieldSubmit], Field(discriminator="type")]  # noqa: UP007
DragEvent = Annotated[  # noqa: UP007
    Union[DragTaskEvent, HoverEvent, LeaveEvent, DropEvent], Field(discriminator="type")
]
StorageEvent = Annotated[  # noqa: UP007
    Union[ClickSaveButton, ClickLoadButton, LoadFile], Field(discriminator="type")
]

Event = Annotated[  # noqa: UP007
    Union[
        CheckEvent,
        SelectFilterEvent,
        SelectEditingTaskEvent,
        FilterBarEvent,
        TextFieldEvent,
        EditorEvent,
        DragEvent,
        StorageEvent,
    ],
    Field(discriminator="tag"),
]

_EVENT = TypeAdapter(Event)


def parse_event(raw: str | bytes) -> Event:
    """Parse one event from JSON.

    Raises:
        pydantic.ValidationError: If the JSON is not a known event.
    """
    return _EVENT.validate_json(raw)
