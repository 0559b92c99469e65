"""Task editor: a snapshot of the edited task and its form projection.

Component values travel as strings, the way a form delivers them. Values
that do not parse (an unknown status, a malformed date) produce no edit
operation, so the stored value stays as it was.
"""

import logging
import re
from datetime import date
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from tasktree.domain.forest import Handle
from tasktree.domain.shared import Err, Ok, Result
from tasktree.domain.task import (
    EditOperation,
    SetActionable,
    SetDue,
    SetKind,
    SetPlanned,
    SetStatus,
    SetTitle,
    SetWait,
    TaskKind,
    Tasks,
    TaskStatus,
)

logger = logging.getLogger(__name__)

EditorProperty = Literal["title", "status", "kind", "actionable", "planned", "wait", "due"]

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class EditorState(BaseModel):
    """Snapshot of the task being edited."""

    model_config = ConfigDict(frozen=True)

    id: Handle
    title: str
    status: TaskStatus
    kind: TaskKind
    actionable: bool
    planned: date | None
    wait: date | None
    due: date | None


class ComponentId(BaseModel):
    model_config = ConfigDict(frozen=True)

    task_id: Handle
    property: EditorProperty


class PickerOption(BaseModel):
    value: str
    label: str
    active: bool


class TextComponent(BaseModel):
    type: Literal["text"] = "text"
    id: ComponentId
    value: str


class PickerComponent(BaseModel):
    type: Literal["picker"] = "picker"
    id: ComponentId
    options: list[PickerOption]


class DateComponent(BaseModel):
    type: Literal["date"] = "date"
    id: ComponentId
    value: str


Component = Union[TextComponent, PickerComponent, DateComponent]  # noqa: UP007


class EditorGroup(BaseModel):
    title: str
    components: list[Component]


class EditorView(BaseModel):
    """Groups of components, arranged in sections."""

    sections: list[list[EditorGroup]]


class EditorEvent(BaseModel):
    """A form component reported a new value."""

    model_config = ConfigDict(frozen=True)

    tag: Literal["editor"] = "editor"
    type: Literal["component"] = "component"
    component: ComponentId
    value: str


def load(tasks: Tasks, task_id: Handle) -> EditorState | None:
    """Snapshot a task for editing; None if it does not exist."""
    data = tasks.data.get(task_id)
    if data is None:
        return None
    return EditorState(
        id=task_id,
        title=data.title,
        status=data.status,
        kind=data.kind,
        actionable=data.actionable,
        planned=data.planned,
        wait=data.wait,
        due=data.due,
    )


def reload(tasks: Tasks, editor: EditorState | None) -> EditorState | None:
    """Refresh an open editor from the current tasks."""
    return None if editor is None else load(tasks, editor.id)


def parse_date_input(value: str) -> Result[date | None, str]:
    """Parse a ``YYYY-MM-DD`` form value; the empty string clears the date."""
    if value == "":
        return Ok(None)
    if not _DATE_PATTERN.match(value):
        return Err(f"Not a date: {value!r}")
    try:
        return Ok(date.fromisoformat(value))
    except ValueError as e:
        return Err(f"Not a date: {value!r} ({e})")


def _format_date(value: date | None) -> str:
    return "" if value is None else value.isoformat()


def _picker(task_id: Handle, prop: EditorProperty, options: list[tuple[str, str]], current: str) -> PickerComponent:
    return PickerComponent(
        id=ComponentId(task_id=task_id, property=prop),
        options=[PickerOption(value=value, label=label, active=value == current) for value, label in options],
    )


def view(editor: EditorState | None) -> EditorView | None:
    """Form projection of the open editor, or None when nothing is open."""
    if editor is None:
        return None

    def date_group(title: str, prop: EditorProperty, value: date | None) -> EditorGroup:
        component = DateComponent(id=ComponentId(task_id=editor.id, property=prop), value=_format_date(value))
        return EditorGroup(title=title, components=[component])

    kind_groups = [
        EditorGroup(
            title="Type",
            components=[_picker(editor.id, "kind", [("task", "Task"), ("project", "Project")], editor.kind.value)],
        )
    ]
    if editor.kind != TaskKind.PROJECT:
        kind_groups.append(
            EditorGroup(
                title="Actionable",
                components=[
                    _picker(editor.id, "actionable", [("yes", "Yes"), ("no", "No")], "yes" if editor.actionable else "no")
                ],
            )
        )

    return EditorView(
        sections=[
            [
                EditorGroup(
                    title="Title",
                    components=[TextComponent(id=ComponentId(task_id=editor.id, property="title"), value=editor.title)],
                )
            ],
            kind_groups,
            [
                EditorGroup(
                    title="Status",
                    components=[
                        _picker(
                            editor.id,
                            "status",
                            [("active", "Active"), ("paused", "Paused"), ("done", "Completed")],
                            editor.status.value,
                        )
                    ],
                )
            ],
            [
                date_group("Planned", "planned", editor.planned),
                date_group("Wait", "wait", editor.wait),
                date_group("Due", "due", editor.due),
            ],
        ]
    )


def edit_operations_for(event: EditorEvent) -> list[EditOperation]:
    """Translate a component value into edit operations."""
    prop = event.component.property
    value = event.value

    if prop == "title":
        return [SetTitle(value=value)]
    if prop == "status":
        if value not in {s.value for s in TaskStatus}:
            logger.debug(f"Ignoring unknown status {value!r}")
            return []
        return [SetStatus(value=TaskStatus(value))]
    if prop == "kind":
        if value not in {k.value for k in TaskKind}:
            logger.debug(f"Ignoring unknown task type {value!r}")
            return []
        return [SetKind(value=TaskKind(value))]
    if prop == "actionable":
        if value not in ("yes", "no"):
            logger.debug(f"Ignoring actionable value {value!r}")
            return []
        return [SetActionable(value=value == "yes")]

    parsed = parse_date_input(value)
    if isinstance(parsed, Err):
        logger.debug(f"Ignoring {prop} input: {parsed.error}")
        return []
    setter = {"planned": SetPlanned, "wait": SetWait, "due": SetDue}[prop]
    return [setter(value=parsed.value)]
