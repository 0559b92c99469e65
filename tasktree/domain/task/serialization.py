"""Persisted task format.

Tasks are stored as a JSON array of nested records; nesting in
``children`` encodes the forest structure and array order encodes sibling
order. Older files used ``done: bool`` instead of ``status``, omitted
fields that did not exist yet, and stored dates as ISO date-times; all of
those still load.
"""

import json
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator, model_validator

from tasktree.domain.forest import ForestError, TreeNode, empty, insert, roots
from tasktree.domain.shared import Err, Ok, Result

from .models import TaskData, TaskKind, Tasks, TaskStatus


class TaskRecord(BaseModel):
    """One task in the persisted format."""

    id: str
    title: str = ""
    status: TaskStatus = TaskStatus.ACTIVE
    type: TaskKind = TaskKind.TASK
    action: bool = False
    archived: bool = False
    planned: date | None = None
    wait: date | None = None
    due: date | None = None
    children: list["TaskRecord"] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _legacy_done_flag(cls, value: Any) -> Any:
        if isinstance(value, dict) and "status" not in value and "done" in value:
            value = {**value, "status": TaskStatus.DONE if value["done"] else TaskStatus.ACTIVE}
        return value

    @field_validator("planned", "wait", "due", mode="before")
    @classmethod
    def _date_from_datetime(cls, value: Any) -> Any:
        # Date-times were written in UTC for local midnight; convert back to the local day.
        if isinstance(value, str) and "T" in value:
            return datetime.fromisoformat(value).astimezone().date()
        return value

    def to_node(self) -> TreeNode[TaskData]:
        return TreeNode(
            id=self.id,
            data=TaskData(
                title=self.title,
                status=self.status,
                kind=self.type,
                actionable=self.action,
                archived=self.archived,
                planned=self.planned,
                wait=self.wait,
                due=self.due,
            ),
            children=tuple(child.to_node() for child in self.children),
        )

    @classmethod
    def from_node(cls, node: TreeNode[TaskData]) -> "TaskRecord":
        data = node.data
        return cls(
            id=node.id,
            title=data.title,
            status=data.status,
            type=data.kind,
            action=data.actionable,
            archived=data.archived,
            planned=data.planned,
            wait=data.wait,
            due=data.due,
            children=[cls.from_node(child) for child in node.children],
        )


_RECORDS = TypeAdapter(list[TaskRecord])


def save_string(tasks: Tasks) -> str:
    """Serialize the forest to the persisted JSON format."""
    records = [TaskRecord.from_node(node) for node in roots(tasks)]
    return json.dumps(_RECORDS.dump_python(records, mode="json"))


def load_string(contents: str) -> Result[Tasks, str]:
    """Parse the persisted JSON format.

    Args:
        contents: File contents

    Returns:
        Ok(forest) if the contents are a valid task list, Err(str) otherwise
    """
    try:
        records = _RECORDS.validate_python(json.loads(contents))
    except json.JSONDecodeError as e:
        return Err(f"Invalid JSON: {e}")
    except (ValidationError, ValueError) as e:
        return Err(f"Invalid task data: {e}")

    tasks: Tasks = empty()
    try:
        for record in records:
            tasks = insert(tasks, record.to_node())
    except ForestError as e:
        return Err(f"Invalid task structure: {e}")
    return Ok(tasks)
