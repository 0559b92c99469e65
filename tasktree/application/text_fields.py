"""Text field state: the current value of each named input."""

from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict

TextFieldId = Literal["addTitle"]


class TextFieldEdit(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: Literal["textField"] = "textField"
    type: Literal["edit"] = "edit"
    field: TextFieldId
    value: str


class TextFieldSubmit(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: Literal["textField"] = "textField"
    type: Literal["submit"] = "submit"
    field: TextFieldId


def update_text_fields(
    fields: Mapping[str, str],
    event: TextFieldEdit | TextFieldSubmit,
) -> dict[str, str]:
    """Store an edited value, or clear the field on submit."""
    if isinstance(event, TextFieldEdit):
        return {**fields, event.field: event.value}
    return {**fields, event.field: ""}


def text_field_value(fields: Mapping[str, str], field: TextFieldId) -> str:
    return fields.get(field, "")
