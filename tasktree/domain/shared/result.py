"""Ok/Err results for failures that are part of normal operation.

Reading the task store, parsing an uploaded file and parsing a date typed
into the editor can all fail on bad input. Those functions return
``Ok(value)`` or ``Err(message)`` and leave it to the caller whether the
message is logged, shown or ignored.

Example usage:
    >>> def parse_indentation(text: str) -> Result[int, str]:
    ...     if not text.isdigit():
    ...         return Err(f"Not an indentation: {text!r}")
    ...     return Ok(int(text))
    ...
    >>> flat_map(Ok("2"), parse_indentation)
    Ok(value=2)
    >>> flat_map(Err("no input"), parse_indentation)
    Err(error='no input')
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failure; ``error`` is a message meant for the log or the user."""

    error: E


Result = Union[Ok[T], Err[E]]  # noqa: UP007


def flat_map(result: Ok[T] | Err[E], fn: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
    """Feed the value of an Ok into the next fallible step; an Err passes through."""
    if isinstance(result, Ok):
        return fn(result.value)
    return result
