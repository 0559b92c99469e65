"""Drag-and-drop state machine.

The machine only tracks what is being dragged and which compatible drop
target is under the pointer. It is generic over the dragged-id type and the
drop-id type; callers decide compatibility and what a drop means.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

DragT = TypeVar("DragT")
DropT = TypeVar("DropT")


@dataclass(frozen=True)
class Dragging(Generic[DragT]):
    """The dragged item and the last reported pointer position."""

    id: DragT
    x: float
    y: float


@dataclass(frozen=True)
class DragState(Generic[DragT, DropT]):
    """Current drag, if any, and the drop target being hovered, if any."""

    dragging: Dragging[DragT] | None = None
    hovering: DropT | None = None


@dataclass(frozen=True)
class Drag(Generic[DragT]):
    id: DragT
    x: float
    y: float


@dataclass(frozen=True)
class Hover(Generic[DropT]):
    target: DropT


@dataclass(frozen=True)
class Leave(Generic[DropT]):
    target: DropT


@dataclass(frozen=True)
class Drop:
    pass


DragEvent = Union[Drag[DragT], Hover[DropT], Leave[DropT], Drop]  # noqa: UP007


def update(
    state: DragState[DragT, DropT],
    event: Drag[DragT] | Hover[DropT] | Leave[DropT] | Drop,
    is_compatible: Callable[[DragT, DropT], bool],
) -> DragState[DragT, DropT]:
    """Advance the drag state by one event.

    Args:
        state: Current state
        event: Pointer event
        is_compatible: Whether a dragged id may be dropped on a target

    Returns:
        The next state; a drop clears both fields
    """
    if isinstance(event, Drop):
        return DragState()

    dragging = state.dragging
    if isinstance(event, Drag):
        dragging = Dragging(id=event.id, x=event.x, y=event.y)

    hovering = state.hovering
    if isinstance(event, Hover):
        if dragging is not None and is_compatible(dragging.id, event.target):
            hovering = event.target
    elif isinstance(event, Leave):
        hovering = None

    return DragState(dragging=dragging, hovering=hovering)


def dropped(
    state: DragState[DragT, DropT],
    event: Drag[DragT] | Hover[DropT] | Leave[DropT] | Drop,
) -> tuple[DragT, DropT] | None:
    """The (dragged, target) pair a drop event completes, if any."""
    if isinstance(event, Drop) and state.dragging is not None and state.hovering is not None:
        return state.dragging.id, state.hovering
    return None
