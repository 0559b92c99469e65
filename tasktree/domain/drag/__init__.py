"""Drag-and-drop state machine."""

from .machine import Drag, DragEvent, Dragging, DragState, Drop, Hover, Leave, dropped, update

__all__ = [
    "DragState",
    "Dragging",
    "DragEvent",
    "Drag",
    "Hover",
    "Leave",
    "Drop",
    "update",
    "dropped",
]
