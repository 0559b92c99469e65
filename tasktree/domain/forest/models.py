"""Ordered forest value objects.

A forest is an arena of payloads keyed by handle, plus ordered children
and parent links. Every value in this module is immutable; operations in
``traversal`` and ``moves`` return new values and share unchanged payloads.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, TypeVar

D = TypeVar("D")

Handle = str


class ForestError(LookupError):
    """A structural request the forest cannot satisfy."""


class NodeNotFoundError(ForestError):
    """Raised when an operation names a handle that is not in the forest."""

    def __init__(self, handle: Handle) -> None:
        super().__init__(f"No node with handle {handle!r}")
        self.handle = handle


def _frozen(mapping: Mapping) -> Mapping:
    return mapping if isinstance(mapping, MappingProxyType) else MappingProxyType(dict(mapping))


@dataclass(frozen=True, eq=False)
class Forest(Generic[D]):
    """An ordered collection of trees.

    Invariants:
        - every handle in ``data`` has an entry in ``children`` and ``parents``
        - a handle appears exactly once, either in ``roots`` or in the
          children of exactly one parent
        - ``parents[h]`` is ``None`` iff ``h`` is in ``roots``

    Attributes:
        roots: Ordered handles of the top-level nodes.
        data: Payload per handle.
        children: Ordered child handles per handle.
        parents: Parent handle per handle, ``None`` for roots.
    """

    roots: tuple[Handle, ...] = ()
    data: Mapping[Handle, D] = field(default_factory=dict)
    children: Mapping[Handle, tuple[Handle, ...]] = field(default_factory=dict)
    parents: Mapping[Handle, Handle | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "roots", tuple(self.roots))
        object.__setattr__(self, "data", _frozen(self.data))
        object.__setattr__(self, "children", _frozen(self.children))
        object.__setattr__(self, "parents", _frozen(self.parents))

    def __contains__(self, handle: object) -> bool:
        return handle in self.data

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Forest):
            return NotImplemented
        return (
            self.roots == other.roots
            and dict(self.data) == dict(other.data)
            and dict(self.children) == dict(other.children)
            and dict(self.parents) == dict(other.parents)
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class TreeNode(Generic[D]):
    """A materialised subtree: a handle, its payload and its children."""

    id: Handle
    data: D
    children: tuple["TreeNode[D]", ...] = ()


@dataclass(frozen=True)
class IndentedListItem(Generic[D]):
    """A node of a flattened forest together with its depth.

    Only the order of the list and the indentations carry structure; the
    ``node.children`` of an item are the children it had in the forest it
    was flattened from.
    """

    node: TreeNode[D]
    indentation: int

    @property
    def id(self) -> Handle:
        return self.node.id

    @property
    def data(self) -> D:
        return self.node.data


@dataclass(frozen=True)
class ListInsertLocation:
    """Where to put an item, expressed against a flattened list.

    Attributes:
        previous_sibling: Handle of the row the item should follow, or
            ``None`` for the very top of the list.
        indentation: Requested depth of the moved item.
    """

    previous_sibling: Handle | None
    indentation: int


@dataclass(frozen=True)
class TreeLocation:
    """A position in the forest: index among the children of ``parent``."""

    parent: Handle | None
    index: int
