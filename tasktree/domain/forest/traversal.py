"""Pure queries over ordered forests and their flattened lists.

All functions in this module are pure - no I/O, no side effects.
Tree predicates receive a handle; list predicates receive the list item.
Walks are iterative so deep forests do not hit the recursion limit.
"""

from collections.abc import Callable, Iterable, Sequence

from .models import D, Forest, Handle, IndentedListItem, NodeNotFoundError, TreeNode


# =============================================================================
# Construction and Materialisation
# =============================================================================


def empty() -> Forest:
    """Return a forest with no nodes."""
    return Forest()


def siblings(forest: Forest[D], parent: Handle | None) -> tuple[Handle, ...]:
    """Ordered handles below ``parent`` (the roots for ``None``)."""
    if parent is None:
        return forest.roots
    return forest.children[parent]


def _build(forest: Forest[D], handle: Handle) -> TreeNode[D]:
    built: dict[Handle, TreeNode[D]] = {}
    stack: list[tuple[Handle, bool]] = [(handle, False)]
    while stack:
        current, expanded = stack.pop()
        if expanded:
            built[current] = TreeNode(
                id=current,
                data=forest.data[current],
                children=tuple(built.pop(c) for c in forest.children[current]),
            )
        else:
            stack.append((current, True))
            stack.extend((c, False) for c in forest.children[current])
    return built[handle]


def find_node(forest: Forest[D], handle: Handle) -> TreeNode[D] | None:
    """Materialise the subtree rooted at ``handle``.

    Args:
        forest: The forest to look in
        handle: Handle of the subtree root

    Returns:
        The subtree, or None if the handle is not in the forest
    """
    if handle not in forest:
        return None
    return _build(forest, handle)


def roots(forest: Forest[D]) -> tuple[TreeNode[D], ...]:
    """Materialise every root of the forest."""
    return tuple(_build(forest, r) for r in forest.roots)


def find_parent(forest: Forest[D], handle: Handle) -> TreeNode[D] | None:
    """Return the parent subtree of ``handle``, or None for a root.

    Raises:
        NodeNotFoundError: If ``handle`` is not in the forest.
    """
    if handle not in forest:
        raise NodeNotFoundError(handle)
    parent = forest.parents[handle]
    return None if parent is None else _build(forest, parent)


def depth(forest: Forest[D], handle: Handle) -> int:
    """Number of ancestors of ``handle`` (0 for a root)."""
    result = 0
    parent = forest.parents[handle]
    while parent is not None:
        result += 1
        parent = forest.parents[parent]
    return result


# =============================================================================
# Flattening
# =============================================================================


def to_list(nodes: Iterable[TreeNode[D]], indentation: int = 0) -> tuple[IndentedListItem[D], ...]:
    """Flatten subtrees in pre-order, each node tagged with its depth.

    Args:
        nodes: Subtrees to flatten, in order
        indentation: Depth given to the top-level nodes

    Returns:
        Items in pre-order; a child directly follows its parent or an
        earlier sibling's subtree
    """
    result: list[IndentedListItem[D]] = []
    stack = [(node, indentation) for node in reversed(tuple(nodes))]
    while stack:
        node, level = stack.pop()
        result.append(IndentedListItem(node=node, indentation=level))
        stack.extend((child, level + 1) for child in reversed(node.children))
    return tuple(result)


def flatten_handles(forest: Forest[D]) -> tuple[tuple[Handle, int], ...]:
    """Pre-order handles with depths, without materialising subtrees."""
    result: list[tuple[Handle, int]] = []
    stack = [(h, 0) for h in reversed(forest.roots)]
    while stack:
        handle, level = stack.pop()
        result.append((handle, level))
        stack.extend((c, level + 1) for c in reversed(forest.children[handle]))
    return tuple(result)


def pick_into_list(
    forest: Forest[D],
    pick: Callable[[Handle], bool],
) -> tuple[IndentedListItem[D], ...]:
    """Flatten the subtrees rooted at every picked node.

    The search descends only through nodes that are not picked, so a picked
    node is returned whole together with everything below it.
    """
    picked: list[Handle] = []
    stack = list(reversed(forest.roots))
    while stack:
        handle = stack.pop()
        if pick(handle):
            picked.append(handle)
        else:
            stack.extend(reversed(forest.children[handle]))
    return to_list(_build(forest, h) for h in picked)


def search_and_trim(
    forest: Forest[D],
    pick: Callable[[Handle], bool],
    include: Callable[[Handle], bool],
) -> tuple[IndentedListItem[D], ...]:
    """Flatten the picked subtrees, dropping excluded nodes with their subtrees."""
    return filter_list(pick_into_list(forest, pick), lambda item: include(item.id))


def zoom_into_list(forest: Forest[D], root: Handle | None) -> tuple[IndentedListItem[D], ...]:
    """Flatten everything below ``root`` so its children sit at depth 0.

    With ``root`` None the whole forest is flattened. An unknown root
    yields an empty list.
    """
    if root is None:
        return to_list(roots(forest))
    if root not in forest:
        return ()
    return to_list(_build(forest, c) for c in forest.children[root])


def filter_nodes(forest: Forest[D], predicate: Callable[[Handle], bool]) -> tuple[TreeNode[D], ...]:
    """Every node, in pre-order, for which ``predicate`` holds."""
    return tuple(item.node for item in to_list(roots(forest)) if predicate(item.id))


# =============================================================================
# Flattened List Operations
# =============================================================================


def filter_list(
    items: Sequence[IndentedListItem[D]],
    include: Callable[[IndentedListItem[D]], bool],
) -> tuple[IndentedListItem[D], ...]:
    """Drop every excluded item together with the items indented below it."""
    result: list[IndentedListItem[D]] = []
    skip_below: int | None = None
    for item in items:
        if skip_below is not None and item.indentation > skip_below:
            continue
        skip_below = None
        if include(item):
            result.append(item)
        else:
            skip_below = item.indentation
    return tuple(result)


def _index_of(items: Sequence[IndentedListItem[D]], handle: Handle) -> int | None:
    for index, item in enumerate(items):
        if item.id == handle:
            return index
    return None


def list_subtree(items: Sequence[IndentedListItem[D]], handle: Handle) -> tuple[IndentedListItem[D], ...]:
    """The item for ``handle`` followed by the items indented below it."""
    start = _index_of(items, handle)
    if start is None:
        return ()
    base = items[start].indentation
    end = start + 1
    while end < len(items) and items[end].indentation > base:
        end += 1
    return tuple(items[start:end])


def any_descendant_in_list(
    items: Sequence[IndentedListItem[D]],
    handle: Handle,
    predicate: Callable[[IndentedListItem[D]], bool],
) -> bool:
    """Whether the item or anything indented below it in the list matches."""
    return any(predicate(item) for item in list_subtree(items, handle))


def is_descendant_in_list(
    items: Sequence[IndentedListItem[D]],
    handle: Handle,
    ancestor: Handle,
) -> bool:
    """Whether ``handle`` sits inside the list subtree of ``ancestor``."""
    return any(item.id == handle for item in list_subtree(items, ancestor)[1:])


# =============================================================================
# Ancestry
# =============================================================================


def is_descendant(forest: Forest[D], handle: Handle, ancestor: Handle) -> bool:
    """Whether ``ancestor`` is a strict ancestor of ``handle``."""
    parent = forest.parents.get(handle)
    while parent is not None:
        if parent == ancestor:
            return True
        parent = forest.parents[parent]
    return False


def any_ancestor(forest: Forest[D], handle: Handle, predicate: Callable[[Handle], bool]) -> bool:
    """Whether the node itself or any of its ancestors matches."""
    current: Handle | None = handle
    while current is not None:
        if predicate(current):
            return True
        current = forest.parents[current]
    return False


def any_descendant(forest: Forest[D], handle: Handle, predicate: Callable[[Handle], bool]) -> bool:
    """Whether any strict descendant of the node matches."""
    stack = list(forest.children[handle])
    while stack:
        current = stack.pop()
        if predicate(current):
            return True
        stack.extend(forest.children[current])
    return False
