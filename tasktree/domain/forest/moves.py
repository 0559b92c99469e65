"""Structural edits of ordered forests.

Every function returns a new forest. Lookups of handles that must exist
raise ``NodeNotFoundError``; moves that cannot be resolved against the
flattened list leave the forest unchanged.
"""

from collections.abc import Callable, Iterable, Sequence

from .models import (
    D,
    Forest,
    ForestError,
    Handle,
    IndentedListItem,
    ListInsertLocation,
    NodeNotFoundError,
    TreeLocation,
    TreeNode,
)
from .traversal import depth, find_node, flatten_handles, is_descendant, siblings


# =============================================================================
# Registration Helpers
# =============================================================================


def _register(
    node: TreeNode[D],
    parent: Handle | None,
    data: dict[Handle, D],
    children: dict[Handle, tuple[Handle, ...]],
    parents: dict[Handle, Handle | None],
) -> None:
    stack = [(node, parent)]
    while stack:
        current, current_parent = stack.pop()
        if current.id in data:
            raise ForestError(f"Handle {current.id!r} is already in the forest")
        data[current.id] = current.data
        children[current.id] = tuple(c.id for c in current.children)
        parents[current.id] = current_parent
        stack.extend((c, current.id) for c in current.children)


def _deregister(
    handle: Handle,
    data: dict[Handle, D],
    children: dict[Handle, tuple[Handle, ...]],
    parents: dict[Handle, Handle | None],
) -> None:
    stack = [handle]
    while stack:
        current = stack.pop()
        stack.extend(children.pop(current))
        del data[current]
        del parents[current]


def _replace_siblings(
    forest: Forest[D],
    parent: Handle | None,
    new_siblings: Sequence[Handle],
    children: dict[Handle, tuple[Handle, ...]],
) -> tuple[Handle, ...]:
    """Store ``new_siblings`` under ``parent`` and return the new roots."""
    if parent is None:
        return tuple(new_siblings)
    children[parent] = tuple(new_siblings)
    return forest.roots


def reposition(items: Sequence[Handle], source: int, target: int) -> tuple[Handle, ...]:
    """Move ``items[source]`` so it lands in front of ``items[target]``.

    ``target`` is an insertion index in terms of the list before removal, so
    ``target == len(items)`` moves the item to the end.
    """
    item = items[source]
    rest = [*items[:source], *items[source + 1 :]]
    rest.insert(target - 1 if target > source else target, item)
    return tuple(rest)


# =============================================================================
# Node Operations
# =============================================================================


def insert(forest: Forest[D], node: TreeNode[D]) -> Forest[D]:
    """Register ``node`` and its subtree as the last root.

    Raises:
        ForestError: If any handle of the subtree is already present.
    """
    data, children, parents = dict(forest.data), dict(forest.children), dict(forest.parents)
    _register(node, None, data, children, parents)
    return Forest(
        roots=(*forest.roots, node.id),
        data=data,
        children=children,
        parents=parents,
    )


def update_node(
    forest: Forest[D],
    handle: Handle,
    update: Callable[[TreeNode[D]], TreeNode[D]],
) -> Forest[D]:
    """Replace the subtree at ``handle`` by ``update(subtree)``.

    When the children are unchanged only the payload is swapped; otherwise
    the old subtree is deregistered and the new one registered under the
    same parent, at the same position.

    Raises:
        NodeNotFoundError: If ``handle`` is not in the forest.
        ForestError: If the new subtree reuses a handle found elsewhere.
    """
    node = find_node(forest, handle)
    if node is None:
        raise NodeNotFoundError(handle)
    updated = update(node)

    if updated.id == handle and updated.children == node.children:
        return merge(forest, [(handle, updated.data)])

    parent = forest.parents[handle]
    data, children, parents = dict(forest.data), dict(forest.children), dict(forest.parents)
    _deregister(handle, data, children, parents)
    _register(updated, parent, data, children, parents)
    new_siblings = [updated.id if h == handle else h for h in siblings(forest, parent)]
    new_roots = _replace_siblings(forest, parent, new_siblings, children)
    return Forest(roots=new_roots, data=data, children=children, parents=parents)


def merge(forest: Forest[D], patches: Iterable[tuple[Handle, D]]) -> Forest[D]:
    """Replace the payloads of several nodes at once.

    Raises:
        NodeNotFoundError: If a patched handle is not in the forest.
    """
    data = dict(forest.data)
    for handle, payload in patches:
        if handle not in data:
            raise NodeNotFoundError(handle)
        data[handle] = payload
    return Forest(roots=forest.roots, data=data, children=forest.children, parents=forest.parents)


# =============================================================================
# Moves
# =============================================================================


def move_node_in_tree(forest: Forest[D], handle: Handle, to: TreeLocation) -> Forest[D]:
    """Detach ``handle`` and reinsert it at ``to``.

    Within the same parent the index is interpreted before removal, matching
    ``reposition``; across parents it is an index into the new parent's
    children.
    """
    source_parent = forest.parents[handle]
    children = dict(forest.children)
    parents = dict(forest.parents)

    if source_parent == to.parent:
        current = siblings(forest, source_parent)
        new_roots = _replace_siblings(
            forest,
            source_parent,
            reposition(current, current.index(handle), min(to.index, len(current))),
            children,
        )
        return Forest(roots=new_roots, data=forest.data, children=children, parents=parents)

    old = [h for h in siblings(forest, source_parent) if h != handle]
    new_roots = _replace_siblings(forest, source_parent, old, children)
    target = list(new_roots if to.parent is None else children[to.parent])
    target.insert(min(to.index, len(target)), handle)
    if to.parent is None:
        new_roots = tuple(target)
    else:
        children[to.parent] = tuple(target)
    parents[handle] = to.parent
    return Forest(roots=new_roots, data=forest.data, children=children, parents=parents)


def move_into(forest: Forest[D], handle: Handle, parent: Handle) -> Forest[D]:
    """Make ``handle`` the last child of ``parent``.

    Raises:
        NodeNotFoundError: If either handle is not in the forest.
        ForestError: If ``parent`` is ``handle`` or one of its descendants.
    """
    for required in (handle, parent):
        if required not in forest:
            raise NodeNotFoundError(required)
    if parent == handle or is_descendant(forest, parent, handle):
        raise ForestError(f"Cannot move {handle!r} into its own subtree")
    return move_node_in_tree(forest, handle, TreeLocation(parent, len(forest.children[parent])))


def list_insert_location_to_tree_location(
    forest: Forest[D],
    location: ListInsertLocation,
) -> TreeLocation | None:
    """Resolve a flattened-list location into a parent and child index.

    Walking up from ``previous_sibling``, the first row at exactly the
    requested indentation (before any shallower row) becomes the new previous
    sibling. Failing that, the shallower row where the walk stopped becomes
    the parent if it sits exactly one level up.

    Returns:
        The tree location, or None when no anchor exists for the request
    """
    if location.previous_sibling is None:
        return TreeLocation(None, 0)
    if location.previous_sibling not in forest or location.indentation < 0:
        return None

    flat = flatten_handles(forest)
    start = next(i for i, (h, _) in enumerate(flat) if h == location.previous_sibling)
    for handle, level in reversed(flat[: start + 1]):
        if level == location.indentation:
            parent = forest.parents[handle]
            return TreeLocation(parent, siblings(forest, parent).index(handle) + 1)
        if level < location.indentation:
            if level == location.indentation - 1:
                return TreeLocation(handle, 0)
            return None
    return None


def move_item_in_tree(forest: Forest[D], source: Handle, location: ListInsertLocation) -> Forest[D]:
    """Move ``source`` to a location given against the whole flattened forest.

    A location anchored on the source itself is re-anchored on the row above
    it. Unknown sources, unresolvable locations and moves into the source's
    own subtree leave the forest unchanged.
    """
    if source not in forest:
        return forest

    if location.previous_sibling == source:
        flat = flatten_handles(forest)
        index = next(i for i, (h, _) in enumerate(flat) if h == source)
        previous = flat[index - 1][0] if index > 0 else None
        return move_item_in_tree(forest, source, ListInsertLocation(previous, location.indentation))

    target = list_insert_location_to_tree_location(forest, location)
    if target is None:
        return forest
    if target.parent is not None and (
        target.parent == source or is_descendant(forest, target.parent, source)
    ):
        return forest
    return move_node_in_tree(forest, source, target)


def move_item_in_sublist_of_tree(
    forest: Forest[D],
    sublist: Sequence[IndentedListItem[D]],
    source: Handle,
    location: ListInsertLocation,
    sublist_root: Handle | None = None,
) -> Forest[D]:
    """Move ``source`` to a location given against a filtered sublist.

    The sublist indentation is translated into a real depth using the
    previous sibling's depth in the forest. A location at the top of the
    sublist makes the item the first root, or the first child of
    ``sublist_root`` when the sublist is the inside of that node.
    """
    if location.previous_sibling is None:
        if sublist_root is None or sublist_root not in forest:
            return move_item_in_tree(forest, source, ListInsertLocation(None, 0))
        return move_item_in_tree(
            forest,
            source,
            ListInsertLocation(sublist_root, depth(forest, sublist_root) + 1),
        )

    anchor = next((item for item in sublist if item.id == location.previous_sibling), None)
    if anchor is None or anchor.id not in forest:
        return forest
    real_indentation = depth(forest, anchor.id) - anchor.indentation + location.indentation
    return move_item_in_tree(
        forest,
        source,
        ListInsertLocation(location.previous_sibling, real_indentation),
    )
