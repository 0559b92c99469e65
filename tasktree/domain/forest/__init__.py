"""Ordered forest - an arena of nodes keyed by handle.

Nodes are reordered and reparented through a flattened, indented-list
view of the forest, which is also what the drag-and-drop layer works
against. All exports are pure.

Key Types:
    Forest - Roots, payloads, children and parent links
    TreeNode - A materialised subtree
    IndentedListItem - A flattened node with its depth
    ListInsertLocation - Drop position against a flattened list
    TreeLocation - Drop position against the forest

Errors:
    ForestError - Impossible structural request
    NodeNotFoundError - Unknown handle
"""

from .locations import valid_insert_locations_below
from .models import (
    Forest,
    ForestError,
    Handle,
    IndentedListItem,
    ListInsertLocation,
    NodeNotFoundError,
    TreeLocation,
    TreeNode,
)
from .moves import (
    insert,
    list_insert_location_to_tree_location,
    merge,
    move_into,
    move_item_in_sublist_of_tree,
    move_item_in_tree,
    move_node_in_tree,
    reposition,
    update_node,
)
from .traversal import (
    any_ancestor,
    any_descendant,
    any_descendant_in_list,
    depth,
    empty,
    filter_list,
    filter_nodes,
    find_node,
    find_parent,
    flatten_handles,
    is_descendant,
    is_descendant_in_list,
    list_subtree,
    pick_into_list,
    roots,
    search_and_trim,
    siblings,
    to_list,
    zoom_into_list,
)

__all__ = [
    # Types
    "Forest",
    "TreeNode",
    "IndentedListItem",
    "ListInsertLocation",
    "TreeLocation",
    "Handle",
    # Errors
    "ForestError",
    "NodeNotFoundError",
    # Queries
    "empty",
    "siblings",
    "find_node",
    "find_parent",
    "roots",
    "depth",
    "to_list",
    "flatten_handles",
    "pick_into_list",
    "search_and_trim",
    "zoom_into_list",
    "filter_nodes",
    "filter_list",
    "list_subtree",
    "any_descendant_in_list",
    "is_descendant_in_list",
    "is_descendant",
    "any_ancestor",
    "any_descendant",
    # Edits
    "insert",
    "update_node",
    "merge",
    "reposition",
    "move_node_in_tree",
    "move_into",
    "list_insert_location_to_tree_location",
    "move_item_in_tree",
    "move_item_in_sublist_of_tree",
    # Drop locations
    "valid_insert_locations_below",
]
