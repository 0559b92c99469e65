"""Valid drop locations below a row of a flattened list."""

from collections.abc import Sequence

from .models import D, Forest, Handle, IndentedListItem, ListInsertLocation
from .traversal import is_descendant, is_descendant_in_list


def valid_insert_locations_below(
    forest: Forest[D],
    items: Sequence[IndentedListItem[D]],
    source: Handle,
    after_index: int,
) -> tuple[ListInsertLocation, ...]:
    """Every indentation at which ``source`` may be dropped below a row.

    The range is bounded below by the first following row that is not part
    of the source's own subtree (the dropped item may not adopt it) and above
    by one level deeper than the target row. Dropping inside the source's
    own subtree is limited to the source's current depth, and the row just
    above the source offers the source's own positions.

    Args:
        forest: The forest the list was flattened from
        items: The displayed list
        source: Handle of the dragged node
        after_index: Index of the row to drop below; -1 for the top

    Returns:
        Locations anchored on the target row, shallowest first
    """
    if after_index == -1:
        return (ListInsertLocation(previous_sibling=None, indentation=0),)

    if after_index + 1 < len(items) and items[after_index + 1].id == source:
        anchor = items[after_index].id
        return tuple(
            ListInsertLocation(previous_sibling=anchor, indentation=location.indentation)
            for location in valid_insert_locations_below(forest, items, source, after_index + 1)
        )

    target = items[after_index]
    preceding = items[after_index - 1].indentation if after_index > 0 else -1
    following = next(
        (item for item in items[after_index + 1 :] if not is_descendant_in_list(items, item.id, source)),
        None,
    )
    minimum = following.indentation if following is not None else 0

    if is_descendant(forest, target.id, source):
        source_item = next((item for item in items if item.id == source), None)
        maximum = source_item.indentation if source_item is not None else 0
    elif target.id == source:
        maximum = max(preceding + 1, target.indentation)
    else:
        maximum = target.indentation + 1

    return tuple(
        ListInsertLocation(previous_sibling=target.id, indentation=indentation)
        for indentation in range(minimum, maximum + 1)
    )
