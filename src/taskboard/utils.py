from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

NO_MATCH_HINT = "Try adjusting your filters"
EMPTY_BOARD_HINT = "Create your first task to get started"


def empty_hint(count: int, filtered: bool) -> Optional[str]:
    """Message for an empty list view; None when there is something to show."""
    if count:
        return None
    return NO_MATCH_HINT if filtered else EMPTY_BOARD_HINT


# PUBLIC_INTERFACE
def list_envelope(
    items: Union[Sequence[Any], Iterable[Any]],
    total: int,
    filtered: bool,
) -> Dict[str, Any]:
    """
    Build the standard envelope for the task list endpoint.

    Args:
        items: The tasks in the view, already filtered and sorted.
        total: Size of the whole collection (ignoring filters).
        filtered: Whether search, status or priority narrowed the view.

    Returns:
        Dict with keys: items, count, total, filtered, empty_hint.
    """
    materialized: List[Any] = list(items) if not isinstance(items, list) else items
    return {
        "items": materialized,
        "count": len(materialized),
        "total": int(total),
        "filtered": bool(filtered),
        "empty_hint": empty_hint(len(materialized), filtered),
    }
