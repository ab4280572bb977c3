from typing import Any, Callable, Dict, List, Optional

from slugwiki.utils.pagination import CursorMeta


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    cursor: Optional[CursorMeta] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Wrap a listing as {"items": [...], "pagination": {...}}.

    The change feed passes `cursor`, search passes `limit` and `offset`.
    The sitemap passes neither and gets no "pagination" key.
    """
    response: Dict[str, Any] = {"items": [normalize_fn(item) for item in items]}

    if cursor is not None:
        response["pagination"] = dict(cursor)
    elif limit is not None and offset is not None:
        response["pagination"] = {"limit": limit, "offset": offset}

    return response
