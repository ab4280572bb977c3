# slugwiki/utils/pagination.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, TypedDict

from sqlalchemy import Select

from slugwiki.domain.exceptions import ValidationError
from slugwiki.models.article_revision import ArticleRevision, ArticleRevisionStub
from slugwiki.utils.query import int_param

MAX_PAGE_SIZE = 100


class CursorMeta(TypedDict):
    """
    Cursor pagination metadata for the change feed.

    next_cursor: pass as `before` to fetch older changes
    prev_cursor: pass as `after` to fetch newer changes
    """
    has_more: bool
    next_cursor: Optional[str]
    prev_cursor: Optional[str]


@dataclass(frozen=True)
class Pagination:
    """
    Position in the change feed, by revision sequence number.

    At most one of `after` and `before` is set.
    """
    after: Optional[int] = None
    before: Optional[int] = None
    limit: int = 30


def parse_pagination(params: Dict[str, str], *, default_limit: int) -> Pagination:
    after = int_param(params, "after", minimum=0)
    before = int_param(params, "before", minimum=0)

    if after is not None and before is not None:
        raise ValidationError("Only one of 'after' and 'before' may be given")

    limit = int_param(
        params,
        "limit",
        default=default_limit,
        minimum=1,
        maximum=MAX_PAGE_SIZE,
    )
    return Pagination(after=after, before=before, limit=limit)


def changes_filter(
    pagination: Pagination,
    *,
    article_id: Optional[int] = None,
    author: Optional[str] = None,
) -> Callable[[Select], Select]:
    """
    Build the query filter for one page of the change feed.

    Fetches limit + 1 rows so paginate_changes can detect continuation.
    """
    sequence_number = ArticleRevision.sequence_number

    def apply(query: Select) -> Select:
        if article_id is not None:
            query = query.where(ArticleRevision.article_id == article_id)

        if author is not None:
            query = query.where(ArticleRevision.author == author)

        if pagination.after is not None:
            return (
                query.where(sequence_number > pagination.after)
                .order_by(sequence_number.asc())
                .limit(pagination.limit + 1)
            )

        if pagination.before is not None:
            query = query.where(sequence_number < pagination.before)

        return query.order_by(sequence_number.desc()).limit(pagination.limit + 1)

    return apply


def paginate_changes(
    rows: List[ArticleRevisionStub],
    pagination: Pagination,
) -> Tuple[List[ArticleRevisionStub], CursorMeta]:
    """
    Trim the look-ahead row and derive cursors from the boundary rows.

    Items are always returned newest first.
    """
    has_more = len(rows) > pagination.limit
    items = rows[: pagination.limit]

    if pagination.after is not None:
        items.reverse()

    next_cursor: Optional[str] = None
    prev_cursor: Optional[str] = None

    if items:
        newest, oldest = items[0], items[-1]

        if pagination.after is not None:
            # Rows at or below `after` exist, so there is always an older page
            next_cursor = str(oldest.sequence_number)
            if has_more:
                prev_cursor = str(newest.sequence_number)
        else:
            if has_more:
                next_cursor = str(oldest.sequence_number)
            if pagination.before is not None:
                prev_cursor = str(newest.sequence_number)

    return items, {
        "has_more": has_more,
        "next_cursor": next_cursor,
        "prev_cursor": prev_cursor,
    }
