from dataclasses import dataclass
from typing import List

from sqlalchemy import text

from slugwiki.extensions import db
from slugwiki.utils.transaction import transactional

ELLIPSIS = "…"

SEARCH_SQL = text(
    "SELECT title, snippet(article_search, 1, '', '', :ellipsis, :snippet_size) AS snippet, slug "
    "FROM article_search "
    "WHERE article_search MATCH :query "
    "ORDER BY rank "
    "LIMIT :limit OFFSET :offset"
)


@dataclass(frozen=True)
class SearchResult:
    title: str
    snippet: str
    slug: str


def fts_quote(token: str) -> str:
    return '"' + token.replace('"', '""') + '"'


def build_match_query(query_string: str) -> str:
    """
    Translate free text into an FTS5 MATCH expression.

    Every token is quoted so user input can never inject query syntax.
    - no tokens: an empty phrase, which matches nothing
    - one token: prefix match
    - several tokens: proximity match
    """
    words = [fts_quote(word) for word in query_string.split()]

    if len(words) > 1:
        return f"NEAR({' '.join(words)})"
    if len(words) == 1:
        return f"{words[0]}*"
    return '""'


def search_query(
    *,
    query_string: str,
    limit: int,
    offset: int,
    snippet_size: int,
) -> List[SearchResult]:
    with transactional():
        rows = db.session.execute(
            SEARCH_SQL,
            {
                "ellipsis": ELLIPSIS,
                "snippet_size": snippet_size,
                "query": build_match_query(query_string),
                "limit": limit,
                "offset": offset,
            },
        ).all()

    return [SearchResult(title=row.title, snippet=row.snippet, slug=row.slug) for row in rows]
