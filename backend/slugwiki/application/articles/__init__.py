from .create_article import create_article
from .update_article import update_article
from .lookup_slug import lookup_slug
from .queries import (
    get_article_revision,
    get_article_slug,
    get_latest_article_revision_stubs,
    query_article_revision_stubs,
)
from .search import SearchResult, build_match_query, search_query

__all__ = [
    "create_article",
    "update_article",
    "lookup_slug",
    "get_article_revision",
    "get_article_slug",
    "get_latest_article_revision_stubs",
    "query_article_revision_stubs",
    "SearchResult",
    "build_match_query",
    "search_query",
]
