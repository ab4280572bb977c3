"""
Path dispatcher: maps a request path and query string to a resource.

Paths whose first segment starts with "_" are reserved for system
resources and matched against fixed rules. Every other path names an
article by slug and is resolved through the article service.
"""

from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import unquote_to_bytes

from slugwiki.domain.exceptions import DecodeError, ValidationError
from slugwiki.domain.lookup import Hit, Miss, Redirect
from slugwiki.domain.slug import slugify
from slugwiki.utils.pagination import parse_pagination
from slugwiki.utils.query import int_param, parse_query_string
from .assets import EMPTY_ASSET_TABLE, AssetTable
from .resources import (
    ArticleRedirectResource,
    ArticleResource,
    ArticleRevisionResource,
    ChangesResource,
    DiffResource,
    NewArticleResource,
    Resource,
    SearchResource,
    SitemapResource,
)

RESERVED_PREFIX = "_"
MAX_SEARCH_RESULTS = 100
MAX_SNIPPET_SIZE = 64


def split_one(path: str) -> Tuple[str, Optional[str]]:
    """
    Split off the first path segment and percent-decode it.

    The remainder is returned raw, or None when there is no "/" at all.
    "slug/" yields ("slug", "") which is distinct from ("slug", None).
    """
    head, sep, tail = path.partition("/")

    try:
        head = unquote_to_bytes(head).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Path segment is not valid UTF-8: {head!r}") from exc

    return head, (tail if sep else None)


def _parse_id(raw: str) -> Optional[int]:
    if not raw.isdecimal():
        return None
    return int(raw)


class WikiLookup:
    """
    Resolves `(path, query)` to a Resource, or None for "not found".

    `service` needs an async `lookup_slug(slug)`; `assets` is the table built
    at startup by build_asset_table.
    """

    def __init__(
        self,
        service,
        assets: AssetTable = EMPTY_ASSET_TABLE,
        *,
        changes_page_size: int = 30,
        search_page_size: int = 10,
        snippet_size: int = 8,
    ):
        self._service = service
        self._assets = assets
        self._changes_page_size = changes_page_size
        self._search_page_size = search_page_size
        self._snippet_size = snippet_size

    async def lookup(self, path: str, query: Optional[str] = None) -> Optional[Resource]:
        if not path.startswith("/"):
            raise ValueError(f"Path must be absolute: {path!r}")

        path = path[1:]

        if path.startswith(RESERVED_PREFIX):
            return self._reserved_lookup(path, query)

        return await self._article_lookup(path, query)

    # ------------------------------------------------------------------
    # Reserved paths
    # ------------------------------------------------------------------

    def _reserved_lookup(self, path: str, query: Optional[str]) -> Optional[Resource]:
        head, tail = split_one(path)

        if head == "_assets" and tail is not None:
            return self._asset_lookup(tail)

        if head == "_changes" and tail is None:
            return self._changes(query)

        if head == "_new" and tail is None:
            return NewArticleResource(slug=None)

        if head == "_sitemap" and tail is None:
            return SitemapResource()

        if head == "_search" and tail is None:
            return self._search(query)

        if head == "_diff" and tail is not None:
            return self._diff(tail, query)

        if head == "_revisions" and tail is not None:
            return self._revision(tail)

        return None

    def _asset_lookup(self, path: str):
        name, tail = split_one(path)

        if tail is not None:
            return None

        resource_fn = self._assets.get(name)
        if resource_fn is None:
            return None

        return resource_fn()

    def _changes(self, query: Optional[str]) -> ChangesResource:
        params = parse_query_string(query)
        pagination = parse_pagination(params, default_limit=self._changes_page_size)

        return ChangesResource(
            pagination=pagination,
            article_id=int_param(params, "article_id", minimum=1),
            author=params.get("author") or None,
        )

    def _search(self, query: Optional[str]) -> SearchResource:
        params = parse_query_string(query)

        return SearchResource(
            query_string=params.get("q", ""),
            limit=int_param(
                params,
                "limit",
                default=self._search_page_size,
                minimum=1,
                maximum=MAX_SEARCH_RESULTS,
            ),
            offset=int_param(params, "offset", default=0, minimum=0),
            snippet_size=int_param(
                params,
                "snippet_size",
                default=self._snippet_size,
                minimum=1,
                maximum=MAX_SNIPPET_SIZE,
            ),
        )

    def _diff(self, path: str, query: Optional[str]) -> Optional[DiffResource]:
        raw_id, tail = split_one(path)
        article_id = _parse_id(raw_id)

        if tail is not None or article_id is None:
            return None

        params = parse_query_string(query)
        from_revision = int_param(params, "from", minimum=1)
        to_revision = int_param(params, "to", minimum=1)

        if from_revision is None or to_revision is None:
            raise ValidationError("Both 'from' and 'to' revisions are required")

        return DiffResource(
            article_id=article_id,
            from_revision=from_revision,
            to_revision=to_revision,
        )

    def _revision(self, path: str) -> Optional[ArticleRevisionResource]:
        raw_id, tail = split_one(path)
        if tail is None:
            return None

        raw_revision, rest = split_one(tail)
        if rest is not None:
            return None

        article_id = _parse_id(raw_id)
        revision = _parse_id(raw_revision)

        if article_id is None or revision is None:
            return None

        return ArticleRevisionResource(article_id=article_id, revision=revision)

    # ------------------------------------------------------------------
    # Article paths
    # ------------------------------------------------------------------

    async def _article_lookup(self, path: str, query: Optional[str]) -> Optional[Resource]:
        slug, tail = split_one(path)

        if tail is not None:
            # No URLs of the form /slug/...
            return None

        # Normalize user-typed and bookmarked slugs
        canonical = slugify(slug)
        if canonical != slug:
            return ArticleRedirectResource(slug=canonical)

        found = await self._service.lookup_slug(slug)

        if isinstance(found, Miss):
            return NewArticleResource(slug=slug)

        if isinstance(found, Hit):
            return ArticleResource(
                article_id=found.article_id,
                revision=found.revision,
                edit=query == "edit",
            )

        if isinstance(found, Redirect):
            return ArticleRedirectResource(slug=found.slug)

        raise TypeError(f"Unexpected slug lookup result: {found!r}")
