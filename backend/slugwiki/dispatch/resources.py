"""
The closed set of resources a request path can resolve to.

Each variant is a plain immutable value; the presentation layer decides how
to turn it into a response.
"""

import os
from dataclasses import dataclass
from typing import Optional, Union

from slugwiki.utils.pagination import Pagination


@dataclass(frozen=True)
class StaticAsset:
    name: str
    path: str
    mime: str
    checksum: Optional[str] = None

    @property
    def filename(self) -> str:
        """Content-addressed name, e.g. style-<checksum>.css"""
        if not self.checksum:
            return self.name
        stem, ext = os.path.splitext(self.name)
        return f"{stem}-{self.checksum}{ext}"


@dataclass(frozen=True)
class ArticleResource:
    article_id: int
    revision: int
    edit: bool = False


@dataclass(frozen=True)
class ArticleRevisionResource:
    article_id: int
    revision: int


@dataclass(frozen=True)
class ArticleRedirectResource:
    slug: str

    @property
    def location(self) -> str:
        return f"/{self.slug}"


@dataclass(frozen=True)
class NewArticleResource:
    # None when the composer was opened without a target slug (/_new)
    slug: Optional[str] = None


@dataclass(frozen=True)
class ChangesResource:
    pagination: Pagination
    article_id: Optional[int] = None
    author: Optional[str] = None


@dataclass(frozen=True)
class DiffResource:
    article_id: int
    from_revision: int
    to_revision: int


@dataclass(frozen=True)
class SitemapResource:
    pass


@dataclass(frozen=True)
class SearchResource:
    query_string: str
    limit: int
    offset: int
    snippet_size: int


@dataclass(frozen=True)
class StaticAssetResource:
    asset: StaticAsset


Resource = Union[
    ArticleResource,
    ArticleRevisionResource,
    ArticleRedirectResource,
    NewArticleResource,
    ChangesResource,
    DiffResource,
    SitemapResource,
    SearchResource,
    StaticAssetResource,
]
