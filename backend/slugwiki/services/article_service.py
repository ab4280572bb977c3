"""
Asynchronous facade over the article store.

Every store operation is blocking, so each call is shipped to a bounded
thread pool. A worker pushes an application context, runs exactly one
operation (one transaction on one pooled connection) and always removes its
session afterwards, which hands the connection back to the engine pool on
every exit path. Results and exceptions are delivered to the awaiting
coroutine unchanged.

Cancelling the await does not interrupt a transaction that has already
started; it runs to completion or failure on its worker.
"""

from __future__ import annotations

import asyncio
import functools
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, TypeVar

from flask import Flask
from sqlalchemy import Select

from slugwiki.application import articles
from slugwiki.application.articles import SearchResult
from slugwiki.domain.lookup import SlugLookup
from slugwiki.extensions import db
from slugwiki.models.article_revision import ArticleRevision, ArticleRevisionStub

T = TypeVar("T")


class ArticleService:
    """Runs article store operations on a worker pool."""

    def __init__(self, app: Flask, *, max_workers: int) -> None:
        self._app = app
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="slugwiki-db",
        )

    def close(self) -> None:
        """Stop accepting work and wait for running transactions."""
        self._executor.shutdown(wait=True)

    def _run(self, operation: Callable[..., T], kwargs: dict) -> T:
        with self._app.app_context():
            try:
                return operation(**kwargs)
            finally:
                db.session.remove()

    async def _execute(self, operation: Callable[..., T], **kwargs: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor,
            functools.partial(self._run, operation, kwargs),
        )

    async def create_article(
        self,
        target_slug: Optional[str],
        title: str,
        body: str,
        author: Optional[str] = None,
    ) -> ArticleRevision:
        return await self._execute(
            articles.create_article,
            target_slug=target_slug,
            title=title,
            body=body,
            author=author,
        )

    async def update_article(
        self,
        article_id: int,
        base_revision: int,
        title: str,
        body: str,
        author: Optional[str] = None,
    ) -> ArticleRevision:
        return await self._execute(
            articles.update_article,
            article_id=article_id,
            base_revision=base_revision,
            title=title,
            body=body,
            author=author,
        )

    async def get_article_revision(
        self, article_id: int, revision: int
    ) -> Optional[ArticleRevision]:
        return await self._execute(
            articles.get_article_revision,
            article_id=article_id,
            revision=revision,
        )

    async def get_article_slug(self, article_id: int) -> Optional[str]:
        return await self._execute(articles.get_article_slug, article_id=article_id)

    async def lookup_slug(self, slug: str) -> SlugLookup:
        return await self._execute(articles.lookup_slug, slug=slug)

    async def query_article_revision_stubs(
        self, query_filter: Callable[[Select], Select]
    ) -> List[ArticleRevisionStub]:
        return await self._execute(
            articles.query_article_revision_stubs,
            query_filter=query_filter,
        )

    async def get_latest_article_revision_stubs(self) -> List[ArticleRevisionStub]:
        return await self._execute(articles.get_latest_article_revision_stubs)

    async def search_query(
        self,
        query_string: str,
        limit: int,
        offset: int,
        snippet_size: int,
    ) -> List[SearchResult]:
        return await self._execute(
            articles.search_query,
            query_string=query_string,
            limit=limit,
            offset=offset,
            snippet_size=snippet_size,
        )
