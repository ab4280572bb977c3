import asyncio

import pytest

from slugwiki.domain.exceptions import ConflictError, ValidationError
from slugwiki.domain.lookup import Hit, Miss, Redirect
from slugwiki.extensions import db
from slugwiki.models import ArticleRevision


class TestArticleService:
    def test_create_and_read_back(self, service):
        async def scenario():
            created = await service.create_article(None, "Hello World", "Body", "alice")
            fetched = await service.get_article_revision(created.article_id, 1)
            slug = await service.get_article_slug(created.article_id)
            return created, fetched, slug

        created, fetched, slug = asyncio.run(scenario())

        assert created.slug == "hello-world"
        assert fetched.body == "Body"
        assert fetched.author == "alice"
        assert slug == "hello-world"

    def test_results_are_readable_after_worker_finishes(self, service):
        rev = asyncio.run(service.create_article(None, "Detached", "still here"))

        assert rev.title == "Detached"
        assert rev.body == "still here"
        assert rev.created is not None

    def test_concurrent_creations_get_distinct_slugs(self, service):
        async def scenario():
            return await asyncio.gather(
                *(service.create_article(None, "Hello World", "") for _ in range(5))
            )

        revisions = asyncio.run(scenario())

        assert sorted(rev.slug for rev in revisions) == sorted(
            ["hello-world", "hello-world-2", "hello-world-3", "hello-world-4", "hello-world-5"]
        )
        assert len({rev.article_id for rev in revisions}) == 5

    def test_concurrent_edits_from_same_base_conflict(self, service):
        async def scenario():
            first = await service.create_article(None, "Contested", "v1")
            results = await asyncio.gather(
                *(
                    service.update_article(first.article_id, 1, "Contested", f"edit {n}")
                    for n in range(4)
                ),
                return_exceptions=True,
            )
            return first, results

        first, results = asyncio.run(scenario())

        winners = [r for r in results if isinstance(r, ArticleRevision)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]

        assert len(winners) == 1
        assert len(conflicts) == 3
        assert winners[0].revision == 2
        for conflict in conflicts:
            assert conflict.current.revision == 2
            assert conflict.current.body == winners[0].body

    def test_errors_propagate_unchanged(self, service):
        with pytest.raises(ValidationError):
            asyncio.run(service.create_article(None, "", ""))

        with pytest.raises(ValidationError):
            asyncio.run(service.update_article(42, 1, "Title", ""))

    def test_lookup_slug(self, service):
        async def scenario():
            rev = await service.create_article(None, "Foo", "")
            await service.update_article(rev.article_id, 1, "Bar", "")
            return rev, await asyncio.gather(
                service.lookup_slug("foo"),
                service.lookup_slug("bar"),
                service.lookup_slug("nope"),
            )

        rev, (old, current, missing) = asyncio.run(scenario())

        assert old == Redirect(slug="bar")
        assert current == Hit(article_id=rev.article_id, revision=2)
        assert missing == Miss()

    def test_sitemap_and_search(self, service):
        async def scenario():
            await service.create_article(None, "Zebra", "striped banana")
            await service.create_article(None, "Aardvark", "ant eater")
            stubs = await service.get_latest_article_revision_stubs()
            hits = await service.search_query("banana", 10, 0, 8)
            return stubs, hits

        stubs, hits = asyncio.run(scenario())

        assert [s.title for s in stubs] == ["Aardvark", "Zebra"]
        assert [h.slug for h in hits] == ["zebra"]

    def test_connections_are_returned_to_pool(self, app, service):
        async def scenario():
            rev = await service.create_article(None, "Pool", "")
            calls = []
            for n in range(20):
                calls.append(service.lookup_slug("pool"))
                calls.append(service.get_article_revision(rev.article_id, 1))
                calls.append(service.update_article(rev.article_id, 1, "Pool", str(n)))
            await asyncio.gather(*calls, return_exceptions=True)

        asyncio.run(scenario())

        with app.app_context():
            assert db.engine.pool.checkedout() == 0

    def test_concurrent_creations_for_same_target_slug(self, service):
        async def scenario():
            return await asyncio.gather(
                service.create_article("hello-world", "Hello World", ""),
                service.create_article("hello-world", "Hello World", ""),
                return_exceptions=True,
            )

        results = asyncio.run(scenario())

        assert all(isinstance(rev, ArticleRevision) for rev in results)
        assert sorted(rev.slug for rev in results) == ["hello-world", "hello-world-2"]
