from typing import Callable, List, Optional

from sqlalchemy import Select, select

from slugwiki.extensions import db
from slugwiki.models.article_revision import ArticleRevision, ArticleRevisionStub
from slugwiki.utils.transaction import transactional


def get_article_revision(*, article_id: int, revision: int) -> Optional[ArticleRevision]:
    with transactional():
        return ArticleRevision.query.filter_by(
            article_id=article_id,
            revision=revision,
        ).first()


def get_article_slug(*, article_id: int) -> Optional[str]:
    with transactional():
        return db.session.execute(
            select(ArticleRevision.slug).where(
                ArticleRevision.article_id == article_id,
                ArticleRevision.latest.is_(True),
            )
        ).scalar_one_or_none()


def query_article_revision_stubs(
    *,
    query_filter: Callable[[Select], Select],
) -> List[ArticleRevisionStub]:
    """
    Run a caller-composed query over revision stubs (no bodies).

    `query_filter` receives a select of every revision and returns it
    refined with predicates, ordering and limits.
    """
    with transactional():
        query = query_filter(select(*ArticleRevisionStub.columns()))
        rows = db.session.execute(query).all()

    return [ArticleRevisionStub.from_row(row) for row in rows]


def latest_by_title(query: Select) -> Select:
    return query.where(ArticleRevision.latest.is_(True)).order_by(
        ArticleRevision.title.asc()
    )


def get_latest_article_revision_stubs() -> List[ArticleRevisionStub]:
    return query_article_revision_stubs(query_filter=latest_by_title)
