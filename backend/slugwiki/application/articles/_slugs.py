from sqlalchemy import func, select

from slugwiki.extensions import db
from slugwiki.models.article_revision import ArticleRevision


def slug_in_use(article_id: int, slug: str) -> bool:
    """True if an article other than `article_id` currently holds `slug`."""
    count = db.session.execute(
        select(func.count())
        .select_from(ArticleRevision)
        .where(
            ArticleRevision.article_id != article_id,
            ArticleRevision.slug == slug,
            ArticleRevision.latest.is_(True),
        )
    ).scalar_one()
    return count != 0
