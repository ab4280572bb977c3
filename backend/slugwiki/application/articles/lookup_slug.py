from sqlalchemy import select

from slugwiki.extensions import db
from slugwiki.models.article_revision import ArticleRevision
from slugwiki.domain.lookup import Hit, Miss, Redirect, SlugLookup
from slugwiki.utils.transaction import transactional


def lookup_slug(*, slug: str) -> SlugLookup:
    """
    Classify `slug` against the current state of the store.

    The most recent assignment of the slug (highest sequence number) wins.
    If that assignment has been superseded, the slug redirects to wherever
    its article lives now, so every stale slug keeps working after any
    number of renames.
    """
    with transactional():
        row = db.session.execute(
            select(
                ArticleRevision.article_id,
                ArticleRevision.revision,
                ArticleRevision.latest,
            )
            .where(ArticleRevision.slug == slug)
            .order_by(ArticleRevision.sequence_number.desc())
            .limit(1)
        ).first()

        if row is None:
            return Miss()

        if row.latest:
            return Hit(article_id=row.article_id, revision=row.revision)

        current_slug = db.session.execute(
            select(ArticleRevision.slug).where(
                ArticleRevision.article_id == row.article_id,
                ArticleRevision.latest.is_(True),
            )
        ).scalar_one()

        return Redirect(slug=current_slug)
