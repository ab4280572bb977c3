from typing import Optional

from flask import current_app
from sqlalchemy import select

from slugwiki.extensions import db
from slugwiki.models.article_revision import ArticleRevision
from slugwiki.domain.exceptions import ConflictError, ValidationError
from slugwiki.domain.slug import decide_slug
from slugwiki.utils.transaction import transactional
from ._slugs import slug_in_use


def update_article(
    *,
    article_id: int,
    base_revision: int,
    title: str,
    body: str,
    author: Optional[str] = None,
) -> ArticleRevision:
    """
    Append a new revision to an existing article.

    Concurrency is optimistic: the edit must be based on the current latest
    revision, otherwise ConflictError carries that revision back to the
    caller. Conflicting edits are never merged.
    """
    if not title:
        raise ValidationError("title cannot be empty")

    with transactional():
        previous = db.session.execute(
            select(ArticleRevision)
            .where(ArticleRevision.article_id == article_id)
            .order_by(ArticleRevision.revision.desc())
            .limit(1)
        ).scalar_one_or_none()

        if previous is None:
            raise ValidationError(f"Article {article_id} does not exist")

        if previous.revision != base_revision:
            current_app.logger.info(
                "Edit conflict on article %s: base %s, latest %s",
                article_id,
                base_revision,
                previous.revision,
            )
            db.session.expunge(previous)
            raise ConflictError(previous)

        slug = decide_slug(
            article_id,
            previous.title,
            title,
            previous.slug,
            slug_in_use=slug_in_use,
        )

        previous.latest = False
        db.session.flush()  # retire the old latest before inserting its successor

        revision = ArticleRevision()
        revision.article_id = article_id
        revision.revision = base_revision + 1
        revision.slug = slug
        revision.title = title
        revision.body = body
        revision.author = author
        revision.latest = True

        db.session.add(revision)
        db.session.flush()

    current_app.logger.info(
        "Article %s now at revision %s with slug %r",
        article_id,
        revision.revision,
        revision.slug,
    )
    return revision
