from typing import Optional

from flask import current_app

from slugwiki.extensions import db
from slugwiki.models.article import Article
from slugwiki.models.article_revision import ArticleRevision
from slugwiki.domain.exceptions import ValidationError
from slugwiki.domain.slug import decide_slug
from slugwiki.utils.transaction import transactional
from ._slugs import slug_in_use


def create_article(
    *,
    target_slug: Optional[str],
    title: str,
    body: str,
    author: Optional[str] = None,
) -> ArticleRevision:
    """
    Create a new article with its first revision.

    Responsibilities:
    - Allocate the article identity
    - Resolve a unique slug, honouring `target_slug` when it matches the
      title or is the front-page sentinel ""
    - Insert revision 1 as the latest, all in one transaction
    """
    if not title:
        raise ValidationError("title cannot be empty")

    with transactional():
        article = Article()
        db.session.add(article)
        db.session.flush()  # ensures article.id is available

        slug = decide_slug(
            article.id,
            "",
            title,
            target_slug,
            slug_in_use=slug_in_use,
        )

        revision = ArticleRevision()
        revision.article_id = article.id
        revision.revision = 1
        revision.slug = slug
        revision.title = title
        revision.body = body
        revision.author = author
        revision.latest = True

        db.session.add(revision)
        db.session.flush()

    current_app.logger.info(
        "Created article %s with slug %r", revision.article_id, revision.slug
    )
    return revision
