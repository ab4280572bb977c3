# slugwiki/models/article_revision.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import event, inspect

from slugwiki.extensions import db
from .base import BaseModel, utc_now


class ArticleRevision(BaseModel):
    """
    One immutable version of an article.

    `sequence_number` is the global insert order and is never reused.
    The only mutation ever applied to a stored row is clearing `latest`
    when its successor is inserted.
    """

    __tablename__ = "article_revisions"

    __table_args__ = (
        db.UniqueConstraint("article_id", "revision", name="uq_article_revision"),
        db.Index(
            "uq_article_revisions_latest_slug",
            "slug",
            unique=True,
            sqlite_where=db.text("latest"),
            postgresql_where=db.text("latest"),
        ),
        db.Index(
            "uq_article_revisions_latest_article",
            "article_id",
            unique=True,
            sqlite_where=db.text("latest"),
            postgresql_where=db.text("latest"),
        ),
        db.Index("ix_article_revisions_slug_sequence", "slug", "sequence_number"),
        {"sqlite_autoincrement": True},
    )

    sequence_number = db.Column(db.Integer, primary_key=True, autoincrement=True)

    article_id = db.Column(
        db.Integer,
        db.ForeignKey("articles.id"),
        nullable=False,
        index=True,
    )
    revision = db.Column(db.Integer, nullable=False)
    created = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)

    slug = db.Column(db.Text, nullable=False)
    title = db.Column(db.Text, nullable=False)
    body = db.Column(db.Text, nullable=False)
    author = db.Column(db.Text, nullable=True)

    latest = db.Column(db.Boolean, nullable=False, default=False)

    def __repr__(self):
        return (
            f"<ArticleRevision article_id={self.article_id} "
            f"revision={self.revision} slug={self.slug!r}>"
        )


@event.listens_for(ArticleRevision, "before_update")
def prevent_revision_rewrite(mapper, connection, target):
    state = inspect(target)
    changed = {attr.key for attr in state.attrs if attr.history.has_changes()}

    if changed - {"latest"} or target.latest:
        raise RuntimeError("Article revisions are immutable")


@event.listens_for(ArticleRevision, "before_delete")
def prevent_revision_delete(mapper, connection, target):
    raise RuntimeError("Article revisions are never deleted")


@dataclass(frozen=True)
class ArticleRevisionStub:
    """Revision projection without the body, for listings and feeds."""

    sequence_number: int
    article_id: int
    revision: int
    created: datetime
    slug: str
    title: str
    latest: bool
    author: Optional[str]

    @classmethod
    def columns(cls):
        return (
            ArticleRevision.sequence_number,
            ArticleRevision.article_id,
            ArticleRevision.revision,
            ArticleRevision.created,
            ArticleRevision.slug,
            ArticleRevision.title,
            ArticleRevision.latest,
            ArticleRevision.author,
        )

    @classmethod
    def from_row(cls, row) -> "ArticleRevisionStub":
        return cls(**row._mapping)
