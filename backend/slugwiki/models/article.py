from slugwiki.extensions import db
from .base import BaseModel


class Article(BaseModel):
    """Identity anchoring a chain of revisions. Holds no content itself."""

    __tablename__ = "articles"

    id = db.Column(db.Integer, primary_key=True)
