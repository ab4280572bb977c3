import difflib

from .article import normalize_article_revision


def _unified(field, from_revision, to_revision):
    return list(
        difflib.unified_diff(
            getattr(from_revision, field).splitlines(),
            getattr(to_revision, field).splitlines(),
            fromfile=f"{field}@{from_revision.revision}",
            tofile=f"{field}@{to_revision.revision}",
            lineterm="",
        )
    )


def normalize_diff(from_revision, to_revision):
    return {
        "article_id": to_revision.article_id,
        "from": normalize_article_revision(from_revision),
        "to": normalize_article_revision(to_revision),
        "title_diff": _unified("title", from_revision, to_revision),
        "body_diff": _unified("body", from_revision, to_revision),
    }
