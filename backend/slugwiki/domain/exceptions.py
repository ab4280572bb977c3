class WikiError(Exception):
    """Base class for errors raised by the wiki core."""


class ValidationError(WikiError):
    """Caller-supplied data violates a precondition."""


class ConflictError(WikiError):
    """
    An edit was based on a revision that is no longer the latest.

    `current` is the article's latest revision at the time of the check,
    detached from its session so callers can re-read it freely.
    """

    def __init__(self, current):
        self.current = current
        super().__init__(
            f"Article {current.article_id} is at revision {current.revision}"
        )


class StoreError(WikiError):
    """The store failed (connection, pool, I/O or constraint violation)."""


class DecodeError(WikiError):
    """A path segment is not valid percent-encoded UTF-8."""
