from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Miss:
    """No revision, current or historical, ever held the slug."""


@dataclass(frozen=True)
class Hit:
    """A latest revision currently holds the slug."""

    article_id: int
    revision: int


@dataclass(frozen=True)
class Redirect:
    """The slug was superseded; `slug` is where the article lives now."""

    slug: str


SlugLookup = Union[Miss, Hit, Redirect]
