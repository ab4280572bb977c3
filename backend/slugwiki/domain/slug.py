from typing import Callable, Optional

from slugify import slugify as _slugify

FALLBACK_SLUG = "article"


def slugify(text: str) -> str:
    """
    URL-safe slug for `text`: ASCII, lowercase, non-alphanumeric runs
    collapsed to a single dash, no leading or trailing dash. HTML entities
    are left as literal text.
    """
    return _slugify(text, entities=False, decimal=False, hexadecimal=False)


def decide_slug(
    article_id: int,
    previous_title: str,
    new_title: str,
    previous_slug: Optional[str] = None,
    *,
    slug_in_use: Callable[[int, str], bool],
) -> str:
    """
    Pick the slug for a revision titled `new_title`.

    Rules:
    - The front page ("" slug) never acquires a content-derived slug
    - An unchanged title keeps its slug, even a stale-looking one
    - An edit whose title still derives the current slug keeps it
    - Otherwise the slug follows the title, suffixed -2, -3, ... while
      another article's latest revision holds it

    `slug_in_use(article_id, candidate)` must answer for articles other than
    `article_id`, inside the same transaction as the eventual insert.
    """
    base_slug = slugify(new_title)

    if previous_slug is not None:
        if previous_slug == "":
            return ""

        if new_title == previous_title:
            return previous_slug

        # creation passes previous_title "", and its target must still be free
        if base_slug == previous_slug and previous_title:
            return base_slug

    if not base_slug:
        base_slug = FALLBACK_SLUG

    slug = base_slug
    disambiguator = 1

    while slug_in_use(article_id, slug):
        disambiguator += 1
        slug = f"{base_slug}-{disambiguator}"

    return slug
