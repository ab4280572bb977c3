from string import capwords


def normalize_article_revision(revision, edit=False):
    data = {
        "article_id": revision.article_id,
        "revision": revision.revision,
        "created": revision.created.isoformat(),
        "slug": revision.slug,
        "title": revision.title,
        "body": revision.body,
        "author": revision.author,
        "latest": revision.latest,
    }

    if edit:
        data["edit"] = True

    return data


def normalize_revision_stub(stub):
    return {
        "sequence_number": stub.sequence_number,
        "article_id": stub.article_id,
        "revision": stub.revision,
        "created": stub.created.isoformat(),
        "slug": stub.slug,
        "title": stub.title,
        "latest": stub.latest,
        "author": stub.author,
    }


def title_from_slug(slug):
    return capwords(slug.replace("-", " "))


def normalize_new_article(slug):
    """
    Placeholder for an article that does not exist yet. The composer is
    pre-seeded with a title guessed from the slug.
    """
    return {
        "article_id": None,
        "revision": None,
        "created": None,
        "slug": slug,
        "title": title_from_slug(slug or ""),
        "body": "",
        "author": None,
        "latest": None,
    }
