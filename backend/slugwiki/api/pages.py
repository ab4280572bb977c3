# slugwiki/api/pages.py
import asyncio
from urllib.parse import quote

from flask import abort, current_app, jsonify, redirect, request, send_file

from slugwiki.dispatch.resources import (
    ArticleRedirectResource,
    ArticleResource,
    ArticleRevisionResource,
    ChangesResource,
    DiffResource,
    NewArticleResource,
    SearchResource,
    SitemapResource,
    StaticAssetResource,
)
from slugwiki.domain.exceptions import ValidationError
from slugwiki.normalizers.article import (
    normalize_article_revision,
    normalize_new_article,
    normalize_revision_stub,
)
from slugwiki.normalizers.diff import normalize_diff
from slugwiki.normalizers.pagination import normalize_pagination
from slugwiki.normalizers.search import normalize_search_result
from slugwiki.utils.pagination import changes_filter, paginate_changes
from . import wiki_bp

ASSET_MAX_AGE = 31556926  # one year


def _service():
    return current_app.extensions["article_service"]


def _raw_path():
    """
    The request path as sent by the client, still percent-encoded.

    request.path is already decoded (lossily for invalid UTF-8), and the
    dispatcher does its own decoding.
    """
    raw_uri = request.environ.get("RAW_URI") or request.environ.get("REQUEST_URI")
    if raw_uri:
        path = raw_uri.split("?", 1)[0]
        if path.startswith("/"):
            return path
    return quote(request.path, safe="/")


def _query():
    return request.query_string.decode("utf-8", "replace") or None


def _payload():
    data = request.get_json(silent=True)
    if data is None:
        return request.form
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _text(data, name):
    value = data.get(name, "")
    if not isinstance(value, str):
        raise ValidationError(f"'{name}' must be a string")
    return value


def _author():
    header = current_app.config.get("IDENTITY_HEADER")
    if not header:
        return None
    return request.headers.get(header) or None


# ------------------------
# GET
# ------------------------

async def _get_article(resource):
    revision = await _service().get_article_revision(resource.article_id, resource.revision)
    if revision is None:
        abort(404)
    return jsonify(normalize_article_revision(revision, edit=resource.edit))


async def _get_article_revision(resource):
    revision = await _service().get_article_revision(resource.article_id, resource.revision)
    if revision is None:
        abort(404)
    return jsonify(normalize_article_revision(revision))


async def _get_redirect(resource):
    return redirect(resource.location)


async def _get_new_article(resource):
    return jsonify(normalize_new_article(resource.slug)), 404


async def _get_changes(resource):
    rows = await _service().query_article_revision_stubs(
        changes_filter(
            resource.pagination,
            article_id=resource.article_id,
            author=resource.author,
        )
    )
    items, cursor = paginate_changes(rows, resource.pagination)
    return jsonify(normalize_pagination(items, normalize_revision_stub, cursor=cursor))


async def _get_sitemap(resource):
    stubs = await _service().get_latest_article_revision_stubs()
    return jsonify(normalize_pagination(stubs, normalize_revision_stub))


async def _get_search(resource):
    results = await _service().search_query(
        resource.query_string,
        resource.limit,
        resource.offset,
        resource.snippet_size,
    )
    response = normalize_pagination(
        results,
        normalize_search_result,
        limit=resource.limit,
        offset=resource.offset,
    )
    response["query"] = resource.query_string
    return jsonify(response)


async def _get_diff(resource):
    service = _service()
    from_revision, to_revision = await asyncio.gather(
        service.get_article_revision(resource.article_id, resource.from_revision),
        service.get_article_revision(resource.article_id, resource.to_revision),
    )
    if from_revision is None or to_revision is None:
        abort(404)
    return jsonify(normalize_diff(from_revision, to_revision))


async def _get_static_asset(resource):
    asset = resource.asset
    response = send_file(
        asset.path,
        mimetype=asset.mime,
        max_age=ASSET_MAX_AGE,
        etag=asset.checksum or True,
    )
    response.cache_control.public = True
    response.cache_control.immutable = True
    return response


GET_HANDLERS = {
    ArticleResource: _get_article,
    ArticleRevisionResource: _get_article_revision,
    ArticleRedirectResource: _get_redirect,
    NewArticleResource: _get_new_article,
    ChangesResource: _get_changes,
    SitemapResource: _get_sitemap,
    SearchResource: _get_search,
    DiffResource: _get_diff,
    StaticAssetResource: _get_static_asset,
}


# ------------------------
# PUT
# ------------------------

async def _put_new_article(resource):
    data = _payload()
    created = await _service().create_article(
        resource.slug,
        _text(data, "title"),
        _text(data, "body"),
        _author(),
    )
    return jsonify(normalize_article_revision(created)), 201


async def _put_article(resource):
    data = _payload()

    raw_revision = data.get("base_revision", "")
    if isinstance(raw_revision, (bool, float)):
        raise ValidationError("base_revision must be an integer")

    try:
        base_revision = int(raw_revision)
    except (TypeError, ValueError):
        raise ValidationError("base_revision must be an integer")

    updated = await _service().update_article(
        resource.article_id,
        base_revision,
        _text(data, "title"),
        _text(data, "body"),
        _author(),
    )
    return jsonify(normalize_article_revision(updated)), 200


PUT_HANDLERS = {
    NewArticleResource: _put_new_article,
    ArticleResource: _put_article,
}


@wiki_bp.route("/", defaults={"path": ""}, methods=["GET", "PUT"])
@wiki_bp.route("/<path:path>", methods=["GET", "PUT"])
async def resource(path):
    found = await current_app.extensions["wiki_lookup"].lookup(_raw_path(), _query())

    if found is None:
        abort(404)

    handlers = PUT_HANDLERS if request.method == "PUT" else GET_HANDLERS
    handler = handlers.get(type(found))

    if handler is None:
        abort(405)

    current_app.logger.debug("%s %s -> %r", request.method, request.path, found)
    return await handler(found)
