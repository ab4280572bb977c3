import os

from flask import Flask
from .config import config_by_name
from .extensions import db, migrate, configure_engine
from .api import wiki_bp
from .errors import register_error_handlers
from .commands import register_commands
from .dispatch.assets import EMPTY_ASSET_TABLE, build_asset_table, load_asset_manifest
from .dispatch.lookup import WikiLookup
from .services.article_service import ArticleService


def create_app(config_name: str = "development", **overrides) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(overrides)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(
        app,
        db,
        directory=os.path.join(os.path.dirname(app.root_path), "migrations"),
        render_as_batch=True,
    )

    with app.app_context():
        configure_engine(db.engine)

    # -------------------------------------------------
    # Article service and path dispatcher
    # -------------------------------------------------
    service = ArticleService(app, max_workers=app.config["DB_WORKER_THREADS"])

    manifest = app.config.get("ASSET_MANIFEST")
    assets = build_asset_table(load_asset_manifest(manifest)) if manifest else EMPTY_ASSET_TABLE
    app.logger.info("Loaded %d static assets", len(assets))

    app.extensions["article_service"] = service
    app.extensions["wiki_lookup"] = WikiLookup(
        service,
        assets,
        changes_page_size=app.config["CHANGES_PAGE_SIZE"],
        search_page_size=app.config["SEARCH_PAGE_SIZE"],
        snippet_size=app.config["SEARCH_SNIPPET_SIZE"],
    )

    # -------------------------------------------------
    # Blueprints, errors, CLI
    # -------------------------------------------------
    app.register_blueprint(wiki_bp)
    register_error_handlers(app)
    register_commands(app)

    return app
