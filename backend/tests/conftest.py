"""Shared fixtures: a wiki app on a throwaway SQLite file."""

import pytest

from slugwiki import create_app
from slugwiki.commands import init_db
from slugwiki.extensions import db


@pytest.fixture
def app(tmp_path):
    app = create_app(
        "testing",
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'wiki.db'}",
        IDENTITY_HEADER="X-Identity",
    )

    with app.app_context():
        init_db()

    yield app

    app.extensions["article_service"].close()
    with app.app_context():
        db.engine.dispose()


@pytest.fixture
def service(app):
    return app.extensions["article_service"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    """App context for calling store operations directly."""
    with app.app_context():
        yield
        db.session.remove()
