import click

from .extensions import db
from .models import create_search_index


def init_db() -> None:
    """Create all tables and the full-text search index. Idempotent."""
    db.create_all()
    with db.engine.begin() as connection:
        create_search_index(connection)


def register_commands(app):
    @app.cli.command("init-db")
    def init_db_command():
        """Create the wiki schema in the configured database."""
        init_db()
        click.echo("Initialized the database.")
