"""Create articles, article revisions and the search index

Revision ID: 0001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

from slugwiki.models.search_index import DROP_SEARCH_INDEX_DDL, SEARCH_INDEX_DDL


# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "articles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "article_revisions",
        sa.Column("sequence_number", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("article_id", sa.Integer(), nullable=False),
        sa.Column("revision", sa.Integer(), nullable=False),
        sa.Column("created", sa.DateTime(timezone=True), nullable=False),
        sa.Column("slug", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("author", sa.Text(), nullable=True),
        sa.Column("latest", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["article_id"], ["articles.id"]),
        sa.PrimaryKeyConstraint("sequence_number"),
        sa.UniqueConstraint("article_id", "revision", name="uq_article_revision"),
        sqlite_autoincrement=True,
    )

    with op.batch_alter_table("article_revisions", schema=None) as batch_op:
        batch_op.create_index(
            "ix_article_revisions_article_id", ["article_id"], unique=False
        )
        batch_op.create_index(
            "ix_article_revisions_slug_sequence", ["slug", "sequence_number"], unique=False
        )
        batch_op.create_index(
            "uq_article_revisions_latest_slug",
            ["slug"],
            unique=True,
            sqlite_where=sa.text("latest"),
            postgresql_where=sa.text("latest"),
        )
        batch_op.create_index(
            "uq_article_revisions_latest_article",
            ["article_id"],
            unique=True,
            sqlite_where=sa.text("latest"),
            postgresql_where=sa.text("latest"),
        )

    for statement in SEARCH_INDEX_DDL:
        op.execute(statement)


def downgrade():
    for statement in DROP_SEARCH_INDEX_DDL:
        op.execute(statement)

    with op.batch_alter_table("article_revisions", schema=None) as batch_op:
        batch_op.drop_index("uq_article_revisions_latest_article")
        batch_op.drop_index("uq_article_revisions_latest_slug")
        batch_op.drop_index("ix_article_revisions_slug_sequence")
        batch_op.drop_index("ix_article_revisions_article_id")

    op.drop_table("article_revisions")
    op.drop_table("articles")
