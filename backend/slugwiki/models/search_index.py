"""
Full-text index over the latest revision of every article.

`article_search` is an FTS5 table keyed by `rowid = article_id`. Triggers on
`article_revisions` keep it in step: inserting a latest revision indexes it,
clearing `latest` on a revision drops its article's entry. Population is
owned by the schema; the application only queries it.
"""

SEARCH_INDEX_DDL = (
    """
    CREATE VIRTUAL TABLE IF NOT EXISTS article_search USING fts5(
        title,
        body,
        slug UNINDEXED,
        tokenize = 'porter unicode61'
    )
    """,
    """
    CREATE TRIGGER IF NOT EXISTS article_revisions_search_insert
    AFTER INSERT ON article_revisions
    WHEN new.latest
    BEGIN
        INSERT INTO article_search (rowid, title, body, slug)
        VALUES (new.article_id, new.title, new.body, new.slug);
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS article_revisions_search_retire
    AFTER UPDATE OF latest ON article_revisions
    WHEN old.latest AND NOT new.latest
    BEGIN
        DELETE FROM article_search WHERE rowid = old.article_id;
    END
    """,
)

DROP_SEARCH_INDEX_DDL = (
    "DROP TRIGGER IF EXISTS article_revisions_search_retire",
    "DROP TRIGGER IF EXISTS article_revisions_search_insert",
    "DROP TABLE IF EXISTS article_search",
)


def create_search_index(connection) -> None:
    for statement in SEARCH_INDEX_DDL:
        connection.exec_driver_sql(statement)
