from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event

# Results are handed back across threads after the worker's session is gone,
# so committed objects must keep their loaded state.
db = SQLAlchemy(session_options={"expire_on_commit": False})
migrate = Migrate()


def configure_engine(engine) -> None:
    """
    Make every SQLite transaction take the write lock up front.

    pysqlite defers BEGIN until the first write, which would let two
    concurrent creations both see a slug as free before either inserts.
    Emitting BEGIN IMMEDIATE ourselves serializes whole transactions.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _take_over_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")
