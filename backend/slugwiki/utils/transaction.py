from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from slugwiki.extensions import db
from slugwiki.domain.exceptions import StoreError


@contextmanager
def transactional():
    """
    Context manager for database transactions.

    Commits on success and rolls back on any exception. Store failures
    surface as StoreError; everything else propagates unchanged.
    """
    try:
        yield
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.warning("Transaction rolled back: %s", exc)
        raise StoreError(str(exc)) from exc
    except Exception:
        db.session.rollback()
        raise
