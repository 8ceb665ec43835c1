from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.errors import StoreError
from storefront.utils.logger import get_logger

log = get_logger("store")


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """
    Unit of work around a mutating call: commit on normal exit, roll back on
    any exception.
    IntegrityError is re-raised untouched so callers can map constraint
    violations (e.g. a duplicate slug) to their own error. Any other
    SQLAlchemyError is logged and surfaces as StoreError.
    Usage:
        with transaction(db):
            ... DB work ...
    """
    try:
        yield session
        session.commit()
    except IntegrityError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        log.exception("store operation failed")
        raise StoreError() from e
    except Exception:
        session.rollback()
        raise
