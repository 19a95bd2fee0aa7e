from contextlib import contextmanager
from typing import Iterator

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.errors import StorageFault

logger = structlog.get_logger()


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """
    Commit the session when the block exits cleanly, roll back otherwise.
    Driver errors surface as StorageFault; the original is logged, not returned.
    Usage:
        with unit_of_work(db):
            db.add(product)
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Storage operation failed", error_type=type(exc).__name__)
        raise StorageFault() from exc
    except Exception:
        session.rollback()
        raise
