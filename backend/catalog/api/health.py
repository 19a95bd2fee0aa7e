import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.db import get_db

router = APIRouter()
logger = structlog.get_logger()


@router.get("/health", tags=["health"])
def health(db: Session = Depends(get_db)):
    db_ok = False
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except SQLAlchemyError as exc:
        logger.warning("Health check could not reach the database", error_type=type(exc).__name__)

    return {
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
    }
