"""
Shared helpers for API routes
"""
from contextlib import contextmanager
import logging

from fastapi import HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


@contextmanager
def write_operation(db: Session, failure_message: str):
    """Commit the work done inside the block as a single transaction.

    Validation failures (ValueError) become HTTP 400 with their message; store
    failures are logged and surface as HTTP 500 with ``failure_message``.
    Either way the session is rolled back, so nothing is half-written.
    """
    try:
        yield
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        db.rollback()
        logger.exception(failure_message)
        raise HTTPException(status_code=500, detail=failure_message)


def require_confirmation(confirm: bool = Query(False, description="Must be true to delete")):
    """Destructive endpoints only run once the user confirmed"""
    if not confirm:
        raise HTTPException(status_code=400, detail="Confirme a exclusão")
    return True


def not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=404, detail=detail)
