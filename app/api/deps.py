# app/api/deps.py
from __future__ import annotations

import logging
from typing import Generator

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.db.session import SessionLocal

logger = logging.getLogger("app.api")


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def db_failure(db: Session, msg: str) -> HTTPException:
    """
    Roll back, log the active exception and build the 500 for it.
    Use inside `except SQLAlchemyError:` -> `raise db_failure(db, "...")`.
    """
    db.rollback()
    logger.exception(msg)
    return HTTPException(status_code=500, detail=msg)


def get_or_404(db: Session, model, pk, label: str):
    obj = db.get(model, pk)
    if obj is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return obj
