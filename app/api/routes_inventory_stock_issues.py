# FILE: app/api/routes_inventory_stock_issues.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.api.deps import get_db, db_failure, get_or_404
from app.models.inventory import Batch, StockIssue
from app.schemas.inventory import (
    StockIssueCreate,
    StockIssueUpdate,
    StockIssueOut,
    MessageOut,
)
from app.services.activity_logger import log_activity
from app.services.inventory_stock import (
    issue_stock,
    BatchNotFoundError,
    InsufficientStockError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory/stock-issues", tags=["Inventory - Stock Out"])


def _issue_query(db: Session):
    return db.query(StockIssue).options(joinedload(StockIssue.batch).joinedload(Batch.item))


@router.get("", response_model=List[StockIssueOut])
def list_stock_issues(db: Session = Depends(get_db)):
    try:
        return _issue_query(db).order_by(StockIssue.stock_issue_id.desc()).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch stock issues")


@router.get("/{stock_issue_id}", response_model=StockIssueOut)
def get_stock_issue(stock_issue_id: int, db: Session = Depends(get_db)):
    try:
        issue = _issue_query(db).filter(StockIssue.stock_issue_id == stock_issue_id).first()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch stock issue")
    if not issue:
        raise HTTPException(status_code=404, detail="Stock issue not found")
    return issue


@router.post("", response_model=StockIssueOut, status_code=status.HTTP_201_CREATED)
def create_stock_issue(payload: StockIssueCreate, db: Session = Depends(get_db)):
    """Stock-out: decrement the batch and record the issue."""
    try:
        issue = issue_stock(
            db,
            batch_id=payload.batch_id,
            quantity=payload.quantity,
            usage_type=payload.usage_type,
            issued_to=payload.issued_to or "",
            notes=payload.notes or "",
        )
        db.commit()
    except BatchNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Batch not found")
    except InsufficientStockError as e:
        db.rollback()
        logger.warning("stock-out rejected batch_id=%s requested=%s available=%s",
                       e.batch_id, e.requested, e.available)
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        raise db_failure(db, "Failed to issue stock")

    db.refresh(issue)
    return issue


@router.put("/{stock_issue_id}", response_model=StockIssueOut, status_code=status.HTTP_202_ACCEPTED)
def update_stock_issue(stock_issue_id: int, payload: StockIssueUpdate, db: Session = Depends(get_db)):
    """Edits the record only; quantities are fixed once issued."""
    issue = get_or_404(db, StockIssue, stock_issue_id, "Stock issue")
    data = payload.model_dump(exclude_unset=True)
    if "usage_type" in data and data["usage_type"] is not None:
        data["usage_type"] = data["usage_type"].value
    try:
        for k, v in data.items():
            setattr(issue, k, v)
        log_activity(db, subject="stock-issue", event="edit", details=f"stock_issue_id={stock_issue_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update stock issue")
    db.refresh(issue)
    return issue


@router.delete("/{stock_issue_id}", response_model=MessageOut)
def delete_stock_issue(stock_issue_id: int, db: Session = Depends(get_db)):
    issue = get_or_404(db, StockIssue, stock_issue_id, "Stock issue")
    try:
        db.delete(issue)
        log_activity(db, subject="stock-issue", event="delete", details=f"stock_issue_id={stock_issue_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete stock issue")
    return {"message": "Stock issue deleted"}
