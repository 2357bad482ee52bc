# FILE: app/api/routes_inventory_batches.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.api.deps import get_db, db_failure, get_or_404
from app.models.inventory import Item, Batch
from app.schemas.inventory import (
    BatchCreate,
    BatchUpdate,
    BatchOut,
    BatchWithItemOut,
    MessageOut,
)
from app.services.activity_logger import log_activity

router = APIRouter(prefix="/inventory/batches", tags=["Inventory - Batches"])


def _batch_query(db: Session):
    return db.query(Batch).options(
        joinedload(Batch.item).joinedload(Item.sub_category),
        joinedload(Batch.item).joinedload(Item.supplier),
    )


@router.get("", response_model=List[BatchWithItemOut])
def list_batches(db: Session = Depends(get_db)):
    try:
        return _batch_query(db).order_by(Batch.batch_id.asc()).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch batches")


@router.get("/by-item/{item_id}", response_model=List[BatchWithItemOut])
def list_batches_by_item(item_id: int, db: Session = Depends(get_db)):
    try:
        return _batch_query(db).filter(Batch.item_id == item_id).order_by(Batch.batch_id.asc()).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch batches by item")


@router.get("/{batch_id}", response_model=BatchWithItemOut)
def get_batch(batch_id: int, db: Session = Depends(get_db)):
    try:
        batch = _batch_query(db).filter(Batch.batch_id == batch_id).first()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch batch")
    if not batch:
        raise HTTPException(status_code=404, detail="Batch not found")
    return batch


@router.post("", response_model=BatchOut, status_code=status.HTTP_201_CREATED)
def create_batch(payload: BatchCreate, db: Session = Depends(get_db)):
    get_or_404(db, Item, payload.item_id, "Item")
    try:
        batch = Batch(**payload.model_dump(exclude_none=True))
        db.add(batch)
        log_activity(db, subject="batch", event="create", details=f"item_id={payload.item_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create batch")
    db.refresh(batch)
    return batch


@router.put("/{batch_id}", response_model=BatchOut, status_code=status.HTTP_202_ACCEPTED)
def update_batch(batch_id: int, payload: BatchUpdate, db: Session = Depends(get_db)):
    """
    Plain field update. Use POST /inventory/stock-issues to issue stock;
    that path guards against over-issue.
    """
    batch = get_or_404(db, Batch, batch_id, "Batch")
    data = payload.model_dump(exclude_unset=True)
    if data.get("item_id") is not None:
        get_or_404(db, Item, data["item_id"], "Item")
    try:
        for k, v in data.items():
            setattr(batch, k, v)
        log_activity(db, subject="batch", event="edit", details=f"batch_id={batch_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update batch")
    db.refresh(batch)
    return batch


@router.delete("/{batch_id}", response_model=MessageOut)
def delete_batch(batch_id: int, db: Session = Depends(get_db)):
    batch = get_or_404(db, Batch, batch_id, "Batch")
    try:
        db.delete(batch)
        log_activity(db, subject="batch", event="delete", details=f"batch_id={batch_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete batch")
    return {"message": "Batch deleted"}
