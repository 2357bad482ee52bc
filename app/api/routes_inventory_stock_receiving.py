# FILE: app/api/routes_inventory_stock_receiving.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.api.deps import get_db, db_failure, get_or_404
from app.models.inventory import PurchaseOrder, StockReceiving
from app.schemas.inventory import (
    StockReceivingCreate,
    StockReceivingUpdate,
    StockReceivingOut,
    MessageOut,
)
from app.services.activity_logger import log_activity
from app.services.purchase_orders import recompute_po_total

router = APIRouter(prefix="/inventory/stock-receiving", tags=["Inventory - Stock Receiving"])


def _receiving_query(db: Session):
    return db.query(StockReceiving).options(joinedload(StockReceiving.purchase_order))


@router.get("", response_model=List[StockReceivingOut])
def list_stock_receivings(db: Session = Depends(get_db)):
    try:
        return _receiving_query(db).order_by(StockReceiving.stock_receiving_id.desc()).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch stock receivings")


@router.get("/{stock_receiving_id}", response_model=StockReceivingOut)
def get_stock_receiving(stock_receiving_id: int, db: Session = Depends(get_db)):
    try:
        rec = _receiving_query(db).filter(StockReceiving.stock_receiving_id == stock_receiving_id).first()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch stock receiving")
    if not rec:
        raise HTTPException(status_code=404, detail="Stock receiving not found")
    return rec


@router.post("", response_model=StockReceivingOut, status_code=status.HTTP_201_CREATED)
def create_stock_receiving(payload: StockReceivingCreate, db: Session = Depends(get_db)):
    po = get_or_404(db, PurchaseOrder, payload.purchase_order_id, "Purchase order")
    try:
        rec = StockReceiving(**payload.model_dump(exclude_none=True))
        db.add(rec)
        recompute_po_total(db, po)
        log_activity(db, subject="stock-receiving", event="create",
                     details=f"purchase_order_id={po.purchase_order_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create stock receiving")
    db.refresh(rec)
    return rec


@router.put("/{stock_receiving_id}", response_model=StockReceivingOut, status_code=status.HTTP_202_ACCEPTED)
def update_stock_receiving(stock_receiving_id: int, payload: StockReceivingUpdate, db: Session = Depends(get_db)):
    rec = get_or_404(db, StockReceiving, stock_receiving_id, "Stock receiving")
    data = payload.model_dump(exclude_unset=True)
    if data.get("purchase_order_id") is not None:
        get_or_404(db, PurchaseOrder, data["purchase_order_id"], "Purchase order")
    try:
        for k, v in data.items():
            setattr(rec, k, v)
        log_activity(db, subject="stock-receiving", event="edit",
                     details=f"stock_receiving_id={stock_receiving_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update stock receiving")
    db.refresh(rec)
    return rec


@router.delete("/{stock_receiving_id}", response_model=MessageOut)
def delete_stock_receiving(stock_receiving_id: int, db: Session = Depends(get_db)):
    rec = get_or_404(db, StockReceiving, stock_receiving_id, "Stock receiving")
    try:
        db.delete(rec)
        log_activity(db, subject="stock-receiving", event="delete",
                     details=f"stock_receiving_id={stock_receiving_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete stock receiving")
    return {"message": "Stock receiving deleted"}
