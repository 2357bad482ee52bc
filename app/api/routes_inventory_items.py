# FILE: app/api/routes_inventory_items.py
from __future__ import annotations

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from app.api.deps import get_db, db_failure, get_or_404
from app.models.inventory import Item, Batch, SubCategory, Supplier, PurchaseOrderItem
from app.schemas.inventory import (
    ItemCreate,
    ItemUpdate,
    ItemOut,
    ItemWithBatchesOut,
    StockGroupOut,
    MessageOut,
)
from app.services.activity_logger import log_activity
from app.services.inventory_rollups import (
    StockGroup,
    snapshot_batches,
    compute_total_inventory_value,
    compute_low_stock,
    compute_expiring_soon,
)

router = APIRouter(prefix="/inventory/items", tags=["Inventory - Items"])


def _item_options():
    return (
        joinedload(Item.sub_category).joinedload(SubCategory.parent_category),
        joinedload(Item.supplier),
    )


def load_batches_with_items(db: Session) -> List[Batch]:
    """Full Batch+Item join; every summary endpoint re-reads it."""
    return (
        db.query(Batch)
        .options(
            joinedload(Batch.item).joinedload(Item.sub_category),
            joinedload(Batch.item).joinedload(Item.supplier),
        )
        .order_by(Batch.batch_id.asc())
        .all()
    )


def _check_links(db: Session, data: dict) -> None:
    if data.get("sub_category_id") is not None:
        get_or_404(db, SubCategory, data["sub_category_id"], "Sub category")
    if data.get("supplier_id") is not None:
        get_or_404(db, Supplier, data["supplier_id"], "Supplier")


def _groups_out(groups: List[StockGroup], rows: List[Batch]) -> List[dict]:
    # map snapshots back to the ORM rows they came from for serialization
    by_id = {b.batch_id: b for b in rows}
    out = []
    for g in groups:
        batches = [by_id[s.batch_id] for s in g.batches]
        out.append({"item": batches[0].item, "batches": batches})
    return out


# ============================================================
# Summaries (declared before /{item_id})
# ============================================================
@router.get("/total-value", response_model=float)
def total_inventory_value(db: Session = Depends(get_db)):
    try:
        rows = load_batches_with_items(db)
    except SQLAlchemyError:
        raise db_failure(db, "Failed to calculate total inventory value")
    return float(compute_total_inventory_value(snapshot_batches(rows)))


@router.get("/low-stock", response_model=List[StockGroupOut])
def low_stock_items(db: Session = Depends(get_db)):
    try:
        rows = load_batches_with_items(db)
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch low stock items")
    return _groups_out(compute_low_stock(snapshot_batches(rows)), rows)


@router.get("/expiring-soon", response_model=List[StockGroupOut])
def expiring_soon_items(db: Session = Depends(get_db)):
    try:
        rows = load_batches_with_items(db)
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch expiring items")
    today = date.today()
    return _groups_out(compute_expiring_soon(snapshot_batches(rows), today), rows)


# ============================================================
# Items
# ============================================================
@router.get("", response_model=List[ItemOut])
def list_items(db: Session = Depends(get_db)):
    try:
        return db.query(Item).options(*_item_options()).order_by(Item.item_id.asc()).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch items")


@router.get("/with-batches/{item_id}", response_model=ItemWithBatchesOut)
def get_item_with_batches(item_id: int, db: Session = Depends(get_db)):
    try:
        item = (
            db.query(Item)
            .options(*_item_options(), selectinload(Item.batches))
            .filter(Item.item_id == item_id)
            .first()
        )
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch item with batches")
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.get("/by-supplier/{supplier_id}", response_model=List[ItemOut])
def list_items_by_supplier(supplier_id: int, db: Session = Depends(get_db)):
    try:
        return (
            db.query(Item)
            .options(*_item_options())
            .filter(Item.supplier_id == supplier_id)
            .order_by(Item.item_id.asc())
            .all()
        )
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch items by supplier")


@router.get("/{item_id}", response_model=ItemOut)
def get_item(item_id: int, db: Session = Depends(get_db)):
    try:
        item = db.query(Item).options(*_item_options()).filter(Item.item_id == item_id).first()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch item")
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.post("", response_model=ItemWithBatchesOut, status_code=status.HTTP_201_CREATED)
def create_item(payload: ItemCreate, db: Session = Depends(get_db)):
    """
    Create an item and, optionally, its opening batches.
    Item + batches + activity rows commit together or not at all.
    """
    data = payload.model_dump(exclude={"batches"})
    data["sub_category_id"] = data.get("sub_category_id") or None
    data["supplier_id"] = data.get("supplier_id") or None
    _check_links(db, data)
    try:
        item = Item(**data)
        db.add(item)
        db.flush()

        for b in payload.batches:
            batch_data = b.model_dump(exclude_none=True)
            db.add(Batch(item_id=item.item_id, **batch_data))
            log_activity(db, subject="batch", event="create", details=f"item_id={item.item_id}")

        log_activity(db, subject="item", event="create", details=item.item_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create item")

    db.refresh(item)
    return item


@router.put("/{item_id}", response_model=ItemOut, status_code=status.HTTP_202_ACCEPTED)
def update_item(item_id: int, payload: ItemUpdate, db: Session = Depends(get_db)):
    item = db.get(Item, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")

    data = payload.model_dump(exclude_unset=True)
    _check_links(db, data)
    try:
        for k, v in data.items():
            setattr(item, k, v)
        log_activity(db, subject="item", event="edit", details=item.item_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update item")

    db.refresh(item)
    return item


@router.delete("/{item_id}", response_model=MessageOut)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    item = db.get(Item, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")

    on_po = db.query(PurchaseOrderItem.purchase_order_id).filter(PurchaseOrderItem.item_id == item_id).first()
    if on_po is not None:
        raise HTTPException(status_code=400, detail="Item is on a purchase order")

    try:
        name = item.item_name
        db.delete(item)
        log_activity(db, subject="item", event="delete", details=name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete item")
    return {"message": "Item deleted"}
