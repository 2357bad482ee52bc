# FILE: app/api/routes_inventory_purchase_orders.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, joinedload

from app.api.deps import get_db, db_failure, get_or_404
from app.models.inventory import (
    Item,
    Supplier,
    PurchaseOrder,
    PurchaseOrderItem,
)
from app.schemas.inventory import (
    PurchaseOrderCreate,
    PurchaseOrderUpdate,
    PurchaseOrderOut,
    PurchaseOrderDetailOut,
    PurchaseOrderItemCreate,
    PurchaseOrderItemDetailOut,
    MessageOut,
)
from app.services.activity_logger import log_activity
from app.services.purchase_orders import recompute_po_total

router = APIRouter(prefix="/inventory", tags=["Inventory - Purchase Orders"])


def _po_query(db: Session):
    return db.query(PurchaseOrder).options(
        joinedload(PurchaseOrder.supplier),
        joinedload(PurchaseOrder.payment_term),
        joinedload(PurchaseOrder.shipping_method),
        selectinload(PurchaseOrder.purchase_order_items),
        selectinload(PurchaseOrder.stock_receivings),
    )


# ============================================================
# Purchase orders
# ============================================================
@router.get("/purchase-orders", response_model=List[PurchaseOrderDetailOut])
def list_purchase_orders(db: Session = Depends(get_db)):
    try:
        return _po_query(db).order_by(PurchaseOrder.purchase_order_id.desc()).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch purchase orders")


@router.get("/purchase-orders/{purchase_order_id}", response_model=PurchaseOrderDetailOut)
def get_purchase_order(purchase_order_id: int, db: Session = Depends(get_db)):
    try:
        po = _po_query(db).filter(PurchaseOrder.purchase_order_id == purchase_order_id).first()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch purchase order")
    if not po:
        raise HTTPException(status_code=404, detail="Purchase order not found")
    return po


@router.post("/purchase-orders", response_model=PurchaseOrderOut, status_code=status.HTTP_201_CREATED)
def create_purchase_order(payload: PurchaseOrderCreate, db: Session = Depends(get_db)):
    get_or_404(db, Supplier, payload.supplier_id, "Supplier")
    data = payload.model_dump(exclude_none=True)
    data["payment_term_id"] = data.get("payment_term_id") or None
    data["shipping_method_id"] = data.get("shipping_method_id") or None
    try:
        po = PurchaseOrder(**data)
        db.add(po)
        db.flush()
        log_activity(db, subject="purchase-order", event="create", details=f"purchase_order_id={po.purchase_order_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create purchase order")
    db.refresh(po)
    return po


@router.put("/purchase-orders/{purchase_order_id}", response_model=PurchaseOrderOut,
            status_code=status.HTTP_202_ACCEPTED)
def update_purchase_order(purchase_order_id: int, payload: PurchaseOrderUpdate, db: Session = Depends(get_db)):
    po = get_or_404(db, PurchaseOrder, purchase_order_id, "Purchase order")
    try:
        for k, v in payload.model_dump(exclude_unset=True).items():
            setattr(po, k, v)
        log_activity(db, subject="purchase-order", event="edit", details=f"purchase_order_id={purchase_order_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update purchase order")
    db.refresh(po)
    return po


@router.delete("/purchase-orders/{purchase_order_id}", response_model=MessageOut)
def delete_purchase_order(purchase_order_id: int, db: Session = Depends(get_db)):
    po = get_or_404(db, PurchaseOrder, purchase_order_id, "Purchase order")
    try:
        db.delete(po)
        log_activity(db, subject="purchase-order", event="delete", details=f"purchase_order_id={purchase_order_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete purchase order")
    return {"message": "Purchase order deleted"}


# ============================================================
# Purchase order lines
# ============================================================
def _line_query(db: Session):
    return db.query(PurchaseOrderItem).options(
        joinedload(PurchaseOrderItem.purchase_order),
        joinedload(PurchaseOrderItem.item),
    )


@router.get("/purchase-order-items", response_model=List[PurchaseOrderItemDetailOut])
def list_purchase_order_items(db: Session = Depends(get_db)):
    try:
        return _line_query(db).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch purchase order items")


@router.get("/purchase-order-items/{purchase_order_id}/{item_id}", response_model=PurchaseOrderItemDetailOut)
def get_purchase_order_item(purchase_order_id: int, item_id: int, db: Session = Depends(get_db)):
    try:
        line = (
            _line_query(db)
            .filter(
                PurchaseOrderItem.purchase_order_id == purchase_order_id,
                PurchaseOrderItem.item_id == item_id,
            )
            .first()
        )
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch purchase order item")
    if not line:
        raise HTTPException(status_code=404, detail="Purchase order item not found")
    return line


@router.post("/purchase-order-items", response_model=PurchaseOrderItemDetailOut,
             status_code=status.HTTP_201_CREATED)
def create_purchase_order_item(payload: PurchaseOrderItemCreate, db: Session = Depends(get_db)):
    po = get_or_404(db, PurchaseOrder, payload.purchase_order_id, "Purchase order")
    item = get_or_404(db, Item, payload.item_id, "Item")
    if db.get(PurchaseOrderItem, (payload.purchase_order_id, payload.item_id)) is not None:
        raise HTTPException(status_code=400, detail="Item already on this purchase order")

    unit_price = payload.unit_price if payload.unit_price is not None else item.unit_price
    try:
        line = PurchaseOrderItem(
            purchase_order_id=po.purchase_order_id,
            item_id=item.item_id,
            quantity=payload.quantity,
            unit_price=unit_price,
        )
        db.add(line)
        recompute_po_total(db, po)
        log_activity(db, subject="purchase-order-item", event="create",
                     details=f"purchase_order_id={po.purchase_order_id} item_id={item.item_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create purchase order item")
    db.refresh(line)
    return line


@router.delete("/purchase-order-items/{purchase_order_id}/{item_id}", response_model=MessageOut)
def delete_purchase_order_item(purchase_order_id: int, item_id: int, db: Session = Depends(get_db)):
    line = db.get(PurchaseOrderItem, (purchase_order_id, item_id))
    if line is None:
        raise HTTPException(status_code=404, detail="Purchase order item not found")
    po = line.purchase_order
    try:
        db.delete(line)
        recompute_po_total(db, po)
        log_activity(db, subject="purchase-order-item", event="delete",
                     details=f"purchase_order_id={purchase_order_id} item_id={item_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete purchase order item")
    return {"message": "Purchase order item deleted"}
