from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from sqlalchemy.orm import Session

from app.models.inventory import PurchaseOrder, PurchaseOrderItem

ZERO = Decimal("0")
CENT = Decimal("0.01")


def _d(v) -> Decimal:
    try:
        return Decimal(str(v or 0))
    except Exception:
        return ZERO


def compute_po_total(lines: Iterable) -> Decimal:
    """Σ(quantity × unit_price) over purchase order lines, rounded to cents."""
    total = ZERO
    for line in lines:
        total += _d(getattr(line, "quantity", 0)) * _d(getattr(line, "unit_price", 0))
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def recompute_po_total(db: Session, po: PurchaseOrder) -> Decimal:
    """Refresh purchase_order.total_amount from its lines (caller commits)."""
    db.flush()
    lines = (
        db.query(PurchaseOrderItem)
        .filter(PurchaseOrderItem.purchase_order_id == po.purchase_order_id)
        .all()
    )
    po.total_amount = compute_po_total(lines)
    return po.total_amount
