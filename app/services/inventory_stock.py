# FILE: app/services/inventory_stock.py
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.models.inventory import Batch, StockIssue, UsageType
from app.services.activity_logger import log_activity

logger = logging.getLogger(__name__)


class BatchNotFoundError(LookupError):
    pass


class InsufficientStockError(ValueError):
    def __init__(self, batch_id: int, requested: int, available: int):
        self.batch_id = batch_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot issue {requested} items. Only {available} available."
        )


def issue_stock(
    db: Session,
    *,
    batch_id: int,
    quantity: int,
    usage_type: UsageType | str = UsageType.TREATMENT,
    issued_to: str = "",
    notes: str = "",
    today: Optional[date] = None,
) -> StockIssue:
    """
    Stock-out from one batch.

    - Decrement is one guarded UPDATE (current_stock >= quantity), so two
      concurrent issues can never drive a batch negative or lose an update.
    - Writes the StockIssue + ActivityLog rows in the same transaction.
    - Raises BatchNotFoundError / InsufficientStockError; nothing is written then.
    - Caller commits.
    """
    if quantity is None or int(quantity) <= 0:
        raise ValueError("Quantity must be > 0")
    quantity = int(quantity)
    usage = UsageType(usage_type).value

    result = db.execute(
        update(Batch)
        .where(Batch.batch_id == batch_id, Batch.current_stock >= quantity)
        .values(current_stock=Batch.current_stock - quantity)
        .execution_options(synchronize_session=False)
    )

    if result.rowcount != 1:
        # reload: the session may hold a copy older than another writer's commit
        batch = db.get(Batch, batch_id, populate_existing=True)
        if batch is None:
            raise BatchNotFoundError(f"Batch {batch_id} not found")
        raise InsufficientStockError(batch_id, quantity, int(batch.current_stock or 0))

    batch = db.get(Batch, batch_id)
    db.refresh(batch)

    issue = StockIssue(
        batch_id=batch_id,
        quantity=quantity,
        usage_type=usage,
        issued_to=issued_to or "",
        notes=notes or "",
        date=today or date.today(),
    )
    db.add(issue)

    item = batch.item
    item_name = item.item_name if item is not None else f"item #{batch.item_id}"
    unit = (item.unit_of_measurements if item is not None else "") or "unit"
    details = f"Stock Out - {item_name}: {quantity} {unit} by {issued_to or 'Staff User'} ({usage})"
    if notes:
        details += f" - {notes}"
    log_activity(db, subject="batch", event="stock-out", details=details)

    logger.info("stock-out batch_id=%s qty=%s usage=%s remaining=%s",
                batch_id, quantity, usage, batch.current_stock)
    return issue
