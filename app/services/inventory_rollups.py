# FILE: app/services/inventory_rollups.py
"""
Read-only inventory rollups.

The three views shown on the inventory dashboard are computed here from a
flat list of batches, each carrying its owning item:

- total inventory value (sum of unit_price x current_stock)
- low-stock batches (current_stock <= minimum_stock), grouped per item
- expiring-soon batches (expiry within the item's alert window), grouped per item

Everything in this module is a pure function over ``BatchSnapshot`` values;
routes build snapshots from ORM rows with :func:`snapshot_batches`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional

ZERO = Decimal("0")


def _d(v) -> Decimal:
    if v is None:
        return ZERO
    try:
        return Decimal(str(v))
    except Exception:
        return ZERO


@dataclass(frozen=True)
class ItemSnapshot:
    item_id: int
    item_name: str = ""
    unit_price: Decimal = ZERO
    expiry_alert_days: int = 0


@dataclass(frozen=True)
class BatchSnapshot:
    batch_id: int
    item_id: int
    current_stock: int = 0
    minimum_stock: int = 0
    expiry_date: Optional[date] = None
    stock_date: Optional[date] = None
    item: Optional[ItemSnapshot] = None


@dataclass
class StockGroup:
    item: ItemSnapshot
    batches: List[BatchSnapshot] = field(default_factory=list)


def snapshot_item(item) -> Optional[ItemSnapshot]:
    if item is None:
        return None
    return ItemSnapshot(
        item_id=item.item_id,
        item_name=item.item_name or "",
        unit_price=_d(item.unit_price),
        expiry_alert_days=int(item.expiry_alert_days or 0),
    )


def snapshot_batches(rows: Iterable) -> List[BatchSnapshot]:
    """Batch ORM rows (with ``item`` loaded) -> immutable snapshots."""
    return [
        BatchSnapshot(
            batch_id=b.batch_id,
            item_id=b.item_id,
            current_stock=int(b.current_stock or 0),
            minimum_stock=int(b.minimum_stock or 0),
            expiry_date=b.expiry_date,
            stock_date=b.stock_date,
            item=snapshot_item(b.item),
        )
        for b in rows
    ]


def compute_total_inventory_value(batches: Iterable[BatchSnapshot]) -> Decimal:
    # negative stock is summed as-is
    total = ZERO
    for b in batches:
        price = b.item.unit_price if b.item is not None else ZERO
        total += price * b.current_stock
    return total


def _group_by_item(
    batches: Iterable[BatchSnapshot],
    predicate: Callable[[BatchSnapshot], bool],
) -> List[StockGroup]:
    # dict keeps insertion order -> groups come out in first-seen order
    groups: Dict[int, StockGroup] = {}
    for b in batches:
        if b.item is None or not predicate(b):
            continue
        group = groups.get(b.item_id)
        if group is None:
            group = groups[b.item_id] = StockGroup(item=b.item)
        group.batches.append(b)
    return list(groups.values())


def is_low_stock(batch: BatchSnapshot) -> bool:
    return batch.current_stock <= batch.minimum_stock


def alert_date_for(item: ItemSnapshot, today: date) -> date:
    return today + timedelta(days=item.expiry_alert_days)


def is_expiring_soon(batch: BatchSnapshot, today: date) -> bool:
    """Already-expired batches count as expiring; batches without expiry never do."""
    if batch.expiry_date is None or batch.item is None:
        return False
    return batch.expiry_date <= alert_date_for(batch.item, today)


def compute_low_stock(batches: Iterable[BatchSnapshot]) -> List[StockGroup]:
    return _group_by_item(batches, is_low_stock)


def compute_expiring_soon(batches: Iterable[BatchSnapshot], today: date) -> List[StockGroup]:
    return _group_by_item(batches, lambda b: is_expiring_soon(b, today))
