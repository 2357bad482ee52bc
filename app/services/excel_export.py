from __future__ import annotations

from typing import Iterable

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from app.services.inventory_rollups import (
    ZERO,
    compute_total_inventory_value,
    is_low_stock,
    snapshot_batches,
)


def build_stock_report_excel(fp, batches: Iterable):
    """One row per batch; value column = unit_price × current_stock."""
    batches = list(batches)
    snaps = snapshot_batches(batches)

    wb = Workbook()
    ws = wb.active
    ws.title = "Stock"

    headers = [
        "Batch ID", "Item ID", "Item", "Unit", "Unit Price",
        "Current Stock", "Minimum Stock", "Low Stock",
        "Expiry Date", "Stock Date", "Value",
    ]
    ws.append(headers)

    units = {b.batch_id: getattr(b.item, "unit_of_measurements", None) for b in batches}
    for s in snaps:
        price = s.item.unit_price if s.item is not None else ZERO
        ws.append([
            s.batch_id,
            s.item_id,
            s.item.item_name if s.item is not None else "",
            units.get(s.batch_id) or "",
            float(price),
            s.current_stock,
            s.minimum_stock,
            "YES" if is_low_stock(s) else "NO",
            s.expiry_date,
            s.stock_date,
            float(price * s.current_stock),
        ])

    ws.append([])
    ws.append(["", "", "", "", "", "", "", "", "", "Total Value",
               float(compute_total_inventory_value(snaps))])

    # column widths
    for col in range(1, len(headers) + 1):
        ws.column_dimensions[get_column_letter(col)].width = 16
    ws.column_dimensions["C"].width = 32

    wb.save(fp)
