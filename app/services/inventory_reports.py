from __future__ import annotations

from typing import Any, Dict, Iterable, List


def _item_brief(item) -> Dict[str, Any]:
    if item is None:
        return {}
    return {
        "item_id": item.item_id,
        "item_name": item.item_name,
        "unit_of_measurement": item.unit_of_measurements,
        "unit_price": item.unit_price,
    }


def stock_report_rows(batches: Iterable) -> List[Dict[str, Any]]:
    return [
        {
            "batch_id": b.batch_id,
            "current_stock": b.current_stock,
            "minimum_stock": b.minimum_stock,
            "expiry_date": b.expiry_date,
            "stock_date": b.stock_date,
            "item": _item_brief(b.item),
        }
        for b in batches
    ]


def usage_report_rows(issues: Iterable) -> List[Dict[str, Any]]:
    rows = []
    for issue in issues:
        batch = issue.batch
        rows.append({
            "stock_issue_id": issue.stock_issue_id,
            "quantity": issue.quantity,
            "usage_type": issue.usage_type or "",
            "issued_to": issue.issued_to or "",
            "date": issue.date,
            "batch": {
                "batch_id": issue.batch_id,
                "item": _item_brief(batch.item if batch is not None else None),
            },
        })
    return rows


def purchase_report_rows(lines: Iterable) -> List[Dict[str, Any]]:
    rows = []
    for line in lines:
        po = line.purchase_order
        supplier = po.supplier if po is not None else None
        rows.append({
            "quantity": line.quantity,
            "unit_price": line.unit_price,
            "purchase_order": {
                "purchase_order_id": line.purchase_order_id,
                "requested_by": getattr(po, "requested_by", None),
                "expected_delivery_date": getattr(po, "expected_delivery_date", None),
                "order_date": getattr(po, "order_date", None),
                "supplier": {
                    "supplier_id": getattr(supplier, "supplier_id", None),
                    "supplier_name": getattr(supplier, "company_name", None),
                },
            },
            "item": _item_brief(line.item),
        })
    return rows
