# FILE: app/api/routes_inventory_reports.py
from __future__ import annotations

from datetime import date
from io import BytesIO
from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.api.deps import get_db, db_failure
from app.api.routes_inventory_items import load_batches_with_items
from app.models.inventory import Batch, StockIssue, PurchaseOrder, PurchaseOrderItem
from app.services.excel_export import build_stock_report_excel
from app.services.inventory_reports import (
    stock_report_rows,
    usage_report_rows,
    purchase_report_rows,
)
from app.services.inventory_rollups import (
    snapshot_batches,
    compute_total_inventory_value,
    compute_low_stock,
    compute_expiring_soon,
)
from app.services.pdf_inventory import build_stock_alerts_pdf

router = APIRouter(prefix="/inventory/reports", tags=["Inventory - Reports"])

XLSX_MEDIA = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/stock", response_model=List[Dict[str, Any]])
def stock_report(db: Session = Depends(get_db)):
    try:
        rows = load_batches_with_items(db)
    except SQLAlchemyError:
        raise db_failure(db, "Failed to generate stock report")
    return stock_report_rows(rows)


@router.get("/usage", response_model=List[Dict[str, Any]])
def usage_report(db: Session = Depends(get_db)):
    try:
        issues = (
            db.query(StockIssue)
            .options(joinedload(StockIssue.batch).joinedload(Batch.item))
            .order_by(StockIssue.stock_issue_id.asc())
            .all()
        )
    except SQLAlchemyError:
        raise db_failure(db, "Failed to generate usage report")
    return usage_report_rows(issues)


@router.get("/purchase", response_model=List[Dict[str, Any]])
def purchase_report(db: Session = Depends(get_db)):
    try:
        lines = (
            db.query(PurchaseOrderItem)
            .options(
                joinedload(PurchaseOrderItem.item),
                joinedload(PurchaseOrderItem.purchase_order).joinedload(PurchaseOrder.supplier),
            )
            .order_by(PurchaseOrderItem.purchase_order_id.asc(), PurchaseOrderItem.item_id.asc())
            .all()
        )
    except SQLAlchemyError:
        raise db_failure(db, "Failed to generate purchase report")
    return purchase_report_rows(lines)


@router.get("/stock/export")
def export_stock_report(db: Session = Depends(get_db)):
    try:
        rows = load_batches_with_items(db)
    except SQLAlchemyError:
        raise db_failure(db, "Failed to export stock report")

    buf = BytesIO()
    build_stock_report_excel(buf, rows)
    buf.seek(0)
    filename = f"stock_report_{date.today():%Y%m%d}.xlsx"
    return StreamingResponse(
        buf,
        media_type=XLSX_MEDIA,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/alerts/pdf")
def stock_alerts_pdf(db: Session = Depends(get_db)):
    try:
        rows = load_batches_with_items(db)
    except SQLAlchemyError:
        raise db_failure(db, "Failed to generate stock alerts")

    today = date.today()
    snaps = snapshot_batches(rows)
    buf = build_stock_alerts_pdf(
        total_value=compute_total_inventory_value(snaps),
        low_stock=compute_low_stock(snaps),
        expiring=compute_expiring_soon(snaps, today),
        today=today,
    )
    return StreamingResponse(
        buf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="stock_alerts_{today:%Y%m%d}.pdf"'},
    )
