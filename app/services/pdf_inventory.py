# FILE: app/services/pdf_inventory.py
from __future__ import annotations
from io import BytesIO
from datetime import datetime, date
from decimal import Decimal
from typing import Iterable, Sequence, Any

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from reportlab.lib.units import mm
from reportlab.lib import colors

from app.core.config import settings
from app.services.inventory_rollups import StockGroup, alert_date_for


def _fmt_date(d: Any) -> str:
    if not d:
        return ""
    if isinstance(d, (datetime, date)):
        return d.strftime("%d-%m-%Y")
    return str(d)


def _new_canvas() -> tuple[canvas.Canvas, BytesIO]:
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    return c, buf


def _draw_header(c: canvas.Canvas,
                 main_title: str,
                 sub_title: str = "") -> float:
    w, h = A4
    x = 18 * mm
    y = h - 20 * mm

    c.setFont("Helvetica-Bold", 14)
    c.drawString(x, y, settings.CLINIC_NAME)

    y -= 7 * mm
    c.setFont("Helvetica-Bold", 12)
    c.drawString(x, y, main_title)

    if sub_title:
        y -= 5 * mm
        c.setFont("Helvetica", 10)
        c.drawString(x, y, sub_title)

    y -= 4 * mm
    c.setStrokeColor(colors.grey)
    c.setLineWidth(0.6)
    c.line(x, y, w - x, y)
    y -= 6 * mm
    return y


def _table(
    c: canvas.Canvas,
    y: float,
    headers: Sequence[str],
    rows: Iterable[Sequence[str]],
    col_widths_mm: Sequence[float],
) -> float:
    """Simple table, repeats the header row after a page break."""
    x0 = 18 * mm
    col_points = [w * mm for w in col_widths_mm]
    total_width = sum(col_points)

    def _head(y: float) -> float:
        c.setFont("Helvetica-Bold", 9)
        for i, htxt in enumerate(headers):
            c.drawString(x0 + sum(col_points[:i]), y, htxt)
        y -= 4 * mm
        c.setLineWidth(0.4)
        c.line(x0, y, x0 + total_width, y)
        y -= 5 * mm
        c.setFont("Helvetica", 9)
        return y

    y = _head(y)
    for row in rows:
        if y < 25 * mm:
            c.showPage()
            y = _draw_header(c, "Continued", "")
            y = _head(y - 4 * mm)

        for i, cell in enumerate(row):
            txt = (cell or "")[:48]
            c.drawString(x0 + sum(col_points[:i]), y, txt)
        y -= 4 * mm

    return y


def _section(c: canvas.Canvas, y: float, title: str) -> float:
    if y < 40 * mm:
        c.showPage()
        y = _draw_header(c, "Continued", "")
    c.setFont("Helvetica-Bold", 11)
    c.drawString(18 * mm, y, title)
    return y - 7 * mm


# ===================== STOCK ALERTS PDF =====================


def build_stock_alerts_pdf(
    *,
    total_value: Decimal,
    low_stock: Sequence[StockGroup],
    expiring: Sequence[StockGroup],
    today: date,
) -> BytesIO:
    c, buf = _new_canvas()
    y = _draw_header(c, "Inventory Stock Alerts", f"As on {_fmt_date(today)}")

    c.setFont("Helvetica", 10)
    c.drawString(18 * mm, y, f"Total inventory value : {total_value:.2f}")
    y -= 10 * mm

    y = _section(c, y, f"Low stock ({sum(len(g.batches) for g in low_stock)} batches)")
    rows = []
    for g in low_stock:
        for b in g.batches:
            rows.append([
                g.item.item_name,
                str(b.batch_id),
                str(b.current_stock),
                str(b.minimum_stock),
                _fmt_date(b.expiry_date),
            ])
    if not rows:
        rows.append(["No low-stock batches", "", "", "", ""])
    y = _table(c, y, ["Item", "Batch", "Stock", "Minimum", "Expiry"], rows, [70, 20, 22, 22, 30])
    y -= 8 * mm

    y = _section(c, y, f"Expiring soon ({sum(len(g.batches) for g in expiring)} batches)")
    rows = []
    for g in expiring:
        for b in g.batches:
            rows.append([
                g.item.item_name,
                str(b.batch_id),
                str(b.current_stock),
                _fmt_date(b.expiry_date),
                _fmt_date(alert_date_for(g.item, today)),
            ])
    if not rows:
        rows.append(["No batches expiring", "", "", "", ""])
    _table(c, y, ["Item", "Batch", "Stock", "Expiry", "Window Ends"], rows, [70, 20, 22, 30, 30])

    c.showPage()
    c.save()
    buf.seek(0)
    return buf
