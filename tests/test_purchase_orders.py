"""
Tests for purchase order totals: compute_po_total and the line endpoints
that keep total_amount current.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.services.purchase_orders import compute_po_total


def _line(qty, price):
    return SimpleNamespace(quantity=qty, unit_price=price)


class TestComputePoTotal:

    def test_sums_quantity_times_price(self):
        lines = [_line(3, Decimal("10.00")), _line(2, Decimal("2.50"))]
        assert compute_po_total(lines) == Decimal("35.00")

    def test_empty_order_is_zero(self):
        assert compute_po_total([]) == Decimal("0.00")

    def test_rounds_half_up_to_cents(self):
        assert compute_po_total([_line(1, "0.005")]) == Decimal("0.01")

    def test_missing_values_count_as_zero(self):
        assert compute_po_total([_line(None, "4"), _line(2, None)]) == Decimal("0.00")


@pytest.fixture
def purchase_order(client, seeded):
    r = client.post(
        "/api/inventory/purchase-orders",
        json={"supplier_id": seeded["supplier"].supplier_id, "requested_by": "Dr. Rao"},
    )
    assert r.status_code == 201, r.text
    return r.json()


class TestPurchaseOrderLines:

    def test_new_order_total_is_zero(self, purchase_order):
        assert Decimal(str(purchase_order["total_amount"])) == Decimal("0")

    def test_unknown_supplier_is_404(self, client):
        r = client.post("/api/inventory/purchase-orders", json={"supplier_id": 4242})
        assert r.status_code == 404
        assert r.json()["message"] == "Supplier not found"

    def test_lines_recompute_total(self, client, seeded, purchase_order):
        po_id = purchase_order["purchase_order_id"]
        composite_id = seeded["composite"].item_id
        gloves_id = seeded["gloves"].item_id

        r = client.post("/api/inventory/purchase-order-items",
                        json={"purchase_order_id": po_id, "item_id": composite_id, "quantity": 3})
        assert r.status_code == 201, r.text
        # unit price falls back to the item's price
        assert Decimal(str(r.json()["unit_price"])) == Decimal("10.00")

        r = client.post("/api/inventory/purchase-order-items",
                        json={"purchase_order_id": po_id, "item_id": gloves_id,
                              "quantity": 4, "unit_price": "2.25"})
        assert r.status_code == 201, r.text

        po = client.get(f"/api/inventory/purchase-orders/{po_id}").json()
        assert Decimal(str(po["total_amount"])) == Decimal("39.00")
        assert len(po["purchase_order_items"]) == 2
        assert po["supplier"]["company_name"] == "Dentsply Supplies"

        r = client.delete(f"/api/inventory/purchase-order-items/{po_id}/{gloves_id}")
        assert r.status_code == 200
        po = client.get(f"/api/inventory/purchase-orders/{po_id}").json()
        assert Decimal(str(po["total_amount"])) == Decimal("30.00")

    def test_duplicate_line_is_rejected(self, client, seeded, purchase_order):
        body = {
            "purchase_order_id": purchase_order["purchase_order_id"],
            "item_id": seeded["composite"].item_id,
            "quantity": 1,
        }
        assert client.post("/api/inventory/purchase-order-items", json=body).status_code == 201
        r = client.post("/api/inventory/purchase-order-items", json=body)
        assert r.status_code == 400

    def test_line_lookup_by_composite_key(self, client, seeded, purchase_order):
        po_id = purchase_order["purchase_order_id"]
        item_id = seeded["composite"].item_id
        client.post("/api/inventory/purchase-order-items",
                    json={"purchase_order_id": po_id, "item_id": item_id, "quantity": 2})

        r = client.get(f"/api/inventory/purchase-order-items/{po_id}/{item_id}")
        assert r.status_code == 200
        body = r.json()
        assert body["quantity"] == 2
        assert body["item"]["item_name"] == "Composite Resin A2"

        assert client.get(f"/api/inventory/purchase-order-items/{po_id}/9999").status_code == 404

    def test_stock_receiving_attaches_to_order(self, client, purchase_order):
        po_id = purchase_order["purchase_order_id"]
        r = client.post("/api/inventory/stock-receiving",
                        json={"purchase_order_id": po_id, "received_by": "Front desk"})
        assert r.status_code == 201, r.text
        assert r.json()["purchase_order"]["purchase_order_id"] == po_id

        po = client.get(f"/api/inventory/purchase-orders/{po_id}").json()
        assert [s["received_by"] for s in po["stock_receivings"]] == ["Front desk"]

    def test_stock_receiving_for_unknown_order_is_404(self, client):
        r = client.post("/api/inventory/stock-receiving", json={"purchase_order_id": 777})
        assert r.status_code == 404

    def test_item_on_order_line_cannot_be_deleted(self, client, seeded, purchase_order):
        po_id = purchase_order["purchase_order_id"]
        iid = seeded["composite"].item_id
        client.post("/api/inventory/purchase-order-items",
                    json={"purchase_order_id": po_id, "item_id": iid, "quantity": 2})

        r = client.delete(f"/api/inventory/items/{iid}")
        assert r.status_code == 400
        assert r.json()["message"] == "Item is on a purchase order"
        assert client.get(f"/api/inventory/items/{iid}").status_code == 200
        assert client.get(f"/api/inventory/purchase-order-items/{po_id}/{iid}").status_code == 200

        client.delete(f"/api/inventory/purchase-order-items/{po_id}/{iid}")
        assert client.delete(f"/api/inventory/items/{iid}").status_code == 200

    def test_delete_order_removes_lines(self, client, seeded, purchase_order):
        po_id = purchase_order["purchase_order_id"]
        client.post("/api/inventory/purchase-order-items",
                    json={"purchase_order_id": po_id, "item_id": seeded["gloves"].item_id, "quantity": 1})

        r = client.delete(f"/api/inventory/purchase-orders/{po_id}")
        assert r.status_code == 200
        assert r.json() == {"message": "Purchase order deleted"}
        assert client.get("/api/inventory/purchase-order-items").json() == []
