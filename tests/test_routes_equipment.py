"""
API tests for equipment, equipment categories and maintenance records.
"""

from decimal import Decimal

import pytest

BASE = "/api/inventory"


def _events(client):
    return [(log["subject"], log["event"]) for log in client.get(f"{BASE}/activity-log").json()]


@pytest.fixture
def category(client):
    r = client.post(f"{BASE}/equipment-categories", json={"equipment_category": "Sterilization"})
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def autoclave(client, category):
    r = client.post(f"{BASE}/equipment", json={
        "equipment_name": "Class B Autoclave",
        "equipment_category_id": category["equipment_category_id"],
        "brand": "W&H",
        "model": "Lisa 522",
        "serial_number": "LS-0042",
        "purchase_date": "2025-06-01",
        "purchase_price": "4200.00",
        "warranty_end_date": "2027-06-01",
    })
    assert r.status_code == 201, r.text
    return r.json()


# =============================================================================
# Equipment categories
# =============================================================================


class TestEquipmentCategories:

    def test_category_lists_its_equipment(self, client, category, autoclave):
        r = client.get(f"{BASE}/equipment-categories/{category['equipment_category_id']}")
        assert r.status_code == 200
        assert [e["equipment_name"] for e in r.json()["equipments"]] == ["Class B Autoclave"]

        listed = client.get(f"{BASE}/equipment-categories").json()
        assert [c["equipment_category"] for c in listed] == ["Sterilization"]

    def test_update_and_delete(self, client, category):
        cid = category["equipment_category_id"]
        r = client.put(f"{BASE}/equipment-categories/{cid}", json={"equipment_category": "Sterilisation"})
        assert r.status_code == 202
        assert r.json()["equipment_category"] == "Sterilisation"

        r = client.delete(f"{BASE}/equipment-categories/{cid}")
        assert r.status_code == 200
        assert r.json() == {"message": "Equipment category deleted"}
        assert client.get(f"{BASE}/equipment-categories/{cid}").status_code == 404

        assert _events(client) == [
            ("equipment-category", "delete"),
            ("equipment-category", "edit"),
            ("equipment-category", "create"),
        ]

    def test_name_is_required(self, client):
        r = client.post(f"{BASE}/equipment-categories", json={})
        assert r.status_code == 422

    def test_deleting_category_keeps_equipment(self, client, category, autoclave):
        client.delete(f"{BASE}/equipment-categories/{category['equipment_category_id']}")
        r = client.get(f"{BASE}/equipment/{autoclave['equipment_id']}")
        assert r.status_code == 200
        assert r.json()["equipment_category"] is None


# =============================================================================
# Equipment
# =============================================================================


class TestEquipment:

    def test_create_returns_fields(self, autoclave):
        assert autoclave["model"] == "Lisa 522"
        assert autoclave["status"] == "active"
        assert Decimal(str(autoclave["purchase_price"])) == Decimal("4200.00")

    def test_count(self, client):
        assert client.get(f"{BASE}/equipment/count").json() == 0
        for name in ("Dental Chair 1", "Dental Chair 2", "Intraoral Camera"):
            client.post(f"{BASE}/equipment", json={"equipment_name": name})
        r = client.get(f"{BASE}/equipment/count")
        assert r.status_code == 200
        assert r.json() == 3

    def test_detail_includes_category_and_maintenance(self, client, autoclave):
        eid = autoclave["equipment_id"]
        client.post(f"{BASE}/maintenance", json={
            "equipment_id": eid, "maintain_type": "preventive",
            "maintenance_date": "2026-01-15", "performed_by": "Service Tech",
        })

        r = client.get(f"{BASE}/equipment/{eid}")
        assert r.status_code == 200
        body = r.json()
        assert body["equipment_category"]["equipment_category"] == "Sterilization"
        assert [m["performed_by"] for m in body["maintenances"]] == ["Service Tech"]
        assert len(client.get(f"{BASE}/equipment").json()) == 1

    def test_unknown_category_is_404(self, client):
        r = client.post(f"{BASE}/equipment", json={"equipment_name": "X-ray", "equipment_category_id": 99})
        assert r.status_code == 404
        assert r.json()["message"] == "Equipment category not found"
        assert client.get(f"{BASE}/equipment/count").json() == 0

    def test_update_is_202_and_logged(self, client, autoclave):
        eid = autoclave["equipment_id"]
        r = client.put(f"{BASE}/equipment/{eid}", json={"status": "under_repair", "location": "Sterile room"})
        assert r.status_code == 202
        assert r.json()["status"] == "under_repair"
        assert r.json()["equipment_name"] == "Class B Autoclave"
        assert ("equipment", "edit") in _events(client)

    def test_missing_equipment(self, client):
        assert client.get(f"{BASE}/equipment/404").status_code == 404
        assert client.put(f"{BASE}/equipment/404", json={"status": "retired"}).status_code == 404
        assert client.delete(f"{BASE}/equipment/404").status_code == 404

    def test_delete_removes_maintenance(self, client, autoclave):
        eid = autoclave["equipment_id"]
        client.post(f"{BASE}/maintenance", json={"equipment_id": eid, "maintain_type": "corrective"})

        r = client.delete(f"{BASE}/equipment/{eid}")
        assert r.status_code == 200
        assert r.json() == {"message": "Equipment deleted"}
        assert client.get(f"{BASE}/maintenance").json() == []
        assert ("equipment", "delete") in _events(client)


# =============================================================================
# Maintenance
# =============================================================================


class TestMaintenance:

    def test_create_get_update_delete(self, client, autoclave, today):
        r = client.post(f"{BASE}/maintenance", json={
            "equipment_id": autoclave["equipment_id"],
            "maintain_type": "corrective",
            "description": "Replaced door seal",
            "cost": "85.50",
        })
        assert r.status_code == 201, r.text
        rec = r.json()
        assert rec["maintenance_date"] == str(today)
        assert Decimal(str(rec["cost"])) == Decimal("85.50")

        mid = rec["maintenance_id"]
        r = client.get(f"{BASE}/maintenance/{mid}")
        assert r.status_code == 200
        assert r.json()["equipment"]["equipment_name"] == "Class B Autoclave"

        r = client.put(f"{BASE}/maintenance/{mid}", json={"next_maintenance_date": "2026-12-01"})
        assert r.status_code == 202
        assert r.json()["next_maintenance_date"] == "2026-12-01"

        r = client.delete(f"{BASE}/maintenance/{mid}")
        assert r.status_code == 200
        assert r.json() == {"message": "Maintenance record deleted"}
        assert client.get(f"{BASE}/maintenance/{mid}").status_code == 404

        maintenance_events = [e for s, e in _events(client) if s == "maintenance"]
        assert maintenance_events == ["delete", "edit", "create"]

    def test_unknown_equipment_is_404(self, client):
        r = client.post(f"{BASE}/maintenance", json={"equipment_id": 321, "maintain_type": "preventive"})
        assert r.status_code == 404
        assert r.json()["message"] == "Equipment not found"
