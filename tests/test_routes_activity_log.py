"""
API tests for /api/inventory/activity-log.
"""

from datetime import date, datetime

from app.core.config import settings
from app.models.activity_log import ActivityLog
from app.services.activity_logger import log_activity

LOGS = "/api/inventory/activity-log"


def _entry(**overrides):
    body = {
        "subject": "item",
        "event": "create",
        "date": "2026-02-14",
        "time": "09:30:00",
        "details": "Composite Resin A2",
    }
    body.update(overrides)
    return body


class TestActivityLog:

    def test_create_and_get(self, client):
        r = client.post(LOGS, json=_entry())
        assert r.status_code == 201, r.text
        log = r.json()
        assert log["date"] == "2026-02-14"
        assert log["time"] == "09:30:00"

        r = client.get(f"{LOGS}/{log['activity_log_id']}")
        assert r.status_code == 200
        assert r.json()["details"] == "Composite Resin A2"

    def test_missing_field_is_400(self, client):
        body = _entry()
        del body["event"]
        r = client.post(LOGS, json=body)
        assert r.status_code == 400
        assert r.json()["message"] == "All fields are required"
        assert client.get(LOGS).json() == []

    def test_details_are_optional(self, client):
        body = _entry()
        del body["details"]
        assert client.post(LOGS, json=body).status_code == 201

    def test_unknown_log_is_404(self, client):
        r = client.get(f"{LOGS}/4040")
        assert r.status_code == 404
        assert r.json()["message"] == "Log not found"

    def test_list_is_newest_first(self, client):
        for event in ("create", "edit", "delete"):
            client.post(LOGS, json=_entry(event=event))
        assert [log["event"] for log in client.get(LOGS).json()] == ["delete", "edit", "create"]

    def test_recent_is_capped(self, client):
        for n in range(settings.RECENT_ACTIVITY_LIMIT + 3):
            client.post(LOGS, json=_entry(details=f"entry {n}"))

        recent = client.get(f"{LOGS}/recent").json()
        assert len(recent) == settings.RECENT_ACTIVITY_LIMIT
        assert recent[0]["details"] == f"entry {settings.RECENT_ACTIVITY_LIMIT + 2}"

    def test_filter_by_date(self, client):
        client.post(LOGS, json=_entry(date="2026-02-14", time="15:00:00", event="late"))
        client.post(LOGS, json=_entry(date="2026-02-14", time="08:00:00", event="early"))
        client.post(LOGS, json=_entry(date="2026-02-15"))

        r = client.get(f"{LOGS}/filter/by-date/2026-02-14")
        assert r.status_code == 200
        assert [log["event"] for log in r.json()] == ["early", "late"]
        assert client.get(f"{LOGS}/filter/by-date/2026-01-01").json() == []

    def test_delete(self, client):
        log_id = client.post(LOGS, json=_entry()).json()["activity_log_id"]
        r = client.delete(f"{LOGS}/{log_id}")
        assert r.status_code == 200
        assert r.json() == {"message": "Log deleted successfully"}
        assert client.get(f"{LOGS}/{log_id}").status_code == 404


class TestLogActivity:

    def test_row_joins_caller_transaction(self, db_session):
        log_activity(db_session, subject="item", event="edit", details="x",
                     now=datetime(2026, 2, 14, 10, 15, 30, 123456))
        db_session.rollback()
        assert db_session.query(ActivityLog).count() == 0

    def test_stamps_date_and_time(self, db_session):
        log = log_activity(db_session, subject="batch", event="create",
                           now=datetime(2026, 2, 14, 10, 15, 30, 123456))
        db_session.commit()
        assert log.date == date(2026, 2, 14)
        assert log.time.isoformat() == "10:15:30"
