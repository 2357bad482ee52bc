"""
Tests for issue_stock, the stock-out service.
"""

import pytest

from app.models.activity_log import ActivityLog
from app.models.inventory import Batch, StockIssue, UsageType
from app.services.inventory_stock import (
    BatchNotFoundError,
    InsufficientStockError,
    issue_stock,
)


def _fresh_stock(db, batch_id):
    db.expire_all()
    return db.get(Batch, batch_id).current_stock


class TestIssueStock:

    def test_decrements_batch_and_records_issue(self, db_session, seeded, today):
        batch_id = seeded["batches"][1].batch_id

        issue = issue_stock(
            db_session,
            batch_id=batch_id,
            quantity=3,
            usage_type=UsageType.TREATMENT,
            issued_to="Dr. Rao",
            notes="Class II filling",
        )
        db_session.commit()

        assert _fresh_stock(db_session, batch_id) == 17
        assert issue.stock_issue_id is not None
        assert issue.quantity == 3
        assert issue.usage_type == "treatment"
        assert issue.date == today

    def test_writes_stock_out_activity(self, db_session, seeded):
        batch_id = seeded["batches"][2].batch_id

        issue_stock(db_session, batch_id=batch_id, quantity=4, usage_type="wasted", issued_to="")
        db_session.commit()

        log = db_session.query(ActivityLog).filter(ActivityLog.event == "stock-out").one()
        assert log.subject == "batch"
        assert log.details == "Stock Out - Nitrile Gloves M: 4 box by Staff User (wasted)"

    def test_notes_are_appended_to_activity_details(self, db_session, seeded):
        batch_id = seeded["batches"][1].batch_id

        issue_stock(db_session, batch_id=batch_id, quantity=1, issued_to="Nurse Kim", notes="spilled")
        db_session.commit()

        log = db_session.query(ActivityLog).filter(ActivityLog.event == "stock-out").one()
        assert log.details.endswith("by Nurse Kim (treatment) - spilled")

    def test_issuing_whole_batch_leaves_zero(self, db_session, seeded):
        batch_id = seeded["batches"][0].batch_id

        issue_stock(db_session, batch_id=batch_id, quantity=5)
        db_session.commit()

        assert _fresh_stock(db_session, batch_id) == 0

    def test_over_issue_is_rejected_without_changes(self, db_session, seeded):
        batch_id = seeded["batches"][0].batch_id

        with pytest.raises(InsufficientStockError) as exc:
            issue_stock(db_session, batch_id=batch_id, quantity=10)
        db_session.rollback()

        assert exc.value.requested == 10
        assert exc.value.available == 5
        assert str(exc.value) == "Cannot issue 10 items. Only 5 available."
        assert _fresh_stock(db_session, batch_id) == 5
        assert db_session.query(StockIssue).count() == 0
        assert db_session.query(ActivityLog).count() == 0

    def test_unknown_batch(self, db_session, seeded):
        with pytest.raises(BatchNotFoundError):
            issue_stock(db_session, batch_id=9999, quantity=1)
        db_session.rollback()

        assert db_session.query(StockIssue).count() == 0

    @pytest.mark.parametrize("qty", [0, -3])
    def test_non_positive_quantity(self, db_session, seeded, qty):
        batch_id = seeded["batches"][1].batch_id
        with pytest.raises(ValueError):
            issue_stock(db_session, batch_id=batch_id, quantity=qty)

        assert _fresh_stock(db_session, batch_id) == 20

    def test_unknown_usage_type(self, db_session, seeded):
        batch_id = seeded["batches"][1].batch_id
        with pytest.raises(ValueError):
            issue_stock(db_session, batch_id=batch_id, quantity=1, usage_type="borrowed")

    def test_sequential_issues_never_go_negative(self, db_session, seeded):
        batch_id = seeded["batches"][3].batch_id  # 8 in stock

        issue_stock(db_session, batch_id=batch_id, quantity=5)
        db_session.commit()
        with pytest.raises(InsufficientStockError) as exc:
            issue_stock(db_session, batch_id=batch_id, quantity=5)
        db_session.rollback()

        assert exc.value.available == 3
        assert _fresh_stock(db_session, batch_id) == 3


class TestIssueStockAcrossSessions:

    def test_second_writer_sees_first_writers_decrement(self, session_factory, seeded):
        batch_id = seeded["batches"][3].batch_id  # 8 in stock
        first, second = session_factory(), session_factory()
        try:
            # second holds a copy read before first commits
            assert second.get(Batch, batch_id).current_stock == 8

            issue_stock(first, batch_id=batch_id, quantity=5, issued_to="Dr. Rao")
            first.commit()

            with pytest.raises(InsufficientStockError) as exc:
                issue_stock(second, batch_id=batch_id, quantity=5, issued_to="Nurse Kim")
            second.rollback()

            assert exc.value.available == 3
        finally:
            first.close()
            second.close()

        check = session_factory()
        try:
            assert check.get(Batch, batch_id).current_stock == 3
            issues = check.query(StockIssue).all()
            assert [(i.quantity, i.issued_to) for i in issues] == [(5, "Dr. Rao")]
        finally:
            check.close()

    def test_both_writers_succeed_when_stock_allows(self, session_factory, seeded):
        batch_id = seeded["batches"][2].batch_id  # 40 in stock
        first, second = session_factory(), session_factory()
        try:
            second.get(Batch, batch_id)
            issue_stock(first, batch_id=batch_id, quantity=15)
            first.commit()
            issue_stock(second, batch_id=batch_id, quantity=15)
            second.commit()
        finally:
            first.close()
            second.close()

        check = session_factory()
        try:
            # no lost update: both decrements land
            assert check.get(Batch, batch_id).current_stock == 10
            assert check.query(StockIssue).count() == 2
        finally:
            check.close()
