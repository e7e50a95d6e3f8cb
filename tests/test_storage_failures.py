"""
Behaviour when the database fails

Tests cover:
1. Ledger writes roll back and raise PersistenceException
2. Read-only listings log and return empty results
3. mark_read swallows commit failures
4. The HTTP layer maps storage failures to 503
"""

import logging

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from ewaste_rewards.core.exceptions import PersistenceException
from ewaste_rewards.models import Transaction, TransactionType
from ewaste_rewards.services.balance_service import BalanceService
from ewaste_rewards.services.notification_service import NotificationService
from ewaste_rewards.services.redemption_service import RedemptionService
from ewaste_rewards.services.reward_service import FULL_REDEMPTION_ID, RewardService
from ewaste_rewards.services.transaction_service import TransactionService


def database_locked(statement="COMMIT"):
    return OperationalError(statement, {}, Exception("database is locked"))


async def failing_commit():
    raise database_locked()


async def failing_execute(*args, **kwargs):
    raise database_locked("SELECT")


async def ledger_size(db):
    return await db.scalar(select(func.count(Transaction.id)))


class TestLedgerWriteFailures:
    """Writes that cannot be committed leave the ledger untouched."""

    async def test_append_commit_failure(self, monkeypatch, db, make_user):
        user = await make_user()
        user_id = user.id
        monkeypatch.setattr(db, "commit", failing_commit)

        with pytest.raises(PersistenceException):
            await TransactionService(db).append(user_id, TransactionType.EARNED_REPORT, 10, "Report bonus")

        monkeypatch.undo()
        assert await ledger_size(db) == 0

    async def test_redeem_commit_failure(self, monkeypatch, db, make_user, make_catalog_entry, credit):
        user = await make_user()
        user_id = user.id
        await credit(user, 100)
        entry = await make_catalog_entry("Voucher", 50)
        entry_id = entry.id
        monkeypatch.setattr(db, "commit", failing_commit)

        with pytest.raises(PersistenceException):
            await RedemptionService(db).redeem(user_id, entry_id)

        monkeypatch.undo()
        assert await ledger_size(db) == 1
        assert await BalanceService(db).compute_balance(user_id) == 100

    async def test_full_redemption_commit_failure(self, monkeypatch, db, make_user, credit):
        user = await make_user()
        user_id = user.id
        await credit(user, 40)
        monkeypatch.setattr(db, "commit", failing_commit)

        with pytest.raises(PersistenceException):
            await RedemptionService(db).redeem(user_id, FULL_REDEMPTION_ID)

        monkeypatch.undo()
        assert await BalanceService(db).compute_balance(user_id) == 40

    async def test_balance_read_failure_raises(self, monkeypatch, db, make_user):
        user = await make_user()
        user_id = user.id
        monkeypatch.setattr(db, "execute", failing_execute)

        with pytest.raises(PersistenceException):
            await BalanceService(db).compute_balance(user_id)


class TestDegradedReads:
    """Convenience listings fall back to empty results."""

    async def test_unread_notifications_empty(self, monkeypatch, caplog, db, make_user):
        user = await make_user()
        user_id = user.id
        await NotificationService(db).create_notification(user_id, "hello", "reward")
        monkeypatch.setattr(db, "execute", failing_execute)

        with caplog.at_level(logging.ERROR):
            unread = await NotificationService(db).list_unread(user_id)

        assert unread == []
        assert "Error fetching unread notifications" in caplog.text

    async def test_available_rewards_empty(self, monkeypatch, caplog, db, make_user, make_catalog_entry):
        user = await make_user()
        user_id = user.id
        await make_catalog_entry("Voucher", 50)
        monkeypatch.setattr(db, "execute", failing_execute)

        with caplog.at_level(logging.ERROR):
            entries = await RewardService(db).list_available(user_id)

        assert entries == []
        assert "Error fetching available rewards" in caplog.text


class TestMarkReadFailure:
    """mark_read reports failure instead of raising."""

    async def test_commit_failure_returns_false(self, monkeypatch, caplog, db, make_user):
        user = await make_user()
        user_id = user.id
        notification = await NotificationService(db).create_notification(user_id, "hello", "reward")
        notification_id = notification.id
        monkeypatch.setattr(db, "commit", failing_commit)

        with caplog.at_level(logging.ERROR):
            updated = await NotificationService(db).mark_read(notification_id)

        assert updated is False
        assert "Error marking notification" in caplog.text

        monkeypatch.undo()
        unread = await NotificationService(db).list_unread(user_id)
        assert [n.id for n in unread] == [notification_id]


class TestHttpStorageFailure:
    """Storage failures surface as 503 with a retryable message."""

    async def test_report_submission_503(self, monkeypatch, client, make_user):
        user = await make_user()
        user_id = user.id

        async def broken_commit(self):
            raise database_locked()

        monkeypatch.setattr(AsyncSession, "commit", broken_commit)

        response = await client.post(
            "/api/v1/reports",
            json={"location": "12 Green Street", "waste_type": "Laptop", "amount": "2 units"},
            headers={"X-User-Id": str(user_id)},
        )

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "PERSISTENCE_ERROR"
        assert "please retry" in response.json()["error"]["message"]
