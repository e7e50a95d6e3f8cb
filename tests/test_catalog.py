"""Tests for the redeemable catalog, reward accounts and the leaderboard"""

from ewaste_rewards.models import TransactionType
from ewaste_rewards.services.reward_service import FULL_REDEMPTION_ID, RewardService


class TestAvailableRewards:
    """Catalog as shown to a user."""

    async def test_your_points_entry_comes_first(self, db, make_user, credit):
        user = await make_user()
        await credit(user, 30)

        entries = await RewardService(db).list_available(user.id)

        assert entries[0].id == FULL_REDEMPTION_ID
        assert entries[0].name == "Your Points"
        assert entries[0].cost == 30

    async def test_free_and_unavailable_entries_are_hidden(self, db, make_user, make_catalog_entry):
        user = await make_user()
        await make_catalog_entry("Sticker", 0)
        voucher = await make_catalog_entry("Voucher", 50)
        await make_catalog_entry("Bicycle", 100, is_available=False)

        entries = await RewardService(db).list_available(user.id)

        assert [e.id for e in entries] == [FULL_REDEMPTION_ID, voucher.id]
        assert entries[1].cost == 50
        assert entries[1].collection_info == ""

    async def test_entries_sorted_by_cost(self, db, make_user, make_catalog_entry):
        user = await make_user()
        await make_catalog_entry("Tree Planting", 200)
        await make_catalog_entry("Coffee", 25)
        await make_catalog_entry("Tote Bag", 80)

        entries = await RewardService(db).list_available(user.id)

        assert [e.cost for e in entries[1:]] == [25, 80, 200]

    async def test_zero_balance_still_lists_your_points(self, db, make_user):
        user = await make_user()
        entries = await RewardService(db).list_available(user.id)
        assert len(entries) == 1
        assert entries[0].cost == 0


class TestRewardAccount:
    """Per-user display account."""

    async def test_account_created_once(self, db, make_user):
        user = await make_user()
        service = RewardService(db)

        first = await service.get_or_create_account(user.id)
        await db.commit()
        second = await service.get_or_create_account(user.id)

        assert first.id == second.id
        assert second.points == 0
        assert second.level == 1
        assert second.name == "Default Reward"

    async def test_cached_points_never_negative(self, db, make_user):
        user = await make_user()
        service = RewardService(db)

        await service.adjust_cached_points(user.id, 10)
        account = await service.adjust_cached_points(user.id, -25)
        await db.commit()

        assert account.points == 0


class TestLeaderboard:
    """Ranking by cached points."""

    async def test_leaderboard_ordered_by_points(self, db, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        service = RewardService(db)
        await service.adjust_cached_points(alice.id, 10)
        await service.adjust_cached_points(bob.id, 30)
        await db.commit()

        board = await service.leaderboard()

        assert [(e.user_name, e.points) for e in board] == [("Bob", 30), ("Alice", 10)]

    async def test_leaderboard_limit(self, db, make_user):
        service = RewardService(db)
        for i in range(3):
            user = await make_user(f"User {i}")
            await service.adjust_cached_points(user.id, i + 1)
        await db.commit()

        assert len(await service.leaderboard(limit=2)) == 2

    async def test_credit_type_is_irrelevant_to_catalog(self, db, make_user, credit):
        user = await make_user()
        await credit(user, 15, TransactionType.EARNED_COLLECT)
        entries = await RewardService(db).list_available(user.id)
        assert entries[0].cost == 15
