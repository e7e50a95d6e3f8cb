"""
HTTP API tests

Tests cover:
1. Identity header handling
2. The report -> claim -> collect -> redeem flow end to end
3. Error responses and their codes
"""

from ewaste_rewards.models import ReportStatus

REPORT_BODY = {
    "location": "12 Green Street",
    "waste_type": "Laptop",
    "amount": "2 units",
    "verification_result": {
        "wasteType": "Laptop",
        "quantity": "2 units",
        "confidence": 90,
    },
}


def auth(user):
    return {"X-User-Id": str(user.id)}


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_request_id_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"


class TestUsersApi:
    async def test_resolve_is_idempotent(self, client):
        body = {"email": "Maya@Example.com", "name": "Maya"}
        first = await client.post("/api/v1/users/resolve", json=body)
        second = await client.post("/api/v1/users/resolve", json=body)

        assert first.status_code == 200
        assert first.json()["email"] == "maya@example.com"
        assert first.json()["id"] == second.json()["id"]

    async def test_lookup_unknown_email(self, client):
        response = await client.get("/api/v1/users/by-email", params={"email": "ghost@example.com"})
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    async def test_invalid_email_rejected(self, client):
        response = await client.post("/api/v1/users/resolve", json={"email": "nope"})
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestIdentity:
    async def test_missing_header(self, client):
        response = await client.get("/api/v1/rewards/balance")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_unknown_user(self, client):
        response = await client.get("/api/v1/rewards/balance", headers={"X-User-Id": "999"})
        assert response.status_code == 401


class TestCollectionFlow:
    """Report, claim, collect, then spend."""

    async def test_full_flow(self, client, make_user, make_catalog_entry):
        reporter = await make_user("Reporter")
        collector = await make_user("Collector")
        voucher = await make_catalog_entry("Voucher", 15)

        created = await client.post("/api/v1/reports", json=REPORT_BODY, headers=auth(reporter))
        assert created.status_code == 201
        report_id = created.json()["id"]
        assert created.json()["status"] == ReportStatus.PENDING.value

        claimed = await client.post(f"/api/v1/reports/{report_id}/claim", headers=auth(collector))
        assert claimed.status_code == 200
        assert claimed.json()["status"] == "in_progress"
        assert claimed.json()["collector_id"] == collector.id

        collected = await client.post(
            f"/api/v1/reports/{report_id}/collect",
            json={"verification_result": {"wasteType": "Laptop", "quantity": "2 units", "confidence": 95}},
            headers=auth(collector),
        )
        assert collected.status_code == 200
        assert collected.json()["status"] == "verified"

        status = await client.get(f"/api/v1/reports/{report_id}/status")
        assert status.json()["status"] == "completed"

        balance = await client.get("/api/v1/rewards/balance", headers=auth(collector))
        assert balance.json()["balance"] == 20

        unread = await client.get("/api/v1/notifications/unread", headers=auth(reporter))
        assert len(unread.json()) == 1
        notification_id = unread.json()[0]["id"]
        marked = await client.post(f"/api/v1/notifications/{notification_id}/read")
        assert marked.json() == {"notification_id": notification_id, "updated": True}

        # Entries above the balance are still listed; the cost tells them apart
        catalog = await client.get("/api/v1/rewards/catalog", headers=auth(reporter))
        assert [e["id"] for e in catalog.json()] == [0, voucher.id]
        assert catalog.json()[0]["cost"] == 10
        assert catalog.json()[1]["cost"] == 15

        catalog = await client.get("/api/v1/rewards/catalog", headers=auth(collector))
        assert [e["id"] for e in catalog.json()] == [0, voucher.id]

        redeemed = await client.post(f"/api/v1/rewards/redeem/{voucher.id}", headers=auth(collector))
        assert redeemed.status_code == 200
        assert redeemed.json()["balance"] == 5

        history = await client.get("/api/v1/rewards/transactions", headers=auth(collector))
        assert [t["type"] for t in history.json()["transactions"]] == ["redeemed", "earned_collect"]
        assert history.json()["balance"] == 5

        impact = await client.get("/api/v1/stats/impact")
        assert impact.json()["tokens_earned"] == 30

        board = await client.get("/api/v1/rewards/leaderboard")
        assert [e["user_name"] for e in board.json()] == ["Reporter", "Collector"]

    async def test_collected_listing(self, client, make_user, make_report):
        reporter = await make_user()
        collector = await make_user()
        report = await make_report(reporter, status=ReportStatus.IN_PROGRESS, collector=collector)

        await client.post(f"/api/v1/reports/{report.id}/collect", json={}, headers=auth(collector))
        listed = await client.get("/api/v1/reports/collected", headers=auth(collector))

        assert [c["report_id"] for c in listed.json()] == [report.id]


class TestErrorMapping:
    async def test_no_waste_detected(self, client, make_user):
        user = await make_user()
        body = dict(REPORT_BODY, waste_type="none")

        response = await client.post("/api/v1/reports", json=body, headers=auth(user))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "NO_WASTE_DETECTED"

    async def test_report_not_found(self, client):
        response = await client.get("/api/v1/reports/999/status")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "REPORT_NOT_FOUND"

    async def test_collect_pending_conflict(self, client, make_user, make_report):
        reporter = await make_user()
        collector = await make_user()
        report = await make_report(reporter)

        response = await client.post(
            f"/api/v1/reports/{report.id}/collect", json={}, headers=auth(collector)
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"

    async def test_collect_by_other_collector(self, client, make_user, make_report):
        reporter = await make_user()
        collector = await make_user()
        intruder = await make_user()
        report = await make_report(reporter, status=ReportStatus.IN_PROGRESS, collector=collector)

        response = await client.post(
            f"/api/v1/reports/{report.id}/collect", json={}, headers=auth(intruder)
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    async def test_complete_via_status_update_refused(self, client, make_user, make_report):
        reporter = await make_user()
        collector = await make_user()
        report = await make_report(reporter, status=ReportStatus.IN_PROGRESS, collector=collector)

        response = await client.patch(
            f"/api/v1/reports/{report.id}/status",
            json={"status": "completed"},
            headers=auth(collector),
        )

        assert response.status_code == 409

    async def test_insufficient_balance(self, client, make_user, make_catalog_entry, credit):
        user = await make_user()
        await credit(user, 40)
        entry = await make_catalog_entry("Voucher", 50)

        response = await client.post(f"/api/v1/rewards/redeem/{entry.id}", headers=auth(user))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INSUFFICIENT_BALANCE"

    async def test_unknown_reward(self, client, make_user):
        user = await make_user()
        response = await client.post("/api/v1/rewards/redeem/999", headers=auth(user))
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "UNKNOWN_REWARD"

    async def test_nothing_to_redeem(self, client, make_user):
        user = await make_user()
        response = await client.post("/api/v1/rewards/redeem/0", headers=auth(user))
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "NO_POINTS_TO_REDEEM"

    async def test_mark_unknown_notification(self, client):
        response = await client.post("/api/v1/notifications/999/read")
        assert response.status_code == 200
        assert response.json()["updated"] is False
