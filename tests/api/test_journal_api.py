from datetime import date, timedelta

import pytest


def days_ago(n):
    return date.today() - timedelta(days=n)


# =================================================
# RITUALS
# =================================================

@pytest.mark.asyncio
async def test_create_and_list_rituals(client, auth_headers):
    for n, score in [(1, 6), (2, 4)]:
        response = await client.post(
            "/api/rituals",
            json={"date": days_ago(n).isoformat(), "embodiment_score": score, "intention": "Trade my plan"},
            headers=auth_headers,
        )
        assert response.status_code == 201

    response = await client.get("/api/rituals", params={"days": 7}, headers=auth_headers)

    assert response.status_code == 200
    assert [r["embodiment_score"] for r in response.json()] == [4, 6]


@pytest.mark.asyncio
async def test_one_ritual_per_day(client, auth_headers):
    payload = {"date": days_ago(0).isoformat(), "embodiment_score": 5}

    first = await client.post("/api/rituals", json=payload, headers=auth_headers)
    second = await client.post("/api/rituals", json=payload, headers=auth_headers)

    assert first.status_code == 201
    assert second.status_code == 409


@pytest.mark.asyncio
async def test_ritual_insert_race_returns_conflict(
    client, async_session, user, auth_headers, add_ritual, monkeypatch
):
    await add_ritual(user.id, on=days_ago(0), score=5)

    # The duplicate check misses the row, as when another request commits first
    real_execute = async_session.execute

    class NoRow:
        def scalar_one_or_none(self):
            return None

    async def execute(statement, *args, **kwargs):
        if "daily_rituals" in str(statement):
            return NoRow()
        return await real_execute(statement, *args, **kwargs)

    monkeypatch.setattr(async_session, "execute", execute)

    response = await client.post(
        "/api/rituals",
        json={"date": days_ago(0).isoformat(), "embodiment_score": 7},
        headers=auth_headers,
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Daily ritual already exists for this date"


@pytest.mark.asyncio
async def test_ritual_score_out_of_range(client, auth_headers):
    response = await client.post(
        "/api/rituals",
        json={"date": days_ago(0).isoformat(), "embodiment_score": 11},
        headers=auth_headers,
    )
    assert response.status_code == 422
    assert "embodiment_score" in response.json()["errors"]


@pytest.mark.asyncio
async def test_micro_wins(client, auth_headers):
    response = await client.post(
        "/api/micro-wins",
        json={"description": "Closed the platform after my max loss"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["date"] == date.today().isoformat()

    response = await client.get("/api/micro-wins", headers=auth_headers)
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_micro_wins_list_matches_dashboard_week(client, user, auth_headers, add_micro_win):
    await add_micro_win(user.id, on=days_ago(6), description="Inside the week")
    await add_micro_win(user.id, on=days_ago(7), description="Eight days back")

    response = await client.get("/api/micro-wins", headers=auth_headers)
    assert [w["description"] for w in response.json()] == ["Inside the week"]

    response = await client.get("/api/dashboard", headers=auth_headers)
    assert response.json()["stats"]["micro_wins_count"] == 1


# =================================================
# ANALYTICS
# =================================================

@pytest.mark.asyncio
async def test_analytics_overview(client, user, auth_headers, add_trade, add_ritual):
    for n, score in [(1, 2), (2, 5), (3, 8)]:
        await add_ritual(user.id, on=days_ago(n), score=score)
    await add_trade(user.id, on=days_ago(1), pnl=100)
    await add_trade(user.id, on=days_ago(2), pnl=-20, nervous_system_state="fight_flight")

    response = await client.get("/api/analytics", params={"days": 7}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()

    assert body["range_label"] == "Last 7 days"
    assert [p["score"] for p in body["embodiment"]] == [8, 5, 2]
    assert body["identity_performance"] == [
        {"identity": "Disciplined Trader", "avg_pnl": 40.0, "trade_count": 2},
    ]
    assert [b["count"] for b in body["emotional_states"]] == [1, 1, 1]
    assert {row["state"]: row["win_rate"] for row in body["nervous_system"]} == {
        "Calm Confidence": 100.0,
        "Fight/Flight": 0.0,
    }
    assert [p["tab"] for p in body["panels"]] == [
        "embodiment",
        "identity",
        "emotional",
        "nervous_system",
    ]


@pytest.mark.asyncio
async def test_analytics_defaults_to_30_days(client, auth_headers):
    response = await client.get("/api/analytics", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["days"] == 30


@pytest.mark.asyncio
async def test_analytics_rejects_unknown_range(client, auth_headers):
    response = await client.get("/api/analytics", params={"days": 14}, headers=auth_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_analytics_requires_login(client):
    response = await client.get("/api/analytics")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_analytics_ranges(client):
    response = await client.get("/api/analytics/ranges")
    assert [r["value"] for r in response.json()] == [7, 30, 90]


# =================================================
# DASHBOARD
# =================================================

@pytest.mark.asyncio
async def test_dashboard(client, user, auth_headers, add_ritual):
    await add_ritual(user.id, on=days_ago(0), score=9)

    response = await client.get("/api/dashboard", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["stats"]["streak_count"] == 1
    assert body["stats"]["embodiment_score"] == 9
    assert body["streak"]["message"] == "Great start!"
    assert body["embodiment_gauge"]["label"] == "Fully embodied"
    assert len(body["quick_actions"]) == 4


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.json() == {"status": "ok"}
