"""Goal CRUD through the HTTP API."""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


def _goal_payload(**overrides) -> dict:
    today = date.today()
    payload = {
        "type": "weekly",
        "target_value": 3,
        "unit": "tasks",
        "start_date": today.isoformat(),
        "end_date": (today + timedelta(days=6)).isoformat(),
    }
    payload.update(overrides)
    return payload


async def test_goal_is_achieved_once_current_reaches_target(client: AsyncClient, alice):
    created = await client.post("/api/v1/goals", json=_goal_payload(), headers=alice.headers)
    assert created.status_code == 201
    goal = created.json()
    assert goal["current_value"] == 0
    assert goal["achieved"] is False

    partial = await client.patch(
        f"/api/v1/goals/{goal['id']}", json={"current_value": 2}, headers=alice.headers
    )
    assert partial.json()["achieved"] is False

    done = await client.patch(
        f"/api/v1/goals/{goal['id']}", json={"current_value": 3}, headers=alice.headers
    )
    assert done.status_code == 200
    assert done.json()["achieved"] is True

    raised = await client.patch(
        f"/api/v1/goals/{goal['id']}", json={"target_value": 10}, headers=alice.headers
    )
    assert raised.json()["achieved"] is False


async def test_goal_end_before_start_is_rejected(client: AsyncClient, alice):
    today = date.today()
    response = await client.post(
        "/api/v1/goals",
        json=_goal_payload(end_date=(today - timedelta(days=1)).isoformat()),
        headers=alice.headers,
    )
    assert response.status_code == 422

    goal = (await client.post("/api/v1/goals", json=_goal_payload(), headers=alice.headers)).json()
    moved = await client.patch(
        f"/api/v1/goals/{goal['id']}",
        json={"end_date": (today - timedelta(days=2)).isoformat()},
        headers=alice.headers,
    )
    assert moved.status_code == 400


async def test_goals_are_listed_per_owner_and_guarded(client: AsyncClient, alice, bob):
    goal = (await client.post("/api/v1/goals", json=_goal_payload(), headers=alice.headers)).json()
    await client.post("/api/v1/goals", json=_goal_payload(type="daily"), headers=alice.headers)

    listed = await client.get("/api/v1/goals", params={"type": "weekly"}, headers=alice.headers)
    assert [g["id"] for g in listed.json()["items"]] == [goal["id"]]

    assert (await client.get("/api/v1/goals", headers=bob.headers)).json()["items"] == []
    assert (
        await client.get(f"/api/v1/goals/{goal['id']}", headers=bob.headers)
    ).status_code == 403
    assert (
        await client.delete(f"/api/v1/goals/{goal['id']}", headers=bob.headers)
    ).status_code == 403

    deleted = await client.delete(f"/api/v1/goals/{goal['id']}", headers=alice.headers)
    assert deleted.status_code == 204
    assert (
        await client.get(f"/api/v1/goals/{goal['id']}", headers=alice.headers)
    ).status_code == 404


async def test_goal_pages_follow_the_cursor(client: AsyncClient, alice):
    created = [
        (await client.post("/api/v1/goals", json=_goal_payload(), headers=alice.headers)).json()
        for _ in range(3)
    ]

    first = (
        await client.get("/api/v1/goals", params={"limit": 2}, headers=alice.headers)
    ).json()
    assert first["has_more"] is True
    second = (
        await client.get(
            "/api/v1/goals",
            params={"limit": 2, "cursor": first["next_cursor"]},
            headers=alice.headers,
        )
    ).json()

    seen = [g["id"] for g in first["items"] + second["items"]]
    assert second["has_more"] is False
    assert sorted(seen) == sorted(g["id"] for g in created)
    assert len(set(seen)) == 3
