"""
API tests for user profile and statistics endpoints.
"""

import pytest

from app.test.constants import OTHER_USER_ID, TEST_USER_ID
from app.test.factory.footprint_entry import FootprintEntryFactory, UserProfileFactory


@pytest.mark.asyncio
async def test_get_profile_creates_on_first_access(test_async_client, auth_headers):
    response = await test_async_client.get("/api/user/profile", headers=auth_headers)
    assert response.status_code == 200

    profile = response.json()["data"]
    assert profile["user_id"] == TEST_USER_ID
    assert profile["full_name"] == "Asha Rao"
    assert profile["carbon_goal"] is None

    again = await test_async_client.get("/api/user/profile", headers=auth_headers)
    assert again.json()["data"]["id"] == profile["id"]


@pytest.mark.asyncio
async def test_get_existing_profile(test_async_client, auth_headers):
    existing = await UserProfileFactory(user_id=TEST_USER_ID, full_name="A. Rao")

    response = await test_async_client.get("/api/user/profile", headers=auth_headers)

    data = response.json()["data"]
    assert data["id"] == str(existing.id)
    assert data["full_name"] == "A. Rao"
    assert data["location"] == "Bengaluru"


@pytest.mark.asyncio
async def test_update_profile_is_partial(test_async_client, auth_headers):
    await UserProfileFactory(user_id=TEST_USER_ID, location="Bengaluru", carbon_goal=150.0)

    response = await test_async_client.put(
        "/api/user/profile",
        json={"carbon_goal": 90, "preferences": {"units": "metric"}},
        headers=auth_headers,
    )
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["carbon_goal"] == 90.0
    assert data["preferences"] == {"units": "metric"}
    assert data["location"] == "Bengaluru"


@pytest.mark.asyncio
async def test_update_profile_without_existing_profile(test_async_client, auth_headers):
    response = await test_async_client.put(
        "/api/user/profile", json={"location": "Chennai"}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["data"]["location"] == "Chennai"
    assert response.json()["data"]["full_name"] == "Asha Rao"


@pytest.mark.asyncio
async def test_update_profile_rejects_negative_goal(test_async_client, auth_headers):
    response = await test_async_client.put(
        "/api/user/profile", json={"carbon_goal": -1}, headers=auth_headers
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_profile_requires_token(test_async_client):
    response = await test_async_client.get("/api/user/profile")

    assert response.status_code == 401
    assert response.json() == {"error": "Access token required", "code": "MISSING_TOKEN"}


@pytest.mark.asyncio
async def test_user_stats(test_async_client, auth_headers):
    await UserProfileFactory(user_id=TEST_USER_ID, carbon_goal=100.0)
    await FootprintEntryFactory(user_id=TEST_USER_ID, activity="car_petrol", co2e=3.0)
    await FootprintEntryFactory(user_id=TEST_USER_ID, activity="car_petrol", co2e=5.0)
    await FootprintEntryFactory(
        user_id=TEST_USER_ID, activity="electricity_residential", unit="kWh", co2e=20.0
    )
    await FootprintEntryFactory(user_id=OTHER_USER_ID, activity="car_petrol", co2e=99.0)

    response = await test_async_client.get("/api/user/stats", headers=auth_headers)
    assert response.status_code == 200

    stats = response.json()["data"]
    assert stats["user_id"] == TEST_USER_ID
    assert stats["total_entries"] == 3
    assert stats["total_co2e"] == pytest.approx(28.0)
    assert stats["carbon_goal"] == 100.0
    assert [s["activity"] for s in stats["by_activity"]] == [
        "electricity_residential",
        "car_petrol",
    ]
    assert stats["by_activity"][1]["entry_count"] == 2


@pytest.mark.asyncio
async def test_user_stats_without_entries(test_async_client):
    response = await test_async_client.get(
        "/api/user/stats", headers={"Authorization": "Bearer other-token"}
    )

    stats = response.json()["data"]
    assert stats["total_entries"] == 0
    assert stats["total_co2e"] == 0
    assert stats["by_activity"] == []
    assert stats["carbon_goal"] is None
