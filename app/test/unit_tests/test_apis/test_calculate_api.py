"""
API tests for the calculate endpoint.
"""

import httpx
import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from app.database.repositories import FootprintEntryRepository
from app.database.schemas import FootprintEntryDBModel
from app.database.session_manager.db_session import Database
from app.services.registry import activity_registry
from app.test.constants import MALFORMED_PROVIDER_TOKEN, TEST_USER_ID

CAR = activity_registry.lookup("car_petrol")
RICE = activity_registry.lookup("rice")


async def stored_entries() -> list[FootprintEntryDBModel]:
    async with Database() as session:
        result = await session.execute(select(FootprintEntryDBModel))
        return list(result.scalars().all())


@pytest.mark.asyncio
async def test_calculate_anonymous_saves_entry(test_async_client, climatiq_stub):
    climatiq_stub.responses[CAR.primary_factor_id] = (200, {"co2e": 4.27})

    response = await test_async_client.post(
        "/api/calculate", json={"activity": "car_petrol", "value": 25}
    )
    assert response.status_code == 200

    data = response.json()
    assert data["activity"] == "car_petrol"
    assert data["value"] == 25
    assert data["unit"] == "km"
    assert data["co2e"] == 4.27
    assert data["saved"] is True
    assert data["user_id"] is None
    assert data["id"]
    assert "timestamp" in data

    entries = await stored_entries()
    assert len(entries) == 1
    assert str(entries[0].id) == data["id"]
    assert entries[0].co2e == 4.27
    assert entries[0].region == "IN"
    assert entries[0].user_id is None


@pytest.mark.asyncio
async def test_calculate_authenticated_links_user(
    test_async_client, climatiq_stub, auth_headers
):
    climatiq_stub.responses[CAR.primary_factor_id] = (200, {"co2e": 1.0})

    response = await test_async_client.post(
        "/api/calculate",
        json={"activity": "car_petrol", "value": 5},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["user_id"] == TEST_USER_ID

    entries = await stored_entries()
    assert entries[0].user_id == TEST_USER_ID


@pytest.mark.asyncio
async def test_calculate_with_invalid_token_stays_anonymous(
    test_async_client, climatiq_stub
):
    climatiq_stub.responses[CAR.primary_factor_id] = (200, {"co2e": 1.0})

    response = await test_async_client.post(
        "/api/calculate",
        json={"activity": "car_petrol", "value": 5},
        headers={"Authorization": "Bearer expired-token"},
    )
    assert response.status_code == 200
    assert response.json()["user_id"] is None


@pytest.mark.asyncio
async def test_calculate_with_garbled_provider_reply_stays_anonymous(
    test_async_client, climatiq_stub
):
    climatiq_stub.responses[CAR.primary_factor_id] = (200, {"co2e": 1.0})

    response = await test_async_client.post(
        "/api/calculate",
        json={"activity": "car_petrol", "value": 5},
        headers={"Authorization": f"Bearer {MALFORMED_PROVIDER_TOKEN}"},
    )
    assert response.status_code == 200
    assert response.json()["user_id"] is None
    assert response.json()["saved"] is True


@pytest.mark.asyncio
async def test_calculate_uses_fallback(test_async_client, climatiq_stub):
    climatiq_stub.responses[RICE.fallback_factor_ids[1]] = (200, {"co2e": 0.8})

    response = await test_async_client.post(
        "/api/calculate", json={"activity": "rice", "value": 120}
    )
    assert response.status_code == 200
    assert response.json()["co2e"] == 0.8
    assert climatiq_stub.factor_ids == list(RICE.factor_ids[:3])


@pytest.mark.asyncio
async def test_calculate_database_unavailable_is_soft_failure(
    test_async_client, climatiq_stub
):
    climatiq_stub.responses[CAR.primary_factor_id] = (200, {"co2e": 2.5})
    await Database.close()

    response = await test_async_client.post(
        "/api/calculate", json={"activity": "car_petrol", "value": 10}
    )
    assert response.status_code == 200

    data = response.json()
    assert data["co2e"] == 2.5
    assert data["saved"] is False
    assert data["save_error"] == "Database not available"
    assert data["id"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        ConnectionRefusedError(111, "Connect call failed"),
        OperationalError("INSERT", {}, Exception("server closed the connection")),
    ],
)
async def test_calculate_database_save_failure_is_soft_failure(
    test_async_client, climatiq_stub, monkeypatch, error
):
    climatiq_stub.responses[CAR.primary_factor_id] = (200, {"co2e": 2.5})

    async def failing_create(self, **data):
        raise error

    monkeypatch.setattr(FootprintEntryRepository, "create", failing_create)

    response = await test_async_client.post(
        "/api/calculate", json={"activity": "car_petrol", "value": 10}
    )
    assert response.status_code == 200

    data = response.json()
    assert data["activity"] == "car_petrol"
    assert data["co2e"] == 2.5
    assert data["saved"] is False
    assert data["save_error"] == "Database save failed"
    assert data["id"] is None

    monkeypatch.undo()
    assert await stored_entries() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"activity": "car_petrol", "value": 0},
        {"activity": "car_petrol", "value": -3},
        {"activity": "car_petrol", "value": "12"},
        {"activity": "car_petrol"},
        {"value": 12},
        {},
    ],
)
async def test_calculate_invalid_input(test_async_client, climatiq_stub, payload):
    response = await test_async_client.post("/api/calculate", json=payload)

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"
    assert climatiq_stub.requests == []


@pytest.mark.asyncio
async def test_calculate_unsupported_activity(test_async_client, climatiq_stub):
    response = await test_async_client.post(
        "/api/calculate", json={"activity": "not_a_real_activity", "value": 5}
    )

    assert response.status_code == 400
    assert response.json() == {
        "error": "Unsupported activity: not_a_real_activity",
        "code": "UNSUPPORTED_ACTIVITY",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "upstream, status_code, code",
    [
        ((401, {"message": "bad key"}), 500, "API_AUTH_ERROR"),
        ((429, {}), 429, "RATE_LIMIT_EXCEEDED"),
        ((503, {"message": "maintenance"}), 500, "EXTERNAL_API_ERROR"),
        (httpx.ConnectTimeout("timed out"), 504, "TIMEOUT_ERROR"),
    ],
)
async def test_calculate_upstream_errors(
    test_async_client, climatiq_stub, upstream, status_code, code
):
    climatiq_stub.responses[CAR.primary_factor_id] = upstream

    response = await test_async_client.post(
        "/api/calculate", json={"activity": "car_petrol", "value": 5}
    )

    assert response.status_code == status_code
    body = response.json()
    assert body["code"] == code
    assert "car_petrol" in body["error"]
    assert await stored_entries() == []


@pytest.mark.asyncio
async def test_calculate_rate_limited_passes_retry_after(test_async_client, climatiq_stub):
    climatiq_stub.responses[CAR.primary_factor_id] = (429, {})
    climatiq_stub.headers = {"Retry-After": "12"}

    response = await test_async_client.post(
        "/api/calculate", json={"activity": "car_petrol", "value": 5}
    )

    assert response.status_code == 429
    assert response.headers["retry-after"] == "12"
    assert response.json()["retry_after"] == 12.0


@pytest.mark.asyncio
async def test_calculate_without_api_key(test_app, test_async_client, make_estimator):
    from app.core.dependencies import get_emission_estimator

    test_app.dependency_overrides[get_emission_estimator] = lambda: make_estimator(api_key=None)

    response = await test_async_client.post(
        "/api/calculate", json={"activity": "car_petrol", "value": 5}
    )

    assert response.status_code == 500
    assert response.json()["code"] == "SERVICE_MISCONFIGURED"
