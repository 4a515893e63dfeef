"""HTTP contract of /v1/ninjas: status codes, payloads and problem responses."""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from ninja_api.api.main import app
from ninja_api.core.deps import get_ninja_service
from ninja_api.db.models.ninja import Ninja

BASE = "/v1/ninjas"


async def _create(client, payload) -> dict:
    response = await client.post(BASE, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _assert_problem(response, status: int, title: str) -> dict:
    assert response.status_code == status
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["status"] == status
    assert body["title"] == title
    assert "timestamp" in body
    return body


# --- create / read ---

async def test_create_then_get_returns_same_payload(client, naruto_payload):
    created = await _create(client, naruto_payload)

    assert isinstance(created["id"], int)
    assert created["strength_level"] == 98

    response = await client.get(f"{BASE}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


async def test_create_applies_defaults_and_omits_nulls(client, naruto_payload):
    created = await _create(client, naruto_payload)

    assert created["status"] == "Active"
    assert created["registration_date"] == date.today().isoformat()
    assert "clan" not in created
    assert "kekkei_genkai" not in created


async def test_create_echoes_every_supplied_field(client, full_payload):
    created = await _create(client, full_payload)
    for key, value in full_payload.items():
        assert created[key] == value


async def test_create_with_invalid_rank_is_rejected(client, naruto_payload):
    response = await client.post(BASE, json={**naruto_payload, "rank": "RankInvalido"})

    body = _assert_problem(response, 400, "Validation failed")
    assert [e["field"] for e in body["errors"]] == ["rank"]
    assert body["instance"] == BASE


async def test_create_with_empty_body_lists_every_missing_field(client):
    response = await client.post(BASE, json={})

    body = _assert_problem(response, 400, "Validation failed")
    assert {e["field"] for e in body["errors"]} == {"name", "village", "rank", "chakra_type"}


async def test_create_with_malformed_json_is_rejected(client):
    response = await client.post(
        BASE, content=b'{"name": ', headers={"Content-Type": "application/json"},
    )
    _assert_problem(response, 400, "Validation failed")


async def test_create_with_future_registration_date_is_rejected(client, naruto_payload):
    response = await client.post(BASE, json={**naruto_payload, "registration_date": "2999-01-01"})
    body = _assert_problem(response, 400, "Validation failed")
    assert [e["field"] for e in body["errors"]] == ["registration_date"]


async def test_get_missing_ninja_is_not_found(client):
    response = await client.get(f"{BASE}/999")

    body = _assert_problem(response, 404, "Not Found")
    assert body["detail"] == "Not found registry with code 999"
    assert "errors" not in body


async def test_get_with_non_integer_id_is_bad_request(client):
    response = await client.get(f"{BASE}/abc")
    body = _assert_problem(response, 400, "Validation failed")
    assert [e["field"] for e in body["errors"]] == ["ninja_id"]


# --- update ---

async def test_update_merges_partial_body(client, full_payload):
    created = await _create(client, full_payload)

    response = await client.put(f"{BASE}/{created['id']}", json={"rank": "Kage", "clan": None})

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == created["id"]
    assert body["rank"] == "Kage"
    assert body["clan"] == "Uchiha"
    assert body["name"] == "Sasuke Uchiha"


async def test_update_with_empty_body_changes_nothing(client, full_payload):
    created = await _create(client, full_payload)

    response = await client.put(f"{BASE}/{created['id']}", json={})
    assert response.status_code == 200
    assert response.json() == created


async def test_update_does_not_apply_create_constraints(client, naruto_payload):
    created = await _create(client, naruto_payload)

    response = await client.put(
        f"{BASE}/{created['id']}", json={"rank": "RankInvalido", "strength_level": 500},
    )
    assert response.status_code == 200
    assert response.json()["rank"] == "RankInvalido"
    assert response.json()["strength_level"] == 500


async def test_update_with_wrong_json_type_is_rejected(client, naruto_payload):
    created = await _create(client, naruto_payload)

    response = await client.put(f"{BASE}/{created['id']}", json={"strength_level": "huge"})
    body = _assert_problem(response, 400, "Validation failed")
    assert [e["field"] for e in body["errors"]] == ["strength_level"]


async def test_update_missing_ninja_is_not_found(client):
    response = await client.put(f"{BASE}/999", json={"name": "Ghost"})
    body = _assert_problem(response, 404, "Not Found")
    assert body["detail"] == "Not found registry with code 999"


# --- delete ---

async def test_delete_then_get_is_not_found(client, naruto_payload):
    created = await _create(client, naruto_payload)

    response = await client.delete(f"{BASE}/{created['id']}")
    assert response.status_code == 204
    assert response.content == b""

    response = await client.get(f"{BASE}/{created['id']}")
    _assert_problem(response, 404, "Not Found")


async def test_delete_missing_ninja_is_not_found(client):
    response = await client.delete(f"{BASE}/999")
    body = _assert_problem(response, 404, "Not Found")
    assert body["detail"] == "Not found registry with code 999"


# --- search ---

async def test_search_filters_and_reports_page_metadata(client, test_db):
    test_db.add_all([
        Ninja(name="Naruto", village="Konoha", rank="Kage", chakra_type="Wind", status="Ativo"),
        Ninja(name="Kakashi", village="Konoha", rank="Jounin", chakra_type="Lightning", status="Ativo"),
        Ninja(name="Itachi", village="Konoha", rank="Jounin", chakra_type="Fire", status="Rogue"),
        Ninja(name="Gaara", village="Suna", rank="Kage", chakra_type="Wind", status="Ativo"),
    ])
    await test_db.commit()

    response = await client.get(BASE, params={"village": "Konoha", "status": "Ativo", "page": 0, "size": 10})

    assert response.status_code == 200
    body = response.json()
    assert sorted(n["name"] for n in body["content"]) == ["Kakashi", "Naruto"]
    assert body["page"] == {"size": 10, "number": 0, "total_elements": 2, "total_pages": 1}


async def test_search_without_filters_uses_default_page(client, naruto_payload):
    await _create(client, naruto_payload)

    body = (await client.get(BASE)).json()
    assert len(body["content"]) == 1
    assert body["page"]["number"] == 0
    assert body["page"]["size"] == 20


async def test_search_pages_and_sorts(client, naruto_payload):
    for level in (30, 90, 60):
        await _create(client, {**naruto_payload, "name": f"Level {level}", "strength_level": level})

    response = await client.get(BASE, params={"sort": "strength_level,desc", "size": 2, "page": 0})
    body = response.json()
    assert [n["strength_level"] for n in body["content"]] == [90, 60]
    assert body["page"]["total_pages"] == 2

    response = await client.get(BASE, params={"sort": "strength_level,desc", "size": 2, "page": 1})
    assert [n["strength_level"] for n in response.json()["content"]] == [30]


async def test_search_with_unknown_sort_property_is_rejected(client):
    response = await client.get(BASE, params={"sort": "power,desc"})
    body = _assert_problem(response, 400, "Validation failed")
    assert [e["field"] for e in body["errors"]] == ["sort"]


@pytest.mark.parametrize("params", [{"size": 0}, {"page": -1}, {"strength_level": "lots"}])
async def test_search_with_invalid_paging_or_filter_is_rejected(client, params):
    response = await client.get(BASE, params=params)
    _assert_problem(response, 400, "Validation failed")


# --- framework and ambient behaviour ---

async def test_unknown_route_uses_problem_envelope(client):
    response = await client.get("/v1/samurai")
    _assert_problem(response, 404, "Not Found")


async def test_correlation_id_is_echoed(client):
    response = await client.get("/v1/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"


async def test_correlation_id_is_generated_when_absent(client):
    response = await client.get("/v1/health")
    assert response.headers["X-Correlation-ID"]


async def test_health(client):
    response = await client.get("/v1/health")
    assert response.status_code == 200
    assert response.json() == {"message": "Healthy"}


class _BrokenService:
    async def find_by_id(self, ninja_id):
        raise OperationalError("SELECT 1", {}, Exception("database is down"))


async def test_storage_failure_is_internal_server_error():
    app.dependency_overrides[get_ninja_service] = lambda: _BrokenService()
    try:
        # the server error middleware re-raises after answering
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get(f"{BASE}/1")
    finally:
        app.dependency_overrides.clear()

    body = _assert_problem(response, 500, "Internal Server Error")
    assert body["detail"] == "An unexpected error occurred"
    assert "database is down" not in response.text


async def test_internal_server_error_keeps_correlation_id(caplog):
    app.dependency_overrides[get_ninja_service] = lambda: _BrokenService()
    try:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get(f"{BASE}/1", headers={"X-Correlation-ID": "cid-500"})
    finally:
        app.dependency_overrides.clear()

    _assert_problem(response, 500, "Internal Server Error")
    assert response.headers["X-Correlation-ID"] == "cid-500"
    assert any(
        "correlation_id=cid-500" in r.getMessage()
        for r in caplog.records if r.levelname == "ERROR"
    )


# --- integer range ---

@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
@pytest.mark.parametrize("ninja_id", [2**31, 2**64])
async def test_id_outside_integer_column_range_is_bad_request(client, method, ninja_id):
    kwargs = {"json": {}} if method == "PUT" else {}
    response = await client.request(method, f"{BASE}/{ninja_id}", **kwargs)

    body = _assert_problem(response, 400, "Validation failed")
    assert [e["field"] for e in body["errors"]] == ["ninja_id"]


@pytest.mark.parametrize("ninja_id", [0, -1, 2**31 - 1])
async def test_id_inside_integer_range_but_unknown_is_not_found(client, ninja_id):
    response = await client.get(f"{BASE}/{ninja_id}")
    _assert_problem(response, 404, "Not Found")


async def test_page_whose_offset_overflows_is_bad_request(client):
    response = await client.get(BASE, params={"page": 10**19})

    body = _assert_problem(response, 400, "Validation failed")
    assert [e["field"] for e in body["errors"]] == ["page"]


async def test_strength_level_filter_outside_integer_range_is_bad_request(client):
    response = await client.get(BASE, params={"strength_level": 2**63})

    body = _assert_problem(response, 400, "Validation failed")
    assert [e["field"] for e in body["errors"]] == ["strength_level"]


async def test_update_with_strength_level_outside_integer_range_is_bad_request(client, naruto_payload):
    created = await _create(client, naruto_payload)

    response = await client.put(f"{BASE}/{created['id']}", json={"strength_level": 2**40})
    body = _assert_problem(response, 400, "Validation failed")
    assert [e["field"] for e in body["errors"]] == ["strength_level"]
