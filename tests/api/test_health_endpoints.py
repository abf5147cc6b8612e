# This file tests API health, readiness, version, and metrics endpoints.
# It exists to validate operational contracts used by orchestration and monitoring.
# The tests confirm request IDs and version metadata are always returned.

from __future__ import annotations

from tests.api.support import FakeStore, api_test_client, build_test_config


def test_health_endpoint_returns_expected_fields() -> None:
    config = build_test_config()
    with api_test_client(config=config, store=FakeStore()) as client:
        response = client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["environment"] == "test"
    assert payload["service_name"] == config.api_name
    assert payload["api_version"] == "v1"
    assert payload["schema_version"] == config.schema_version
    assert payload["request_id"]
    assert "timestamp" in payload


def test_ready_endpoint_reflects_store_status() -> None:
    with api_test_client(store=FakeStore(connected=True)) as client:
        response = client.get("/ready")

    assert response.status_code == 200
    payload = response.json()
    assert payload["db_connected"] is True
    assert payload["appeals_table_ready"] is True
    assert payload["ready"] is True
    assert payload["database"] == "reachable"


def test_ready_endpoint_reports_unreachable_database() -> None:
    with api_test_client(store=FakeStore(connected=False)) as client:
        response = client.get("/ready")

    payload = response.json()
    assert payload["ready"] is False
    assert payload["appeals_table_ready"] is False
    assert payload["database"] == "unreachable"


def test_ready_endpoint_with_real_store() -> None:
    with api_test_client() as client:
        response = client.get("/ready")

    assert response.json()["ready"] is True


def test_version_endpoint_returns_version_metadata() -> None:
    config = build_test_config()
    with api_test_client(config=config, store=FakeStore()) as client:
        response = client.get("/version")

    assert response.status_code == 200
    payload = response.json()
    assert payload["api_version_path"] == "/api/v1"
    assert payload["schema_version"] == config.schema_version
    assert payload["app_version"] == config.app_version
    assert payload["project"] == config.api_name
    assert payload["version"] == config.app_version


def test_metrics_endpoint_exposes_request_counters() -> None:
    with api_test_client(store=FakeStore()) as client:
        client.get("/health")
        response = client.get("/metrics")

    assert response.status_code == 200
    assert "api_http_requests_total" in response.text
