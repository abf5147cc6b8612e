# This file tests API schema contracts, envelope helpers, and versioning utilities.
# It exists to detect accidental response-shape changes before release.
# The tests assert required paths and key fields remain present in OpenAPI output.

from __future__ import annotations

import pytest

from appeal_tracker.api.app import app
from appeal_tracker.api.response_envelope import build_list_envelope, build_object_envelope
from appeal_tracker.api.schema_versions import api_version_label, build_version_fields


def test_openapi_contains_required_paths() -> None:
    schema = app.openapi()
    required_paths = {
        "/health",
        "/ready",
        "/version",
        "/api/v1/appeals",
        "/api/v1/appeals/{appeal_id}",
        "/api/v1/appeals/{appeal_id}/in-progress",
        "/api/v1/appeals/{appeal_id}/complete",
        "/api/v1/appeals/{appeal_id}/cancel",
        "/api/v1/appeals/cancel-all-in-progress",
        "/api/v1/appeals/bulk-cancel",
    }
    available_paths = set(schema.get("paths", {}).keys())
    missing = required_paths - available_paths
    assert not missing


def test_openapi_appeal_schema_uses_camel_case_fields() -> None:
    schema = app.openapi()
    properties = schema["components"]["schemas"]["AppealV1"]["properties"]

    assert {"id", "title", "description", "status", "createdAt", "updatedAt"} <= set(properties)


def test_response_envelope_builders_include_version_and_request_fields() -> None:
    list_payload = build_list_envelope(
        api_version_path="/api/v1",
        schema_version="1.0.0",
        request_id="req-1",
        appeals=[],
        pagination={"page": 1, "limit": 50, "total": 0, "pages": 0},
    )
    object_payload = build_object_envelope(
        api_version_path="/api/v1",
        schema_version="1.0.0",
        request_id="req-2",
        message="ok",
    )

    assert list_payload["api_version"] == "v1"
    assert list_payload["schema_version"] == "1.0.0"
    assert list_payload["request_id"] == "req-1"
    assert list_payload["appeals"] == []
    assert object_payload["api_version"] == "v1"
    assert object_payload["request_id"] == "req-2"
    assert object_payload["message"] == "ok"


def test_schema_version_helpers() -> None:
    assert build_version_fields(api_version_path="/api/v1", schema_version="1.0.0") == {
        "api_version": "v1",
        "schema_version": "1.0.0",
    }
    assert api_version_label("/api/v2/") == "v2"
    with pytest.raises(ValueError):
        api_version_label("/")
