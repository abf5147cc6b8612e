# This file builds response envelopes for API endpoints in a consistent format.
# It exists so clients always receive version metadata and request tracing fields.
# The helpers return plain dictionaries that Pydantic response models validate at runtime.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from appeal_tracker.api.schema_versions import build_version_fields


def utc_now_iso() -> datetime:
    """Return timezone-aware UTC timestamp for response generation."""

    return datetime.now(tz=UTC)


def _envelope(*, api_version_path: str, schema_version: str, request_id: str) -> dict[str, Any]:
    return {
        **build_version_fields(api_version_path=api_version_path, schema_version=schema_version),
        "request_id": request_id,
        "generated_at": utc_now_iso(),
    }


def build_list_envelope(
    *,
    api_version_path: str,
    schema_version: str,
    request_id: str,
    appeals: list[dict[str, Any]],
    pagination: dict[str, Any],
) -> dict[str, Any]:
    """Build standard list response envelope."""

    return {
        **_envelope(
            api_version_path=api_version_path,
            schema_version=schema_version,
            request_id=request_id,
        ),
        "appeals": appeals,
        "pagination": pagination,
    }


def build_object_envelope(
    *,
    api_version_path: str,
    schema_version: str,
    request_id: str,
    **fields: Any,
) -> dict[str, Any]:
    """Build standard non-list response envelope with the given top-level fields."""

    return {
        **_envelope(
            api_version_path=api_version_path,
            schema_version=schema_version,
            request_id=request_id,
        ),
        **fields,
    }
