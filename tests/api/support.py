# This file provides shared helpers for API and service tests.
# It exists so tests can swap in an in-memory appeal store without touching a real database.
# The helpers build consistent config objects, a controllable clock, and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi.testclient import TestClient

from appeal_tracker.api.api_config import ApiConfig
from appeal_tracker.api.app import app
from appeal_tracker.api.db_access import AppealStore
from appeal_tracker.api.dependencies import get_appeal_service, get_appeal_store, get_config
from appeal_tracker.api.services.appeal_service import AppealService

IN_MEMORY_URL = "sqlite+pysqlite:///:memory:"


def build_test_config(**overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test Appeal API",
        "api_version_path": "/api/v1",
        "schema_version": "1.0.0",
        "host": "0.0.0.0",
        "port": 8000,
        "environment": "test",
        "database_url": IN_MEMORY_URL,
        "default_page_size": 50,
        "max_page_size": 100,
        "enable_request_logging": False,
        "allowed_origins": [],
        "appeals_table_name": "appeals",
        "timezone": "UTC",
        "enforce_transitions": True,
        "auto_create_schema": True,
        "app_version": "0.1.0",
    }
    values.update(overrides)
    return ApiConfig(**values)


def build_memory_store(table_name: str = "appeals") -> AppealStore:
    store = AppealStore(database_url=IN_MEMORY_URL, table_name=table_name)
    store.create_schema()
    return store


class SteppingClock:
    """Clock that returns `start`, then advances by `step` on every call."""

    def __init__(
        self,
        start: datetime = datetime(2025, 5, 17, 12, 0, tzinfo=UTC),
        step: timedelta = timedelta(seconds=1),
    ) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value

    def set(self, value: datetime) -> None:
        self.current = value


def build_service(
    *,
    config: ApiConfig | None = None,
    store: AppealStore | None = None,
    clock: SteppingClock | None = None,
) -> AppealService:
    return AppealService(
        config=config or build_test_config(),
        store=store or build_memory_store(),
        clock=clock or SteppingClock(),
    )


class FakeStore:
    """Store double for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, table_present: bool = True) -> None:
        self._connected = connected
        self._table_present = table_present

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str | None = None) -> bool:
        return self._connected and self._table_present

    def create_schema(self) -> None:
        return None


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    store: Any | None = None,
    service: AppealService | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()
    resolved_store = store or build_memory_store(resolved_config.appeals_table_name)
    resolved_service = service
    if resolved_service is None and isinstance(resolved_store, AppealStore):
        resolved_service = build_service(config=resolved_config, store=resolved_store)

    app.dependency_overrides[get_config] = lambda: resolved_config
    app.dependency_overrides[get_appeal_store] = lambda: resolved_store
    if resolved_service is not None:
        app.dependency_overrides[get_appeal_service] = lambda: resolved_service

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
