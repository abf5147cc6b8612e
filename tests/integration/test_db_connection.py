import os

import pytest

from appeal_tracker.api.db_access import AppealStore

DATABASE_URL = os.getenv("APPEALS_INTEGRATION_DATABASE_URL")

if not DATABASE_URL:
    pytest.skip(
        "Set APPEALS_INTEGRATION_DATABASE_URL to run database integration tests",
        allow_module_level=True,
    )


@pytest.mark.integration
def test_db_connection_optional() -> None:
    store = AppealStore(database_url=DATABASE_URL, table_name="appeals_integration_check")
    if not store.can_connect():
        pytest.skip("Database unavailable in local test environment")
    store.create_schema()
    assert store.table_exists() is True
