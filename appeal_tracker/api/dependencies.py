# This file provides dependency factories for FastAPI routes and middleware.
# It exists so the store and service are created once and shared through dependency injection.
# The setup keeps routers thin and makes endpoint tests easy to override.

from __future__ import annotations

from functools import lru_cache

from appeal_tracker.api.api_config import ApiConfig, get_api_config
from appeal_tracker.api.db_access import AppealStore
from appeal_tracker.api.services.appeal_service import AppealService


@lru_cache(maxsize=1)
def get_appeal_store() -> AppealStore:
    config = get_api_config()
    return AppealStore(database_url=config.database_url, table_name=config.appeals_table_name)


@lru_cache(maxsize=1)
def get_appeal_service() -> AppealService:
    config = get_api_config()
    return AppealService(config=config, store=get_appeal_store())


def get_config() -> ApiConfig:
    return get_api_config()
