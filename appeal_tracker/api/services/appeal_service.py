# This file implements the appeal lifecycle: creation, filtered listing, and status transitions.
# It exists so routers stay transport-focused while validation and transition rules live in one layer.
# Every write is a single store statement; "not found" is decided from the matched row count.
# Store failures are logged here and surfaced as an opaque InternalError.

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from appeal_tracker.api.api_config import ApiConfig
from appeal_tracker.api.appeal_filters import AppealFilters, build_appeal_query
from appeal_tracker.api.appeal_status import AppealStatus, allowed_sources
from appeal_tracker.api.db_access import AppealQuery, AppealStore
from appeal_tracker.api.error_handlers import (
    InternalError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from appeal_tracker.api.pagination import compute_total_pages, normalize_pagination

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _required_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _status_filter(statuses: Iterable[AppealStatus]) -> tuple[str, ...]:
    return tuple(sorted(status.value for status in statuses))


class AppealService:
    """Lifecycle operations for appeals over an injected store."""

    def __init__(
        self,
        *,
        config: ApiConfig,
        store: AppealStore,
        clock: Clock = _utc_now,
    ) -> None:
        self.config = config
        self.store = store
        self.clock = clock

    def create_appeal(self, *, title: str | None, description: str | None) -> str:
        clean_title = _required_text(title)
        clean_description = _required_text(description)
        if clean_title is None or clean_description is None:
            raise ValidationError("Title and description are required")

        document = {
            "title": clean_title,
            "description": clean_description,
            "status": AppealStatus.NEW.value,
            "created_at": self.clock(),
        }
        with self._store_call("creating appeal"):
            appeal_id = self.store.insert_one(document)
        logger.info("Created appeal %s", appeal_id)
        return appeal_id

    def get_appeal(self, appeal_id: str) -> dict[str, Any]:
        with self._store_call("fetching appeal"):
            appeal = self.store.find_one(AppealQuery(appeal_id=appeal_id))
        if appeal is None:
            raise NotFoundError()
        return appeal

    def list_appeals(
        self,
        *,
        filters: AppealFilters,
        page: int | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        try:
            query = build_appeal_query(filters, tz=self.config.tzinfo)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        try:
            pagination = normalize_pagination(
                page=page,
                limit=limit,
                default_limit=self.config.default_page_size,
                max_limit=self.config.max_page_size,
            )
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        with self._store_call("fetching appeals"):
            rows = self.store.find(query, skip=pagination.offset, limit=pagination.limit)
            total = self.store.count(query)

        return {
            "appeals": rows,
            "pagination": {
                "page": pagination.page,
                "limit": pagination.limit,
                "total": total,
                "pages": compute_total_pages(total_count=total, limit=pagination.limit),
            },
        }

    def transition_to_in_progress(self, appeal_id: str) -> None:
        self._transition(appeal_id, AppealStatus.IN_PROGRESS)

    def transition_to_completed(self, appeal_id: str, *, solution: str | None) -> None:
        clean_solution = _required_text(solution)
        if clean_solution is None:
            raise ValidationError("Solution is required")
        self._transition(appeal_id, AppealStatus.COMPLETED, solution=clean_solution)

    def transition_to_canceled(self, appeal_id: str, *, reason: str | None) -> None:
        clean_reason = _required_text(reason)
        if clean_reason is None:
            raise ValidationError("Reason is required")
        self._transition(appeal_id, AppealStatus.CANCELED, reason=clean_reason)

    def cancel_all_in_progress(self, *, reason: str | None) -> int:
        """Cancel every in-progress appeal in one bulk update and return how many moved."""

        clean_reason = _required_text(reason)
        if clean_reason is None:
            raise ValidationError("Reason is required")

        query = AppealQuery(statuses=_status_filter([AppealStatus.IN_PROGRESS]))
        values = {
            "status": AppealStatus.CANCELED.value,
            "updated_at": self.clock(),
            "reason": clean_reason,
        }
        with self._store_call("canceling in-progress appeals"):
            result = self.store.update_many(query, values)

        if result.matched_count == 0:
            raise NotFoundError("No appeals found with in-progress status")
        logger.info("Canceled %d in-progress appeals", result.matched_count)
        return result.matched_count

    def _transition(self, appeal_id: str, target: AppealStatus, **extra: str) -> None:
        query = AppealQuery(appeal_id=appeal_id)
        if self.config.enforce_transitions:
            query = AppealQuery(appeal_id=appeal_id, statuses=_status_filter(allowed_sources(target)))

        values: dict[str, Any] = {"status": target.value, "updated_at": self.clock(), **extra}
        with self._store_call("updating appeal"):
            result = self.store.update_one(query, values)

        if result.matched_count == 0:
            if not self.config.enforce_transitions:
                raise NotFoundError()
            current = self.get_appeal(appeal_id)
            raise InvalidTransitionError(
                appeal_id=appeal_id,
                current=str(current["status"]),
                target=target.value,
            )
        logger.info("Appeal %s moved to %s", appeal_id, target.value)

    @contextmanager
    def _store_call(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception("Store error while %s", action)
            raise InternalError() from exc
