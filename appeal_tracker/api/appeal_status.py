# This file defines the appeal status values and the allowed transitions between them.
# Appeals move new -> in-progress -> completed, or from new/in-progress to canceled.
# Completed and canceled are terminal; nothing leaves them.

from __future__ import annotations

from enum import Enum


class AppealStatus(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELED = "canceled"


# Target status -> statuses an appeal may be in before moving to it.
ALLOWED_SOURCES: dict[AppealStatus, frozenset[AppealStatus]] = {
    AppealStatus.IN_PROGRESS: frozenset({AppealStatus.NEW}),
    AppealStatus.COMPLETED: frozenset({AppealStatus.IN_PROGRESS}),
    AppealStatus.CANCELED: frozenset({AppealStatus.NEW, AppealStatus.IN_PROGRESS}),
}


def status_values() -> list[str]:
    """Return every status value in lifecycle order."""

    return [status.value for status in AppealStatus]


def parse_status(value: str) -> AppealStatus:
    """Convert a raw status string to `AppealStatus`, raising ValueError when unknown."""

    try:
        return AppealStatus(value)
    except ValueError as exc:
        allowed = ", ".join(status_values())
        raise ValueError(f"Invalid status. Must be one of: {allowed}") from exc


def allowed_sources(target: AppealStatus) -> frozenset[AppealStatus]:
    return ALLOWED_SOURCES.get(target, frozenset())
