# This file turns raw list filters (date, startDate/endDate, status) into a store query.
# A single day and an explicit range both become an inclusive createdAt window; they cannot be combined.
# Naive inputs are read in the configured server timezone; the helpers raise ValueError on bad input.

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo

from appeal_tracker.api.appeal_status import parse_status
from appeal_tracker.api.db_access import AppealQuery

END_OF_DAY = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class AppealFilters:
    date: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    status: str | None = None


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def parse_instant(value: str, tz: tzinfo) -> datetime:
    """Parse an ISO date or datetime; date-only and naive values are placed in `tz`."""

    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed


def parse_day(value: str, tz: tzinfo) -> date:
    """Parse the calendar day named by `value` as seen from `tz`."""

    return parse_instant(value, tz).astimezone(tz).date()


def day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the first and last millisecond of `day` in `tz`."""

    start_of_day = datetime.combine(day, time.min, tzinfo=tz)
    end_of_day = datetime.combine(day, END_OF_DAY, tzinfo=tz)
    return start_of_day, end_of_day


def build_appeal_query(filters: AppealFilters, *, tz: tzinfo) -> AppealQuery:
    """Validate list filters and build the matching `AppealQuery`."""

    day_value = _clean(filters.date)
    start_value = _clean(filters.start_date)
    end_value = _clean(filters.end_date)
    status_value = _clean(filters.status)

    if day_value and (start_value or end_value):
        raise ValueError('Cannot combine "date" with "startDate" or "endDate"')

    created_from: datetime | None = None
    created_to: datetime | None = None

    if day_value:
        try:
            day = parse_day(day_value, tz)
        except ValueError as exc:
            raise ValueError("Invalid format of date") from exc
        created_from, created_to = day_bounds(day, tz)

    if start_value or end_value:
        if not (start_value and end_value):
            raise ValueError('Both "startDate" and "endDate" are required for range filtering')
        try:
            created_from = parse_instant(start_value, tz)
            created_to = parse_instant(end_value, tz)
        except ValueError as exc:
            raise ValueError("Invalid format of date range") from exc
        if created_from > created_to:
            raise ValueError('"startDate" must be before "endDate"')

    statuses: tuple[str, ...] | None = None
    if status_value:
        statuses = (parse_status(status_value).value,)

    return AppealQuery(statuses=statuses, created_from=created_from, created_to=created_to)
