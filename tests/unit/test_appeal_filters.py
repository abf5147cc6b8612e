"""
Unit tests for list filter parsing.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from appeal_tracker.api.appeal_filters import AppealFilters, build_appeal_query, day_bounds


def test_date_filter_covers_the_whole_day() -> None:
    query = build_appeal_query(AppealFilters(date="2025-05-17"), tz=UTC)

    assert query.created_from == datetime(2025, 5, 17, 0, 0, 0, tzinfo=UTC)
    assert query.created_to == datetime(2025, 5, 17, 23, 59, 59, 999000, tzinfo=UTC)
    assert query.statuses is None


def test_day_bounds_are_independent_values() -> None:
    start, end = day_bounds(date(2025, 5, 17), UTC)

    assert start is not end
    assert end - start == timedelta(hours=23, minutes=59, seconds=59, milliseconds=999)


def test_date_filter_uses_configured_timezone() -> None:
    moscow = ZoneInfo("Europe/Moscow")
    query = build_appeal_query(AppealFilters(date="2025-05-17"), tz=moscow)

    assert query.created_from is not None
    assert query.created_from.astimezone(UTC) == datetime(2025, 5, 16, 21, 0, tzinfo=UTC)


def test_date_filter_accepts_datetime_and_keeps_its_day() -> None:
    query = build_appeal_query(AppealFilters(date="2025-05-17T18:30:00"), tz=UTC)

    assert query.created_from == datetime(2025, 5, 17, tzinfo=UTC)


def test_range_filter_is_inclusive_and_parsed() -> None:
    query = build_appeal_query(
        AppealFilters(start_date="2025-05-01", end_date="2025-05-17T12:00:00Z"),
        tz=UTC,
    )

    assert query.created_from == datetime(2025, 5, 1, tzinfo=UTC)
    assert query.created_to == datetime(2025, 5, 17, 12, 0, tzinfo=UTC)


def test_status_filter_is_normalized() -> None:
    query = build_appeal_query(AppealFilters(status="completed"), tz=UTC)

    assert query.statuses == ("completed",)
    assert query.created_from is None and query.created_to is None


def test_blank_values_are_ignored() -> None:
    query = build_appeal_query(AppealFilters(date="  ", start_date="", status=""), tz=UTC)

    assert query.created_from is None
    assert query.statuses is None


@pytest.mark.parametrize(
    ("filters", "message"),
    [
        (AppealFilters(date="2025-05-17", start_date="2025-05-01"), "Cannot combine"),
        (AppealFilters(date="2025-05-17", end_date="2025-05-20"), "Cannot combine"),
        (AppealFilters(start_date="2025-05-01"), "Both"),
        (AppealFilters(end_date="2025-05-01"), "Both"),
        (AppealFilters(start_date="2025-05-20", end_date="2025-05-01"), "must be before"),
        (AppealFilters(start_date="yesterday", end_date="2025-05-01"), "Invalid format of date range"),
        (AppealFilters(date="17/05/2025"), "Invalid format of date"),
        (AppealFilters(status="archived"), "Invalid status"),
    ],
)
def test_invalid_filters_raise_value_error(filters: AppealFilters, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        build_appeal_query(filters, tz=UTC)
