# This file handles pagination parsing for list endpoints.
# It exists so every list route uses the same deterministic rules for page size and offsets.
# Out-of-range values are clamped rather than rejected: page >= 1 and 1 <= limit <= max.
# Pages whose offset cannot fit a signed 64-bit SQL integer are rejected.

from __future__ import annotations

from dataclasses import dataclass

MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PaginationSpec:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def normalize_pagination(
    *,
    page: int | None,
    limit: int | None,
    default_limit: int,
    max_limit: int,
) -> PaginationSpec:
    """Clamp page/limit values into the supported range, raising ValueError past MAX_OFFSET."""

    resolved_limit = default_limit if limit is None else limit
    resolved_limit = max(1, min(resolved_limit, max_limit))
    resolved_page = 1 if page is None else max(page, 1)
    spec = PaginationSpec(page=resolved_page, limit=resolved_limit)
    if spec.offset > MAX_OFFSET:
        raise ValueError("page is out of range")
    return spec


def compute_total_pages(*, total_count: int, limit: int) -> int:
    """Compute deterministic total page count (ceil division, 0 for no rows)."""

    if total_count <= 0:
        return 0
    return ((total_count - 1) // limit) + 1
