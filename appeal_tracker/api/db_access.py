# This file wraps database access so the appeal service never builds SQL itself.
# It exists to keep statement construction out of router and service code and make testing easier.
# The store exposes insert, filtered find/count, and single or bulk conditional updates over one table.
# Timestamps are stored as naive UTC so SQLite and PostgreSQL compare them the same way.

from __future__ import annotations

import re
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    func,
    insert,
    inspect,
    select,
    text,
    update,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.elements import ColumnElement

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

_TIMESTAMP_FIELDS = ("created_at", "updated_at")
_WRITABLE_FIELDS = frozenset(
    {"title", "description", "status", "created_at", "updated_at", "solution", "reason"}
)


@dataclass(frozen=True)
class AppealQuery:
    """Filter over the appeals table; unset fields do not constrain the result."""

    appeal_id: str | None = None
    statuses: tuple[str, ...] | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None


@dataclass(frozen=True)
class UpdateResult:
    matched_count: int


def validate_identifier(identifier: str) -> str:
    """Return `identifier` unchanged, raising ValueError unless it is a plain SQL name."""

    if not _IDENTIFIER_RE.match(identifier):
        raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
    return identifier


def to_storage_timestamp(value: datetime) -> datetime:
    """Convert an aware (or UTC-naive) datetime into the naive UTC form kept in the table."""

    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def from_storage_timestamp(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _engine_kwargs(database_url: str) -> dict[str, Any]:
    if not database_url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if database_url in {"sqlite://", "sqlite:///:memory:", "sqlite+pysqlite:///:memory:"}:
        kwargs["poolclass"] = StaticPool
    return kwargs


def build_appeals_table(metadata: MetaData, table_name: str) -> Table:
    return Table(
        table_name,
        metadata,
        Column("id", String(32), primary_key=True),
        Column("title", Text, nullable=False),
        Column("description", Text, nullable=False),
        Column("status", String(16), nullable=False),
        Column("created_at", DateTime(timezone=False), nullable=False),
        Column("updated_at", DateTime(timezone=False), nullable=True),
        Column("solution", Text, nullable=True),
        Column("reason", Text, nullable=True),
        Index(f"ix_{table_name}_created_at_id", "created_at", "id"),
        Index(f"ix_{table_name}_status", "status"),
    )


class AppealStore:
    """Minimal SQLAlchemy Core store for appeal records."""

    def __init__(self, *, database_url: str, table_name: str = "appeals") -> None:
        self._engine: Engine = create_engine(database_url, future=True, **_engine_kwargs(database_url))
        self._metadata = MetaData()
        self._table = build_appeals_table(self._metadata, validate_identifier(table_name))

    def can_connect(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def table_exists(self, table_name: str | None = None) -> bool:
        name = validate_identifier(table_name or self._table.name)
        return inspect(self._engine).has_table(name)

    def create_schema(self) -> None:
        self._metadata.create_all(self._engine, checkfirst=True)

    def insert_one(self, document: Mapping[str, Any]) -> str:
        appeal_id = uuid.uuid4().hex
        values = {"id": appeal_id, **self._storage_values(document)}
        with self._engine.begin() as connection:
            connection.execute(insert(self._table).values(**values))
        return appeal_id

    def find(
        self,
        query: AppealQuery,
        *,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        statement = self._filtered(select(self._table), query)
        statement = (
            statement.order_by(self._table.c.created_at.desc(), self._table.c.id.desc())
            .offset(skip)
        )
        if limit is not None:
            statement = statement.limit(limit)
        with self._engine.connect() as connection:
            rows = connection.execute(statement).mappings().all()
        return [self._document(row) for row in rows]

    def find_one(self, query: AppealQuery) -> dict[str, Any] | None:
        rows = self.find(query, limit=1)
        return rows[0] if rows else None

    def count(self, query: AppealQuery) -> int:
        statement = self._filtered(select(func.count()).select_from(self._table), query)
        with self._engine.connect() as connection:
            return int(connection.execute(statement).scalar_one())

    def update_one(self, query: AppealQuery, values: Mapping[str, Any]) -> UpdateResult:
        if query.appeal_id is None:
            raise ValueError("update_one requires an appeal_id filter")
        return self.update_many(query, values)

    def update_many(self, query: AppealQuery, values: Mapping[str, Any]) -> UpdateResult:
        statement = self._filtered(update(self._table), query).values(
            **self._storage_values(values)
        )
        with self._engine.begin() as connection:
            result = connection.execute(statement)
        return UpdateResult(matched_count=int(result.rowcount or 0))

    def _filtered(self, statement: Any, query: AppealQuery) -> Any:
        clauses = self._where_clauses(query)
        return statement.where(*clauses) if clauses else statement

    def _where_clauses(self, query: AppealQuery) -> list[ColumnElement[bool]]:
        columns = self._table.c
        clauses: list[ColumnElement[bool]] = []
        if query.appeal_id is not None:
            clauses.append(columns.id == query.appeal_id)
        if query.statuses is not None:
            clauses.append(columns.status.in_(list(query.statuses)))
        if query.created_from is not None:
            clauses.append(columns.created_at >= to_storage_timestamp(query.created_from))
        if query.created_to is not None:
            clauses.append(columns.created_at <= to_storage_timestamp(query.created_to))
        return clauses

    def _storage_values(self, values: Mapping[str, Any]) -> dict[str, Any]:
        unknown = set(values) - _WRITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown appeal fields: {', '.join(sorted(unknown))}")
        stored = dict(values)
        for field in _TIMESTAMP_FIELDS:
            if stored.get(field) is not None:
                stored[field] = to_storage_timestamp(stored[field])
        return stored

    @staticmethod
    def _document(row: Mapping[str, Any]) -> dict[str, Any]:
        document = dict(row)
        for field in _TIMESTAMP_FIELDS:
            document[field] = from_storage_timestamp(document.get(field))
        return document
