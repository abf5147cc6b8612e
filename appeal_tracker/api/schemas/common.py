# This file defines shared schema pieces reused by multiple API endpoints.
# It exists so envelope metadata, pagination and message payloads stay consistent.
# Shared models reduce duplication and keep contract changes easier to review.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class PaginationMetadata(BaseModel):
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total: int = Field(ge=0)
    pages: int = Field(ge=0)


class EnvelopeFields(BaseModel):
    api_version: str
    schema_version: str
    request_id: str
    generated_at: datetime


class MessageResponse(EnvelopeFields):
    message: str

