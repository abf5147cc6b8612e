# This file defines request and response schemas for the appeal endpoints.
# Record fields are snake_case in Python and camelCase on the wire (createdAt, updatedAt).
# Request fields are optional at the schema level so missing values reach the service's own checks.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from appeal_tracker.api.appeal_status import AppealStatus
from appeal_tracker.api.schemas.common import EnvelopeFields, MessageResponse, PaginationMetadata


class AppealV1(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str
    status: AppealStatus
    created_at: datetime
    updated_at: datetime | None = None
    solution: str | None = None
    reason: str | None = None


class CreateAppealRequest(BaseModel):
    title: str | None = Field(default=None, examples=["Broken street light"])
    description: str | None = Field(default=None, examples=["The light on Elm St. is out."])


class CompleteAppealRequest(BaseModel):
    solution: str | None = Field(default=None, examples=["Lamp replaced"])


class CancelAppealRequest(BaseModel):
    reason: str | None = Field(default=None, examples=["Duplicate of an earlier appeal"])


class AppealCreatedResponseV1(MessageResponse):
    id: str


class AppealResponseV1(EnvelopeFields):
    appeal: AppealV1


class AppealListResponseV1(EnvelopeFields):
    appeals: list[AppealV1]
    pagination: PaginationMetadata


class BulkCancelResponseV1(MessageResponse):
    model_config = ConfigDict(populate_by_name=True)

    canceled_count: int = Field(ge=0, alias="canceledCount")
