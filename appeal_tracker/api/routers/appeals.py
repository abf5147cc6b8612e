# This file defines the appeal endpoints under the versioned API path.
# It exists so clients can create appeals, list them with date/status filters, and move them through their lifecycle.
# Validation and transition rules live in AppealService; the router only maps HTTP to service calls.
# Responses carry the standard envelope fields alongside the appeal payload.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from appeal_tracker.api.api_config import ApiConfig
from appeal_tracker.api.appeal_filters import AppealFilters
from appeal_tracker.api.dependencies import get_appeal_service, get_config
from appeal_tracker.api.response_envelope import build_list_envelope, build_object_envelope
from appeal_tracker.api.schemas.appeal_schemas import (
    AppealCreatedResponseV1,
    AppealListResponseV1,
    AppealResponseV1,
    BulkCancelResponseV1,
    CancelAppealRequest,
    CompleteAppealRequest,
    CreateAppealRequest,
)
from appeal_tracker.api.schemas.common import MessageResponse
from appeal_tracker.api.services.appeal_service import AppealService

router = APIRouter(prefix="/appeals", tags=["appeals"])
AppealServiceDep = Annotated[AppealService, Depends(get_appeal_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]

UPDATED_MESSAGE = "Appeal updated successfully"


def _envelope(request: Request, config: ApiConfig, **fields: object) -> dict[str, object]:
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        **fields,
    )


@router.post(
    "",
    response_model=AppealCreatedResponseV1,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_appeal(
    request: Request,
    service: AppealServiceDep,
    config: ConfigDep,
    payload: CreateAppealRequest | None = None,
) -> dict[str, object]:
    body = payload or CreateAppealRequest()
    appeal_id = service.create_appeal(title=body.title, description=body.description)
    return _envelope(request, config, message="Appeal created successfully", id=appeal_id)


@router.get(
    "",
    response_model=AppealListResponseV1,
    response_model_exclude_none=True,
)
def list_appeals(
    request: Request,
    service: AppealServiceDep,
    config: ConfigDep,
    date: str | None = Query(default=None, description="Calendar day, e.g. 2025-05-17."),
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    status_filter: str | None = Query(default=None, alias="status"),
    limit: int | None = Query(default=None),
    page: int | None = Query(default=None),
) -> dict[str, object]:
    result = service.list_appeals(
        filters=AppealFilters(
            date=date,
            start_date=start_date,
            end_date=end_date,
            status=status_filter,
        ),
        page=page,
        limit=limit,
    )
    return build_list_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        appeals=list(result["appeals"]),
        pagination=result["pagination"],
    )


@router.patch(
    "/cancel-all-in-progress",
    response_model=BulkCancelResponseV1,
    response_model_exclude_none=True,
)
@router.patch(
    "/bulk-cancel",
    response_model=BulkCancelResponseV1,
    response_model_exclude_none=True,
)
def cancel_all_in_progress(
    request: Request,
    service: AppealServiceDep,
    config: ConfigDep,
    payload: CancelAppealRequest | None = None,
) -> dict[str, object]:
    body = payload or CancelAppealRequest()
    canceled_count = service.cancel_all_in_progress(reason=body.reason)
    return _envelope(
        request,
        config,
        message="All in-progress appeals updated successfully",
        canceled_count=canceled_count,
    )


@router.get(
    "/{appeal_id}",
    response_model=AppealResponseV1,
    response_model_exclude_none=True,
)
def get_appeal(
    appeal_id: str,
    request: Request,
    service: AppealServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    return _envelope(request, config, appeal=service.get_appeal(appeal_id))


@router.patch(
    "/{appeal_id}/in-progress",
    response_model=MessageResponse,
    response_model_exclude_none=True,
)
def start_appeal(
    appeal_id: str,
    request: Request,
    service: AppealServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    service.transition_to_in_progress(appeal_id)
    return _envelope(request, config, message=UPDATED_MESSAGE)


@router.patch(
    "/{appeal_id}/complete",
    response_model=MessageResponse,
    response_model_exclude_none=True,
)
def complete_appeal(
    appeal_id: str,
    request: Request,
    service: AppealServiceDep,
    config: ConfigDep,
    payload: CompleteAppealRequest | None = None,
) -> dict[str, object]:
    body = payload or CompleteAppealRequest()
    service.transition_to_completed(appeal_id, solution=body.solution)
    return _envelope(request, config, message=UPDATED_MESSAGE)


@router.patch(
    "/{appeal_id}/cancel",
    response_model=MessageResponse,
    response_model_exclude_none=True,
)
def cancel_appeal(
    appeal_id: str,
    request: Request,
    service: AppealServiceDep,
    config: ConfigDep,
    payload: CancelAppealRequest | None = None,
) -> dict[str, object]:
    body = payload or CancelAppealRequest()
    service.transition_to_canceled(appeal_id, reason=body.reason)
    return _envelope(request, config, message=UPDATED_MESSAGE)
