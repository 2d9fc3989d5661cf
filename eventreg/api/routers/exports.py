"""
API Router for Order Exports

Responsibility:
    HTTP interface for requesting an order CSV export and polling its status.

Architecture Notes:
    - Part of API Layer (Presentation)
    - POST enqueues the Celery task, GET reads the status cache through
      GetExportStatusQueryHandler (CQRS Query)
    - No business logic - pure HTTP concerns

Contains:
    - POST /exports/orders - queue an export, 202 with export_id
    - GET /exports/{export_id}/status - poll the outcome

Polling:
    The status record appears only when the export has finished. Until then
    (and after the record expires, 24h) the status endpoint answers 404.
"""

import logging
from typing import List, Literal, Optional, Union
from uuid import uuid4

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import BaseModel, ConfigDict, Field

from eventreg.api.schemas.common import ErrorResponse
from eventreg.application.models import ExportStatus
from eventreg.application.queries.get_export_status import (
    GetExportStatusQuery,
    GetExportStatusQueryHandler,
)
from eventreg.application.tasks.export_tasks import export_orders_task
from eventreg.domain.shared.exceptions import InvalidExportRequestError
from eventreg.infrastructure.persistence.order_filter import (
    SORTABLE_COLUMNS,
    parse_date_range,
    parse_statuses,
)
from eventreg.infrastructure.persistence.redis.status_cache import RedisStatusCache

logger = logging.getLogger(__name__)


# ============================================================================
# REQUEST / RESPONSE MODELS
# ============================================================================


class OrderExportFilters(BaseModel):
    """Filter parameters accepted by the order export."""

    search: Optional[str] = Field(
        default=None, description="Substring of order number, buyer name or email"
    )
    status: Optional[Union[str, List[str]]] = Field(
        default=None, description="Order status value(s), e.g. 'paid'"
    )
    date_range: Optional[str] = Field(
        default=None,
        description="'YYYY-MM-DD' or 'YYYY-MM-DD to YYYY-MM-DD' (creation date)",
    )
    sort: Optional[str] = Field(default=None, description="Column to sort by")
    direction: Optional[Literal["asc", "desc"]] = None


class ExportOrdersRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "requester_id": 42,
                "filters": {"status": "paid", "date_range": "2025-01-01 to 2025-01-31"},
            }
        }
    )

    requester_id: int = Field(gt=0, description="ID of the requesting user")
    filters: OrderExportFilters = Field(default_factory=OrderExportFilters)


class ExportQueuedResponse(BaseModel):
    export_id: str = Field(description="Identifier used to poll the export status")
    status_url: str = Field(description="Relative URL of the status endpoint")


class ExportStatusResponse(BaseModel):
    """
    Outcome of a finished export.

    Attributes:
        export_id: Identifier returned when the export was queued
        status: "success" or "failed"
        url: CSV download URL (success)
        message: Failure description (failed)
        result_ready: True when url can be downloaded
    """

    export_id: str
    status: ExportStatus
    url: Optional[str] = None
    message: Optional[str] = None
    result_ready: bool = False


# ============================================================================
# ROUTER CONFIGURATION
# ============================================================================

router = APIRouter(
    prefix="/exports",
    tags=["exports"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - invalid filters"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================


def get_export_status_query_handler() -> GetExportStatusQueryHandler:
    return GetExportStatusQueryHandler(status_cache=RedisStatusCache())


def _validate_filters(filters: OrderExportFilters) -> None:
    if filters.status:
        parse_statuses(filters.status)
    if filters.date_range:
        parse_date_range(filters.date_range)
    if filters.sort and filters.sort not in SORTABLE_COLUMNS:
        raise InvalidExportRequestError(
            f"Cannot sort by '{filters.sort}', sortable: {sorted(SORTABLE_COLUMNS)}",
            field_name="sort",
        )


# ============================================================================
# ENDPOINTS
# ============================================================================


@router.post(
    "/orders",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=ExportQueuedResponse,
    summary="Queue an order CSV export",
)
async def export_orders(request: ExportOrdersRequest) -> ExportQueuedResponse:
    """
    Queue an order export for the requester.

    Filters are checked here so that obviously invalid requests fail with
    400 instead of a failed status record. The export itself runs in the
    Celery worker.
    """
    _validate_filters(request.filters)

    export_id = str(uuid4())
    filter_parameters = request.filters.model_dump(exclude_none=True)

    task_result = export_orders_task.delay(
        requester_id=request.requester_id,
        export_id=export_id,
        filter_parameters=filter_parameters,
    )
    logger.info(
        f"Export {export_id} queued for requester {request.requester_id} "
        f"(task {task_result.id})"
    )

    return ExportQueuedResponse(
        export_id=export_id,
        status_url=(
            f"/api/exports/{export_id}/status?requester_id={request.requester_id}"
        ),
    )


@router.get(
    "/{export_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=ExportStatusResponse,
    summary="Get status of an order export",
    responses={
        404: {
            "model": ErrorResponse,
            "description": "Not Found - export still running, unknown or expired",
        }
    },
)
async def get_export_status(
    export_id: str = Path(..., min_length=1, description="Export id from POST /exports/orders"),
    requester_id: int = Query(..., gt=0, description="ID of the requesting user"),
    handler: GetExportStatusQueryHandler = Depends(get_export_status_query_handler),
) -> ExportStatusResponse:
    result = await handler.handle(
        GetExportStatusQuery(requester_id=requester_id, export_id=export_id)
    )
    return ExportStatusResponse(**result.model_dump())
