"""
GetExportStatusQuery - CQRS Read Query

Query object and handler for retrieving the status of an order export.

Responsibility:
    - Query: Data holder with requester_id and export_id
    - Handler: Reads the status record from the status cache

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Query is simple DTO (Data Transfer Object)
    - Handler depends on StatusCacheProtocol, not on Redis directly
    - A missing record means "still running, never requested or expired";
      the API reports it as 404 and the client keeps polling
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field

from eventreg.application.models import (
    ExportStatus,
    ExportStatusRecord,
    export_status_key,
)
from eventreg.application.ports import StatusCacheProtocol

logger = logging.getLogger(__name__)


class GetExportStatusQuery(BaseModel):
    """
    Query object identifying one export.

    Attributes:
        requester_id: User who requested the export
        export_id: Identifier returned when the export was queued
    """

    requester_id: int = Field(gt=0)
    export_id: str = Field(min_length=1)


class ExportStatusResult(BaseModel):
    """
    Result DTO returned by GetExportStatusQueryHandler.

    Attributes:
        export_id: Original export id
        status: "success" or "failed"
        url: Download URL when status is success
        message: Failure description when status is failed
        result_ready: Whether the file can be downloaded
    """

    export_id: str
    status: ExportStatus
    url: Optional[str] = None
    message: Optional[str] = None
    result_ready: bool = False


class ExportNotFoundException(Exception):
    """
    Raised when no status record exists for an export.

    Can happen when:
        - Export is still running
        - Export never existed (or belongs to another requester)
        - Record expired (TTL exceeded)
    """

    def __init__(self, requester_id: int, export_id: str):
        self.requester_id = requester_id
        self.export_id = export_id
        super().__init__(f"Export {export_id} not found, not finished or expired")


class GetExportStatusQueryHandler:
    """
    Handler for retrieving export status from the status cache.

    Architecture:
        API Layer → QueryHandler → StatusCacheProtocol (Redis)

    Usage:
        handler = GetExportStatusQueryHandler(RedisStatusCache())
        result = await handler.handle(query)
    """

    def __init__(self, status_cache: StatusCacheProtocol):
        self.status_cache = status_cache

    async def handle(self, query: GetExportStatusQuery) -> ExportStatusResult:
        """
        Retrieve export status.

        Raises:
            ExportNotFoundException: If no record is stored for the export
            StatusCacheError: If the cache is unreachable
        """
        key = export_status_key(query.requester_id, query.export_id)
        logger.debug(f"Retrieving export status: {key}")

        data = self.status_cache.get(key)
        if not data:
            logger.info(f"Export status not found: {key}")
            raise ExportNotFoundException(query.requester_id, query.export_id)

        record = ExportStatusRecord.model_validate(data)
        return ExportStatusResult(
            export_id=query.export_id,
            status=record.status,
            url=record.url,
            message=record.message,
            result_ready=record.status == ExportStatus.SUCCESS,
        )
