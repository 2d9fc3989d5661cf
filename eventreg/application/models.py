"""
Shared Application Models

Responsibility:
    Contains shared models used across Application Layer.
    Prevents circular dependencies between services, queries and tasks.

Architecture Notes:
    - Part of Application Layer (Shared)
    - Used by Services, Queries and Tasks
    - pydantic models so the API Layer can serialize them directly

Contains:
    - ExportStatus: Enum for the terminal states of an export
    - ExportRequest: Immutable description of one export run
    - ExportStatusRecord: Value stored in the status cache
    - export_status_key: Cache key builder

Does NOT contain:
    - Business logic (belongs to Domain Layer)
    - HTTP models (belongs to API Layer)
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

STATUS_KEY_PREFIX = "export"


class ExportStatus(str, Enum):
    """
    Outcome of an export run.

    Only terminal states are written; an export without a status record is
    either still running or was never requested (or the record expired).
    """

    SUCCESS = "success"
    FAILED = "failed"


def export_status_key(requester_id: int, export_id: str) -> str:
    """
    Cache key for the status of one export.

    Examples:
        >>> export_status_key(42, "exp-1")
        'export:42:exp-1'
    """
    return f"{STATUS_KEY_PREFIX}:{requester_id}:{export_id}"


class ExportRequest(BaseModel):
    """
    Parameters of one order export run.

    Attributes:
        requester_id: User who asked for the export (owns the status record)
        filter_parameters: Search/filter/sort parameters for the order query
        export_id: Caller-supplied identifier of this run

    Examples:
        >>> request = ExportRequest(requester_id=42, export_id="exp-1",
        ...                         filter_parameters={"status": "paid"})
        >>> request.status_key
        'export:42:exp-1'
    """

    model_config = ConfigDict(frozen=True)

    requester_id: int = Field(gt=0, description="ID of the requesting user")
    filter_parameters: Dict[str, Any] = Field(default_factory=dict)
    export_id: str = Field(min_length=1, description="Identifier of this export run")

    @field_validator("export_id")
    @classmethod
    def validate_export_id(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("export_id cannot be blank")
        return value

    @property
    def status_key(self) -> str:
        return export_status_key(self.requester_id, self.export_id)


class ExportStatusRecord(BaseModel):
    """
    Status record kept in the cache for 24 hours.

    Attributes:
        status: "success" or "failed"
        url: Public URL of the CSV file (success only)
        message: Failure description (failed only)
    """

    status: ExportStatus
    url: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, url: str) -> "ExportStatusRecord":
        return cls(status=ExportStatus.SUCCESS, url=url)

    @classmethod
    def failed(cls, message: str) -> "ExportStatusRecord":
        return cls(status=ExportStatus.FAILED, message=message)

    def to_cache(self) -> Dict[str, Any]:
        """Cache payload: only the fields relevant to the status."""
        return self.model_dump(mode="json", exclude_none=True)
