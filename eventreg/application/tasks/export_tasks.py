"""
Celery Task for Asynchronous Order Export

Long-running task that writes the order CSV in the background and leaves a
status record in Redis for the requester to poll.

Responsibility:
    - Build the export use case from infrastructure adapters
    - Run it for one (requester_id, export_id, filters) request
    - Retry with exponential backoff on transient failures
    - Write the failed status once more from the terminal failure hook
    - Log each stage with timestamp and memory usage

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Thin orchestrator - the export itself lives in OrderExportUseCase
    - The use case writes the failed status on every failed attempt;
      ExportTask.on_failure runs once Celery gives up and writes it again
    - Failed-status writes outside the use case go through
      record_export_failure, which needs only Redis, so a broken storage or
      database configuration cannot stop the status from being written
    - InvalidExportRequestError is fatal: raised without retry
"""

import logging
import os
from datetime import datetime
from functools import partial
from typing import Any, Optional

import psutil
from celery import Task
from celery.utils.time import get_exponential_backoff_interval

from .celery_app import celery_app
from eventreg.application.models import ExportRequest, ExportStatusRecord
from eventreg.application.ports import StatusCacheProtocol
from eventreg.application.services.order_export_use_case import (
    OrderExportUseCase,
    failure_message,
)
from eventreg.domain.orders import ExportConfig
from eventreg.domain.orders.export_config import DEFAULT_STATUS_TTL_SECONDS
from eventreg.domain.shared.exceptions import InvalidExportRequestError
from eventreg.infrastructure.file_storage.blob_storage import get_blob_storage
from eventreg.infrastructure.file_storage.csv_writer import CsvWriterService
from eventreg.infrastructure.persistence.database import session_scope
from eventreg.infrastructure.persistence.order_filter import OrderFilter
from eventreg.infrastructure.persistence.redis.status_cache import RedisStatusCache

# Configure logger for this module
logger = logging.getLogger(__name__)

MAX_RETRIES = 3
RETRY_BACKOFF_FACTOR = 60  # seconds: 60, 120, 240 ...
RETRY_BACKOFF_MAX = 900  # 15 minutes

# Errors that no retry can fix
FATAL_ERRORS = (InvalidExportRequestError,)


def build_export_use_case(session: Any) -> OrderExportUseCase:
    """
    Wire OrderExportUseCase with the configured adapters.

    Args:
        session: SQLAlchemy session for the order query
    """
    return OrderExportUseCase(
        order_query_factory=partial(OrderFilter, session),
        csv_encoder=CsvWriterService(),
        blob_storage=get_blob_storage(),
        status_cache=RedisStatusCache(),
        config=ExportConfig.from_env(),
    )


def status_ttl_seconds() -> int:
    """EXPORT_STATUS_TTL, or the 24h default when unset or invalid."""
    raw = os.getenv("EXPORT_STATUS_TTL", str(DEFAULT_STATUS_TTL_SECONDS))
    try:
        ttl = int(raw)
    except ValueError:
        ttl = 0
    if ttl < 1:
        logger.warning(
            f"Invalid EXPORT_STATUS_TTL '{raw}', using {DEFAULT_STATUS_TTL_SECONDS}s"
        )
        return DEFAULT_STATUS_TTL_SECONDS
    return ttl


def record_export_failure(
    request: ExportRequest,
    exc: BaseException,
    status_cache: Optional[StatusCacheProtocol] = None,
) -> None:
    """
    Write the failed status record using only the status cache.

    Raises:
        StatusCacheError: If Redis cannot be written
    """
    cache = status_cache or RedisStatusCache()
    cache.put(
        request.status_key,
        ExportStatusRecord.failed(failure_message(exc)).to_cache(),
        status_ttl_seconds(),
    )
    logger.info(f"Export {request.export_id} marked as failed")


def _request_from(args: tuple, kwargs: dict) -> Optional[ExportRequest]:
    names = ("requester_id", "export_id", "filter_parameters")
    values = dict(zip(names, args))
    values.update({name: kwargs[name] for name in names if name in kwargs})
    if values.get("filter_parameters") is None:
        values["filter_parameters"] = {}
    try:
        return ExportRequest(**values)
    except ValueError as exc:
        logger.error(f"Cannot rebuild export request from task arguments: {exc}")
        return None


class ExportTask(Task):
    """Task base class whose failure hook records the failed export status."""

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        request = _request_from(args, kwargs)
        if request is None:
            return
        logger.error(
            f"Export {request.export_id} (task {task_id}) failed permanently: {exc}"
        )
        record_export_failure(request, exc)


@celery_app.task(
    bind=True,
    base=ExportTask,
    name="export_orders",
    max_retries=MAX_RETRIES,
    retry_backoff=True,
    retry_backoff_max=RETRY_BACKOFF_MAX,
    time_limit=300,  # 5 minutes hard limit
    soft_time_limit=270,  # Warning 30 seconds before timeout
)
def export_orders_task(
    self: Task,
    requester_id: int,
    export_id: str,
    filter_parameters: Optional[dict] = None,
) -> dict:
    """
    Export orders matching filter_parameters to CSV.

    Args:
        self: Celery task instance (bind=True gives access to self.request)
        requester_id: User who requested the export
        export_id: Identifier of this export, part of the status key
        filter_parameters: search / status / date_range / sort / direction

    Returns:
        dict: {"status": "success", "export_id": str, "url": str}

    Raises:
        ValidationError: If the arguments do not form a valid ExportRequest
            (not retried, the failure hook cannot write a status either)
        InvalidExportRequestError: If a filter value is invalid (not retried)
        Exception: Any other export failure once retries are exhausted

    Logging:
        "2025-01-11T10:30:45.123 | 84.2MB | EXPORT | Export exp-1 started"
    """
    process = psutil.Process(os.getpid())

    def log_with_memory(stage: str, message: str):
        memory_mb = process.memory_info().rss / 1024 / 1024
        timestamp = datetime.now().isoformat()
        logger.info(f"{timestamp} | {memory_mb:.1f}MB | {stage} | {message}")

    request = ExportRequest(
        requester_id=requester_id,
        export_id=export_id,
        filter_parameters=filter_parameters or {},
    )
    log_with_memory(
        "START",
        f"Export {export_id} for requester {requester_id} "
        f"(attempt {self.request.retries + 1}/{MAX_RETRIES + 1})",
    )

    use_case: Optional[OrderExportUseCase] = None
    try:
        with session_scope() as session:
            use_case = build_export_use_case(session)
            url = use_case.execute(request)
    except Exception as exc:
        log_with_memory("ERROR", f"Export {export_id} failed: {exc}")
        if use_case is None:
            # The use case records its own failures; this one happened while wiring it
            try:
                record_export_failure(request, exc)
            except Exception as status_exc:
                logger.error(
                    f"Export {export_id}: could not record failed status: {status_exc}"
                )
        if isinstance(exc, FATAL_ERRORS):
            raise
        countdown = get_exponential_backoff_interval(
            factor=RETRY_BACKOFF_FACTOR,
            retries=self.request.retries,
            maximum=RETRY_BACKOFF_MAX,
        )
        raise self.retry(exc=exc, countdown=countdown)

    log_with_memory("COMPLETE", f"Export {export_id} stored at {url}")
    return {"status": "success", "export_id": export_id, "url": url}
