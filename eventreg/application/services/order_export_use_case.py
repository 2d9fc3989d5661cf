"""
Order Export Use Case - Application Orchestration

Responsibility:
    Produces the back-office order CSV for one ExportRequest and records the
    outcome in the status cache, where the requester polls for it.

Architecture Notes:
    - Part of Application Layer (Services/Use Cases)
    - Depends on Domain Layer for formatting and naming rules
    - Depends on Infrastructure only through ports (constructor injection)
    - Synchronous: runs inside a Celery worker, one request per call

Process Flow:
    1. Build file name from date_range (or today) and a random token
    2. Build storage path {env}/{tenant}/csv/{file}.csv
    3. Open the filtered order query
    4. Stream pages of batch_size orders through the row formatter
    5. Encode header + rows as CSV
    6. Store the file (public visibility) and resolve its URL
    7. Write {status: success, url} under export:{requester}:{export} for 24h

Failure Semantics:
    Any exception in steps 1-7 is logged, written as {status: failed,
    message} under the same key, then re-raised so the queue can retry.
    The task's terminal failure hook writes the same record again through
    record_export_failure, which needs only the status cache.
"""

import logging
from datetime import date
from typing import Any, Callable, Iterator, Optional

from eventreg.application.models import ExportRequest, ExportStatusRecord
from eventreg.application.ports import (
    BlobStorageProtocol,
    CsvEncoderProtocol,
    OrderQueryFactory,
    StatusCacheProtocol,
)
from eventreg.domain.orders import (
    ExportConfig,
    OrderRowFormatter,
    export_file_name,
    export_storage_path,
    random_token,
)
from eventreg.domain.shared.exceptions import DomainException

# Configure logger for this module
logger = logging.getLogger(__name__)


def failure_message(exc: BaseException) -> str:
    """Text stored in a failed status record."""
    if isinstance(exc, DomainException):
        return exc.message
    return str(exc) or exc.__class__.__name__


class OrderExportUseCase:
    """
    Orchestrates one order export run.

    Dependencies:
        - order_query_factory: builds the filtered query from request filters
        - csv_encoder: turns header + rows into file content
        - blob_storage: publishes the file and resolves its URL
        - status_cache: holds the status record polled by the requester
        - config: batch size, TTL, storage namespacing

    Examples:
        >>> use_case = OrderExportUseCase(
        ...     order_query_factory=lambda params: OrderFilter(session, params),
        ...     csv_encoder=CsvWriterService(),
        ...     blob_storage=LocalBlobStorage(),
        ...     status_cache=RedisStatusCache(),
        ... )
        >>> use_case.execute(ExportRequest(requester_id=42, export_id="exp-1"))
        'http://localhost:8000/files/staging/default/csv/orders-2025-02-01-aB3xY.csv'
    """

    def __init__(
        self,
        order_query_factory: OrderQueryFactory,
        csv_encoder: CsvEncoderProtocol,
        blob_storage: BlobStorageProtocol,
        status_cache: StatusCacheProtocol,
        config: Optional[ExportConfig] = None,
        formatter: Optional[OrderRowFormatter] = None,
        token_factory: Callable[[], str] = random_token,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.order_query_factory = order_query_factory
        self.csv_encoder = csv_encoder
        self.blob_storage = blob_storage
        self.status_cache = status_cache
        self.config = config or ExportConfig()
        self.formatter = formatter or OrderRowFormatter()
        self.token_factory = token_factory
        self.today = today

    def execute(self, request: ExportRequest) -> str:
        """
        Run the export and record success.

        Args:
            request: Requester, export id and filter parameters

        Returns:
            Public URL of the stored CSV file

        Raises:
            Exception: Whatever failed, after the failed status was written
        """
        logger.info(
            f"Export {request.export_id} started for requester {request.requester_id}"
        )
        try:
            file_name = export_file_name(
                request.filter_parameters,
                today=self.today(),
                token=self.token_factory(),
                prefix=self.config.file_prefix,
            )
            path = export_storage_path(self.config, file_name)

            query = self.order_query_factory(request.filter_parameters)
            content = self.csv_encoder.write(self.formatter.header(), self._rows(query))

            self.blob_storage.put(path, content, visibility=self.config.visibility)
            url = self.blob_storage.url_for(path)

            self.status_cache.put(
                request.status_key,
                ExportStatusRecord.success(url).to_cache(),
                self.config.status_ttl_seconds,
            )
        except Exception as exc:
            logger.error(
                f"Export {request.export_id} failed for requester "
                f"{request.requester_id}: {exc}",
                exc_info=True,
            )
            try:
                self.record_failure(request, exc)
            except Exception as status_exc:
                logger.error(
                    f"Export {request.export_id}: could not record failed status: "
                    f"{status_exc}"
                )
            raise

        logger.info(f"Export {request.export_id} completed: {path}")
        return url

    def record_failure(self, request: ExportRequest, exc: BaseException) -> None:
        """
        Write the failed status record for a request.

        Raises:
            StatusCacheError: If the cache write fails
        """
        self.status_cache.put(
            request.status_key,
            ExportStatusRecord.failed(failure_message(exc)).to_cache(),
            self.config.status_ttl_seconds,
        )
        logger.info(f"Export {request.export_id} marked as failed")

    def _rows(self, query: Any) -> Iterator[list[Any]]:
        pages = 0
        for page in query.chunk(self.config.batch_size):
            pages += 1
            for order in page:
                yield self.formatter.format_row(order)
        logger.debug(f"Streamed {pages} page(s) of orders")
