"""
Common fixtures for API unit tests.

Provides shared test utilities:
- FastAPI TestClient
- Status cache and export task doubles
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from eventreg.api.main import app
from eventreg.api.routers.exports import get_export_status_query_handler
from eventreg.application.queries.get_export_status import GetExportStatusQueryHandler


@pytest.fixture
def client():
    """
    FastAPI TestClient for testing endpoints.

    Unhandled errors are returned as 500 responses instead of being raised
    into the test.
    """
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def override_status_cache(status_cache):
    """Route the status endpoint to the in-memory status cache."""
    app.dependency_overrides[get_export_status_query_handler] = (
        lambda: GetExportStatusQueryHandler(status_cache=status_cache)
    )
    yield status_cache
    app.dependency_overrides.pop(get_export_status_query_handler, None)


@pytest.fixture
def mock_export_task():
    """Patch the Celery task so no broker is needed."""
    with patch("eventreg.api.routers.exports.export_orders_task") as task:
        task.delay.return_value = MagicMock(id="task-123")
        yield task
