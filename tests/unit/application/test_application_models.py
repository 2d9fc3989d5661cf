"""
Tests for shared application models.
"""

import pytest
from pydantic import ValidationError

from eventreg.application.models import (
    ExportRequest,
    ExportStatus,
    ExportStatusRecord,
    export_status_key,
)


def test_status_key_format():
    assert export_status_key(42, "exp-1") == "export:42:exp-1"


def test_export_request_defaults_and_key():
    request = ExportRequest(requester_id=7, export_id="abc")
    assert request.filter_parameters == {}
    assert request.status_key == "export:7:abc"


@pytest.mark.parametrize("requester_id", [0, -1])
def test_export_request_rejects_non_positive_requester(requester_id):
    with pytest.raises(ValidationError):
        ExportRequest(requester_id=requester_id, export_id="abc")


@pytest.mark.parametrize("export_id", ["", "   "])
def test_export_request_rejects_blank_export_id(export_id):
    with pytest.raises(ValidationError):
        ExportRequest(requester_id=1, export_id=export_id)


def test_export_request_is_frozen():
    request = ExportRequest(requester_id=1, export_id="abc")
    with pytest.raises(ValidationError):
        request.export_id = "other"


def test_success_record_cache_payload():
    record = ExportStatusRecord.success("https://cdn/x.csv")
    assert record.to_cache() == {"status": "success", "url": "https://cdn/x.csv"}


def test_failed_record_cache_payload():
    record = ExportStatusRecord.failed("disk full")
    assert record.to_cache() == {"status": "failed", "message": "disk full"}


def test_record_round_trips_from_cache_payload():
    record = ExportStatusRecord.model_validate({"status": "failed", "message": "x"})
    assert record.status is ExportStatus.FAILED
