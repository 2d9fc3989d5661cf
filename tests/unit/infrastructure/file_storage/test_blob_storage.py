"""
Tests for blob storage backends.

Covers:
- LocalBlobStorage: atomic write, permissions, URLs, path validation
- S3BlobStorage: put_object arguments, ACL by visibility, URL styles,
  botocore errors wrapped as StorageError
- get_blob_storage selection
"""

import os
import stat
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from eventreg.domain.shared.exceptions import StorageError
from eventreg.infrastructure.file_storage.blob_storage import (
    LocalBlobStorage,
    S3BlobStorage,
    get_blob_storage,
)

PATH = "staging/default/csv/orders-2025-02-01-aB3xY.csv"


# ============================================================================
# LocalBlobStorage
# ============================================================================


@pytest.fixture
def local_storage(tmp_path):
    return LocalBlobStorage(root=str(tmp_path), base_url="http://files.test/")


def test_local_put_writes_file(local_storage, tmp_path):
    local_storage.put(PATH, b"a,b\r\n")

    target = tmp_path / PATH
    assert target.read_bytes() == b"a,b\r\n"
    assert not target.with_suffix(".csv.tmp").exists()


def test_local_put_overwrites(local_storage, tmp_path):
    local_storage.put(PATH, b"old")
    local_storage.put(PATH, b"new")
    assert (tmp_path / PATH).read_bytes() == b"new"


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_local_put_permissions_follow_visibility(local_storage, tmp_path):
    local_storage.put(PATH, b"x", visibility="public")
    assert stat.S_IMODE((tmp_path / PATH).stat().st_mode) == 0o644

    local_storage.put("private.csv", b"x", visibility="private")
    assert stat.S_IMODE((tmp_path / "private.csv").stat().st_mode) == 0o600


def test_local_url_for(local_storage):
    assert local_storage.url_for(PATH) == f"http://files.test/{PATH}"


@pytest.mark.parametrize("path", ["/etc/passwd", "../escape.csv", "a/../../b.csv", ""])
def test_local_rejects_paths_outside_root(local_storage, path):
    with pytest.raises(StorageError):
        local_storage.put(path, b"x")


def test_local_put_wraps_os_error(local_storage):
    with patch("pathlib.Path.write_bytes", side_effect=OSError("No space left on device")):
        with pytest.raises(StorageError) as exc_info:
            local_storage.put(PATH, b"x")

    assert exc_info.value.path == PATH
    assert isinstance(exc_info.value.original_error, OSError)


def test_local_defaults_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_ROOT", str(tmp_path))
    monkeypatch.setenv("STORAGE_BASE_URL", "https://exports.acme.run")

    storage = LocalBlobStorage()

    assert storage.root == tmp_path
    assert storage.url_for("a.csv") == "https://exports.acme.run/a.csv"


# ============================================================================
# S3BlobStorage
# ============================================================================


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def s3_storage(s3_client, monkeypatch):
    monkeypatch.delenv("AWS_S3_CUSTOM_DOMAIN", raising=False)
    monkeypatch.delenv("AWS_S3_ENDPOINT_URL", raising=False)
    return S3BlobStorage(bucket="exports", region="ap-southeast-1", client=s3_client)


def test_s3_requires_bucket(monkeypatch):
    monkeypatch.delenv("AWS_STORAGE_BUCKET_NAME", raising=False)
    with pytest.raises(StorageError):
        S3BlobStorage()


def test_s3_put_public(s3_storage, s3_client):
    s3_storage.put(PATH, b"csv")

    s3_client.put_object.assert_called_once_with(
        Bucket="exports",
        Key=PATH,
        Body=b"csv",
        ContentType="text/csv; charset=utf-8",
        ACL="public-read",
    )


def test_s3_put_private_has_no_acl(s3_storage, s3_client):
    s3_storage.put(PATH, b"csv", visibility="private")
    assert "ACL" not in s3_client.put_object.call_args.kwargs


def test_s3_put_wraps_client_error(s3_storage, s3_client):
    s3_client.put_object.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "PutObject"
    )

    with pytest.raises(StorageError) as exc_info:
        s3_storage.put(PATH, b"csv")
    assert isinstance(exc_info.value.original_error, ClientError)


def test_s3_put_wraps_botocore_error(s3_storage, s3_client):
    s3_client.put_object.side_effect = EndpointConnectionError(endpoint_url="https://s3")
    with pytest.raises(StorageError):
        s3_storage.put(PATH, b"csv")


def test_s3_url_default(s3_storage):
    assert s3_storage.url_for(PATH) == (
        f"https://exports.s3.ap-southeast-1.amazonaws.com/{PATH}"
    )


def test_s3_url_custom_domain(s3_client):
    storage = S3BlobStorage(bucket="exports", custom_domain="cdn.acme.run", client=s3_client)
    assert storage.url_for(PATH) == f"https://cdn.acme.run/{PATH}"


def test_s3_url_custom_endpoint(s3_client, monkeypatch):
    monkeypatch.delenv("AWS_S3_CUSTOM_DOMAIN", raising=False)
    storage = S3BlobStorage(
        bucket="exports", endpoint_url="http://minio:9000/", client=s3_client
    )
    assert storage.url_for(PATH) == f"http://minio:9000/exports/{PATH}"


def test_s3_client_created_lazily():
    with patch("eventreg.infrastructure.file_storage.blob_storage.boto3") as boto3:
        storage = S3BlobStorage(bucket="exports", region="eu-west-1")
        boto3.client.assert_not_called()

        storage.put(PATH, b"csv")

        boto3.client.assert_called_once_with(
            "s3", region_name="eu-west-1", endpoint_url=storage.endpoint_url
        )


# ============================================================================
# get_blob_storage
# ============================================================================


def test_get_blob_storage_local_by_default(monkeypatch):
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    assert isinstance(get_blob_storage(), LocalBlobStorage)


def test_get_blob_storage_s3(monkeypatch):
    monkeypatch.setenv("AWS_STORAGE_BUCKET_NAME", "exports")
    assert isinstance(get_blob_storage("S3"), S3BlobStorage)


def test_get_blob_storage_unknown():
    with pytest.raises(ValueError):
        get_blob_storage("ftp")
