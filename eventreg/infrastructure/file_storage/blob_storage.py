"""
Blob Storage for Exported Files

Publishes export files and resolves the URL the requester downloads from.

Backends:
    - LocalBlobStorage: files under STORAGE_ROOT, served at STORAGE_BASE_URL
      (development, tests)
    - S3BlobStorage: objects in AWS_STORAGE_BUCKET_NAME (production)

Selection:
    get_blob_storage() reads STORAGE_BACKEND ("local" or "s3", default "local").

Error Handling:
    OSError / botocore errors are logged and raised as StorageError.
"""

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from eventreg.domain.orders.export_config import VISIBILITY_PUBLIC
from eventreg.domain.shared.exceptions import StorageError

# Configure logger for file storage operations
logger = logging.getLogger(__name__)

CSV_CONTENT_TYPE = "text/csv; charset=utf-8"
PUBLIC_READ_ACL = "public-read"


def _validate_relative_path(path: str) -> PurePosixPath:
    relative = PurePosixPath(path)
    if relative.is_absolute() or ".." in relative.parts or not relative.parts:
        raise StorageError("Storage path must be relative and stay inside the root", path=path)
    return relative


class LocalBlobStorage:
    """
    Blob storage on the local file system.

    Writes are atomic: content goes to {path}.tmp first and is then renamed
    over the final path, so a reader never sees a partial file.

    Examples:
        >>> storage = LocalBlobStorage(root="/tmp/eventreg", base_url="http://localhost:8000/files")
        >>> storage.put("staging/default/csv/orders-x.csv", b"...")
        >>> storage.url_for("staging/default/csv/orders-x.csv")
        'http://localhost:8000/files/staging/default/csv/orders-x.csv'
    """

    def __init__(self, root: Optional[str] = None, base_url: Optional[str] = None) -> None:
        self.root = Path(root or os.getenv("STORAGE_ROOT", "/tmp/eventreg/storage"))
        self.base_url = (
            base_url or os.getenv("STORAGE_BASE_URL", "http://localhost:8000/files")
        ).rstrip("/")

    def path_for(self, path: str) -> Path:
        return self.root.joinpath(*_validate_relative_path(path).parts)

    def put(self, path: str, content: bytes, visibility: str = VISIBILITY_PUBLIC) -> None:
        target = self.path_for(path)
        tmp_path = target.with_suffix(target.suffix + ".tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(content)
            if visibility == VISIBILITY_PUBLIC:
                os.chmod(tmp_path, 0o644)
            else:
                os.chmod(tmp_path, 0o600)
            tmp_path.replace(target)
        except OSError as e:
            logger.error(f"Failed to write {target}: {e}")
            raise StorageError("Failed to write file", path=path, original_error=e) from e
        logger.info(f"Stored {len(content)} bytes at {target}")

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{_validate_relative_path(path).as_posix()}"


class S3BlobStorage:
    """
    Blob storage on Amazon S3 (or any S3-compatible endpoint).

    Configuration (environment):
        AWS_STORAGE_BUCKET_NAME: bucket (required)
        AWS_S3_REGION_NAME: region (default "ap-southeast-1")
        AWS_S3_CUSTOM_DOMAIN: CDN / custom domain for URLs (optional)
        AWS_S3_ENDPOINT_URL: non-AWS endpoint (optional)
        AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY: read by boto3
    """

    def __init__(
        self,
        bucket: Optional[str] = None,
        region: Optional[str] = None,
        custom_domain: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self.bucket = bucket or os.getenv("AWS_STORAGE_BUCKET_NAME")
        if not self.bucket:
            raise StorageError("AWS_STORAGE_BUCKET_NAME is not configured")
        self.region = region or os.getenv("AWS_S3_REGION_NAME", "ap-southeast-1")
        self.custom_domain = custom_domain or os.getenv("AWS_S3_CUSTOM_DOMAIN")
        self.endpoint_url = endpoint_url or os.getenv("AWS_S3_ENDPOINT_URL")
        self._client = client

    def _get_client(self):
        """Get or create S3 client."""
        if self._client is None:
            self._client = boto3.client(
                "s3", region_name=self.region, endpoint_url=self.endpoint_url
            )
            logger.debug("S3 client created")
        return self._client

    def put(self, path: str, content: bytes, visibility: str = VISIBILITY_PUBLIC) -> None:
        key = _validate_relative_path(path).as_posix()
        extra = {"ACL": PUBLIC_READ_ACL} if visibility == VISIBILITY_PUBLIC else {}
        try:
            self._get_client().put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=CSV_CONTENT_TYPE,
                **extra,
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"S3 put_object failed for {key}: [{error_code}] {e}")
            raise StorageError("S3 upload failed", path=key, original_error=e) from e
        except BotoCoreError as e:
            logger.error(f"S3 put_object failed for {key}: {e}")
            raise StorageError("S3 upload failed", path=key, original_error=e) from e
        logger.info(f"Uploaded {len(content)} bytes to s3://{self.bucket}/{key}")

    def url_for(self, path: str) -> str:
        key = _validate_relative_path(path).as_posix()
        if self.custom_domain:
            return f"https://{self.custom_domain}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"


def get_blob_storage(backend: Optional[str] = None):
    """
    Storage backend selected by STORAGE_BACKEND.

    Raises:
        ValueError: For an unknown backend name
    """
    name = (backend or os.getenv("STORAGE_BACKEND", "local")).lower()
    if name == "local":
        return LocalBlobStorage()
    if name == "s3":
        return S3BlobStorage()
    raise ValueError(f"Unknown STORAGE_BACKEND '{name}', expected 'local' or 's3'")
