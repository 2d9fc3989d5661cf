"""
Blob Storage Port

Abstraction over the place exported files are published to (local disk in
development, S3 in production).
"""

from typing import Protocol


class BlobStorageProtocol(Protocol):
    """
    Write-once file storage with public URLs.

    Implementations:
        - LocalBlobStorage
        - S3BlobStorage
    """

    def put(self, path: str, content: bytes, visibility: str = "public") -> None:
        """
        Store content at path, replacing anything already there.

        Raises:
            StorageError: If the write fails
        """
        ...

    def url_for(self, path: str) -> str:
        """Public URL for a stored path."""
        ...
