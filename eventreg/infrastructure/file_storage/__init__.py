"""
File Storage Infrastructure Module

Exports:
    - CsvWriterService: header + rows to CSV bytes
    - LocalBlobStorage / S3BlobStorage: publish export files
    - get_blob_storage: backend selected from STORAGE_BACKEND
"""

from .blob_storage import LocalBlobStorage, S3BlobStorage, get_blob_storage
from .csv_writer import CsvWriterService

__all__ = [
    "CsvWriterService",
    "LocalBlobStorage",
    "S3BlobStorage",
    "get_blob_storage",
]
