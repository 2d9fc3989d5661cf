"""
Application Layer Ports (Interfaces)

Contains Protocol definitions for dependency inversion.
Infrastructure Layer implements these protocols.
"""

from eventreg.application.ports.blob_storage import BlobStorageProtocol
from eventreg.application.ports.csv_encoder import CsvEncoderProtocol
from eventreg.application.ports.order_query import (
    OrderQueryFactory,
    OrderQueryProtocol,
)
from eventreg.application.ports.status_cache import StatusCacheProtocol

__all__ = [
    "BlobStorageProtocol",
    "CsvEncoderProtocol",
    "OrderQueryFactory",
    "OrderQueryProtocol",
    "StatusCacheProtocol",
]
