"""
Orders Subdomain

Rules for exporting orders to CSV: money formatting, row layout, file naming
and export configuration.

Exports:
    - OrderRowFormatter, EXPORT_HEADER, OrderRecord
    - ExportConfig
    - export_file_name, export_storage_path, random_token
    - Order enums (OrderStatus, OrderType, PaymentMethod, FulfillmentStatus, RefundStatus)
"""

from .enums import (
    FulfillmentStatus,
    OrderStatus,
    OrderType,
    PaymentMethod,
    RefundStatus,
)
from .export_config import ExportConfig
from .export_file import export_file_name, export_storage_path, random_token
from .row_formatter import EXPORT_HEADER, OrderRecord, OrderRowFormatter

__all__ = [
    "EXPORT_HEADER",
    "ExportConfig",
    "FulfillmentStatus",
    "OrderRecord",
    "OrderRowFormatter",
    "OrderStatus",
    "OrderType",
    "PaymentMethod",
    "RefundStatus",
    "export_file_name",
    "export_storage_path",
    "random_token",
]
