"""
Shared Domain Module

Exports the exception hierarchy shared by the orders and notifications
subdomains.
"""

from .exceptions import (
    DomainException,
    InvalidExportRequestError,
    MessageValidationError,
    StatusCacheError,
    StorageError,
    WhatsAppApiError,
)

__all__ = [
    "DomainException",
    "InvalidExportRequestError",
    "MessageValidationError",
    "StatusCacheError",
    "StorageError",
    "WhatsAppApiError",
]
