"""
Application Queries (CQRS read side)
"""

from eventreg.application.queries.get_export_status import (
    ExportNotFoundException,
    ExportStatusResult,
    GetExportStatusQuery,
    GetExportStatusQueryHandler,
)

__all__ = [
    "ExportNotFoundException",
    "ExportStatusResult",
    "GetExportStatusQuery",
    "GetExportStatusQueryHandler",
]
