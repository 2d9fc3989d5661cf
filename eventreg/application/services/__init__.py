"""
Application Services (Use Cases)
"""

from eventreg.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from eventreg.application.services.order_export_use_case import (
    OrderExportUseCase,
    failure_message,
)

__all__ = ["NotificationDispatcher", "OrderExportUseCase", "failure_message"]
