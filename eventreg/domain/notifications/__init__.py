"""
Notifications Subdomain

Outbound WhatsApp template message model and the capability protocol used
by the WhatsApp channel.
"""

from .message import (
    REQUIRED_MESSAGE_FIELDS,
    Notification,
    OrderConfirmedNotification,
    OutboundMessage,
    TemplateComponents,
    WhatsAppRenderable,
    missing_fields,
)

__all__ = [
    "REQUIRED_MESSAGE_FIELDS",
    "Notification",
    "OrderConfirmedNotification",
    "OutboundMessage",
    "TemplateComponents",
    "WhatsAppRenderable",
    "missing_fields",
]
