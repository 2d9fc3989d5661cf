"""
Notification Channels
"""

from .whatsapp_channel import WhatsAppChannel, default_client_factory

__all__ = ["WhatsAppChannel", "default_client_factory"]
