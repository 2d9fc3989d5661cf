"""
WhatsApp Cloud API Infrastructure Module
"""

from .client import WhatsAppCloudApiClient, WhatsAppResponse
from .config import WhatsAppConfig

__all__ = ["WhatsAppCloudApiClient", "WhatsAppConfig", "WhatsAppResponse"]
