"""
WhatsApp Cloud API Configuration

Environment variables:
    WHATSAPP_PHONE_NUMBER_ID: sending phone number id (Meta Business Suite)
    WHATSAPP_ACCESS_TOKEN: API access token, never commit it
    WHATSAPP_BUSINESS_ACCOUNT_ID: business account id (optional)
    WHATSAPP_API_VERSION: Graph API version (default "v19.0")
    WHATSAPP_BASE_URL: Graph API base URL (default "https://graph.facebook.com")
    WHATSAPP_TIMEOUT: request timeout in seconds (default 10)
"""

import os
from dataclasses import dataclass, field
from typing import Final, Optional

DEFAULT_API_VERSION: Final[str] = "v19.0"
DEFAULT_BASE_URL: Final[str] = "https://graph.facebook.com"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0


@dataclass(frozen=True)
class WhatsAppConfig:
    """
    Credentials and endpoint settings for the WhatsApp Cloud API.

    Examples:
        >>> config = WhatsAppConfig(phone_number_id="1234567890", access_token="EAAG...")
        >>> config.api_version
        'v19.0'
    """

    phone_number_id: Optional[str]
    access_token: Optional[str] = field(repr=False)
    business_account_id: Optional[str] = None
    api_version: str = DEFAULT_API_VERSION
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "WhatsAppConfig":
        return cls(
            phone_number_id=os.getenv("WHATSAPP_PHONE_NUMBER_ID"),
            access_token=os.getenv("WHATSAPP_ACCESS_TOKEN"),
            business_account_id=os.getenv("WHATSAPP_BUSINESS_ACCOUNT_ID"),
            api_version=os.getenv("WHATSAPP_API_VERSION", DEFAULT_API_VERSION),
            base_url=os.getenv("WHATSAPP_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.getenv("WHATSAPP_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))),
        )
