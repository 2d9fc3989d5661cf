"""
WhatsApp Cloud API Client

Sends pre-approved template messages through the Graph API:

    POST {base_url}/{api_version}/{phone_number_id}/messages
    Authorization: Bearer {access_token}

    {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": "+6591234567",
        "type": "template",
        "template": {
            "name": "order_confirmed",
            "language": {"code": "en"},
            "components": [...]
        }
    }

The client reports the HTTP status and body for every answered request and
leaves the success decision to the caller. Transport failures
(requests.RequestException) propagate.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

import requests

from eventreg.domain.notifications import TemplateComponents

from .config import DEFAULT_API_VERSION, DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

Components = Union[TemplateComponents, Sequence[dict]]


@dataclass(frozen=True)
class WhatsAppResponse:
    """HTTP outcome of one API call."""

    http_status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return self.http_status_code == 200


class WhatsAppCloudApiClient:
    """
    Thin client for the template-message endpoint.

    Examples:
        >>> client = WhatsAppCloudApiClient("1234567890", "EAAG...")
        >>> response = client.send_template(
        ...     "+6591234567", "order_confirmed", "en", TemplateComponents(body=[...])
        ... )
        >>> response.http_status_code
        200
    """

    def __init__(
        self,
        phone_number_id: str,
        access_token: str,
        api_version: str = DEFAULT_API_VERSION,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.phone_number_id = phone_number_id
        self.access_token = access_token
        self.api_version = api_version
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def messages_url(self) -> str:
        return f"{self.base_url}/{self.api_version}/{self.phone_number_id}/messages"

    def build_template_payload(
        self, to: str, template_name: str, language: str, components: Components
    ) -> dict[str, Any]:
        if isinstance(components, TemplateComponents):
            components = components.to_api()
        return {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": to,
            "type": "template",
            "template": {
                "name": template_name,
                "language": {"code": language},
                "components": list(components),
            },
        }

    def send_template(
        self, to: str, template_name: str, language: str, components: Components
    ) -> WhatsAppResponse:
        """
        Send a template message.

        Returns:
            WhatsAppResponse with the HTTP status code and raw body

        Raises:
            requests.RequestException: On connection errors and timeouts
        """
        payload = self.build_template_payload(to, template_name, language, components)
        response = self.session.post(
            self.messages_url,
            headers={
                "Authorization": f"Bearer {self.access_token}",
                "Content-Type": "application/json",
            },
            json=payload,
            timeout=self.timeout,
        )
        logger.debug(
            f"WhatsApp API response for template {template_name}: "
            f"{response.status_code}"
        )
        return WhatsAppResponse(http_status_code=response.status_code, body=response.text)
