"""
WhatsApp Notification Channel

Delivers notifications as WhatsApp template messages.

Process Flow:
    1. Skip notifications without the WhatsAppRenderable capability
    2. Render the message with notification.to_whatsapp(notifiable)
    3. Validate to / template_name / language / components are present
    4. Send through the Cloud API client
    5. Treat any status other than 200 as a failure

Error Handling:
    - Missing fields: log error, raise MessageValidationError, no API call
    - Non-200 answer: log status, body, destination, template; raise WhatsAppApiError
    - Client exceptions (requests errors): log with context and re-raise
    Nothing is retried here; retry policy belongs to whoever dispatched the
    notification.
"""

import logging
from typing import Any, Callable, Optional

from eventreg.domain.notifications import WhatsAppRenderable, missing_fields
from eventreg.domain.shared.exceptions import MessageValidationError, WhatsAppApiError
from eventreg.infrastructure.whatsapp import WhatsAppCloudApiClient, WhatsAppConfig

logger = logging.getLogger(__name__)

ClientFactory = Callable[[WhatsAppConfig], Any]


def default_client_factory(config: WhatsAppConfig) -> WhatsAppCloudApiClient:
    return WhatsAppCloudApiClient(
        phone_number_id=config.phone_number_id,
        access_token=config.access_token,
        api_version=config.api_version,
        base_url=config.base_url,
        timeout=config.timeout,
    )


class WhatsAppChannel:
    """
    Notification channel for WhatsApp template messages.

    Examples:
        >>> channel = WhatsAppChannel(WhatsAppConfig.from_env())
        >>> channel.send(user, OrderConfirmedNotification({"url": order_url}))
    """

    def __init__(
        self,
        config: Optional[WhatsAppConfig] = None,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self.config = config or WhatsAppConfig.from_env()
        self.client_factory = client_factory or default_client_factory

    def send(self, notifiable: Any, notification: Any) -> None:
        """
        Send the notification to notifiable over WhatsApp.

        Raises:
            MessageValidationError: If the rendered message lacks a required field
            WhatsAppApiError: If the API answers with a status other than 200
            requests.RequestException: If the request itself fails
        """
        if not isinstance(notification, WhatsAppRenderable):
            logger.debug(
                f"{notification.__class__.__name__} has no WhatsApp representation, skipping"
            )
            return

        message = notification.to_whatsapp(notifiable)

        absent = missing_fields(message)
        if absent:
            logger.error(
                "WhatsApp notification missing required fields",
                extra={"missing_fields": absent, "whatsapp_message": dict(message)},
            )
            raise MessageValidationError(absent)

        to = message["to"]
        template = message["template_name"]
        context = {"to": to, "template": template}

        try:
            client = self.client_factory(self.config)
            result = client.send_template(
                to, template, message["language"], message["components"]
            )
        except Exception as e:
            logger.error(
                f"WhatsApp notification error: {e}",
                extra={**context, "error_type": type(e).__name__},
            )
            raise

        if result.http_status_code != 200:
            logger.error(
                "WhatsApp API error",
                extra={
                    **context,
                    "status_code": result.http_status_code,
                    "response": result.body,
                },
            )
            raise WhatsAppApiError(
                result.http_status_code, result.body, to=to, template=template
            )

        logger.debug("WhatsApp message sent successfully", extra=context)
