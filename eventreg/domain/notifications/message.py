"""
Outbound WhatsApp Message Model

Notifications that can be delivered over WhatsApp expose a ``to_whatsapp``
method returning a mapping with four required keys:

    {
        "to": "+6591234567",             # international format
        "template_name": "order_confirmed",
        "language": "en",
        "components": TemplateComponents(...),
    }

Responsibility:
    - Template component structure (header / body / buttons parameters)
    - Immutable OutboundMessage value object
    - WhatsAppRenderable capability protocol, checked before dispatch
    - Required-field validation helper

Architecture Notes:
    - Domain Layer, no I/O
    - The capability is an explicit runtime-checkable Protocol; a notification
      without ``to_whatsapp`` is simply not deliverable on this channel
"""

from dataclasses import dataclass, field
from typing import Any, Final, Mapping, Protocol, runtime_checkable

REQUIRED_MESSAGE_FIELDS: Final[tuple[str, ...]] = (
    "to",
    "template_name",
    "language",
    "components",
)


@dataclass(frozen=True)
class TemplateComponents:
    """
    Parameters for a pre-approved WhatsApp template.

    Attributes:
        header: Header parameters, e.g. [{"type": "text", "text": "Hi"}]
        body: Body parameters, one per {{n}} placeholder in the template
        buttons: Button components, e.g.
            [{"sub_type": "url", "index": 0, "parameters": [{"type": "text", "text": "abc"}]}]

    Examples:
        >>> components = TemplateComponents(body=[{"type": "text", "text": "Order confirmed"}])
        >>> components.to_api()
        [{'type': 'body', 'parameters': [{'type': 'text', 'text': 'Order confirmed'}]}]
    """

    header: list[dict[str, Any]] = field(default_factory=list)
    body: list[dict[str, Any]] = field(default_factory=list)
    buttons: list[dict[str, Any]] = field(default_factory=list)

    def to_api(self) -> list[dict[str, Any]]:
        """Serialize to the Cloud API ``template.components`` array."""
        components: list[dict[str, Any]] = []
        if self.header:
            components.append({"type": "header", "parameters": list(self.header)})
        if self.body:
            components.append({"type": "body", "parameters": list(self.body)})
        for index, button in enumerate(self.buttons):
            components.append(
                {
                    "type": "button",
                    "sub_type": button.get("sub_type", "url"),
                    "index": str(button.get("index", index)),
                    "parameters": list(button.get("parameters", [])),
                }
            )
        return components


@dataclass(frozen=True)
class OutboundMessage:
    """
    WhatsApp template message addressed to one phone number.

    Attributes:
        to: Destination phone number in international format
        template_name: Name of the approved template
        language: Template language code (e.g. "en", "zh_CN")
        components: Template parameters
    """

    to: str
    template_name: str
    language: str
    components: TemplateComponents

    def as_mapping(self) -> dict[str, Any]:
        return {
            "to": self.to,
            "template_name": self.template_name,
            "language": self.language,
            "components": self.components,
        }


@runtime_checkable
class WhatsAppRenderable(Protocol):
    """Capability: the notification can render itself as a WhatsApp message."""

    def to_whatsapp(self, notifiable: Any) -> Mapping[str, Any]: ...


def missing_fields(message: Mapping[str, Any]) -> list[str]:
    """
    Names of required message fields that are absent or None.

    Examples:
        >>> missing_fields({"to": "+65", "template_name": "t", "language": "en"})
        ['components']
    """
    return [name for name in REQUIRED_MESSAGE_FIELDS if message.get(name) is None]


class Notification:
    """
    Base class for notifications.

    Subclasses list their delivery channels in ``via`` and implement one
    renderer per channel (``to_whatsapp`` for the WhatsApp channel).
    """

    def via(self, notifiable: Any) -> list[str]:
        return []


class OrderConfirmedNotification(Notification):
    """
    Tells a buyer their order went through, with a link to view it.

    Template ``order_confirmed`` expects two body parameters:
    {{1}} the message line, {{2}} the order URL.

    Examples:
        >>> notification = OrderConfirmedNotification(
        ...     {"message": "Your order has been confirmed", "url": "https://acme.run/orders/42"}
        ... )
        >>> notification.to_whatsapp(user)["template_name"]
        'order_confirmed'
    """

    TEMPLATE_NAME: Final[str] = "order_confirmed"
    DEFAULT_MESSAGE: Final[str] = "Default message"
    DEFAULT_URL: Final[str] = "https://example.com"

    def __init__(self, data: Mapping[str, Any], language: str = "en") -> None:
        self.data = dict(data)
        self.language = language

    def via(self, notifiable: Any) -> list[str]:
        return ["whatsapp"]

    def to_whatsapp(self, notifiable: Any) -> dict[str, Any]:
        message = OutboundMessage(
            to=getattr(notifiable, "mobile_no", None),
            template_name=self.TEMPLATE_NAME,
            language=self.language,
            components=TemplateComponents(
                body=[
                    {
                        "type": "text",
                        "text": self.data.get("message") or self.DEFAULT_MESSAGE,
                    },
                    {"type": "text", "text": self.data.get("url") or self.DEFAULT_URL},
                ]
            ),
        )
        return message.as_mapping()
