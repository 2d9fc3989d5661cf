"""
Notification Dispatcher

Routes a notification to the channels it asks for through
``notification.via(notifiable)``. Channel errors propagate to the caller.
"""

import logging
from typing import Any, Mapping, Protocol

logger = logging.getLogger(__name__)


class NotificationChannel(Protocol):
    def send(self, notifiable: Any, notification: Any) -> None: ...


class NotificationDispatcher:
    """
    Sends notifications through named channels.

    Examples:
        >>> dispatcher = NotificationDispatcher({"whatsapp": WhatsAppChannel(config)})
        >>> dispatcher.send(user, OrderConfirmedNotification({"url": order_url}))
    """

    def __init__(self, channels: Mapping[str, NotificationChannel]) -> None:
        self.channels = dict(channels)

    def send(self, notifiable: Any, notification: Any) -> None:
        """
        Deliver notification on every channel it lists.

        Raises:
            ValueError: If the notification names an unregistered channel
        """
        for name in notification.via(notifiable):
            channel = self.channels.get(name)
            if channel is None:
                raise ValueError(f"Unknown notification channel: {name}")
            logger.debug(
                f"Sending {notification.__class__.__name__} via {name}"
            )
            channel.send(notifiable, notification)
