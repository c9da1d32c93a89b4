"""Delivery channels for notifications."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import requests
from django.conf import settings  # type: ignore

logger = logging.getLogger(__name__)


class NotificationDeliveryError(Exception):
    """Raised by a sender when the message could not be delivered."""


class BaseSender(ABC):
    """Base class for senders. `send` never raises, it reports the outcome."""

    channel = ""

    def send(self, notification) -> dict:
        try:
            self.deliver(notification)
        except NotificationDeliveryError as e:
            return {"success": False, "error": str(e)}
        except requests.RequestException as e:
            logger.error(f"{self.channel} delivery of notification {notification.id} failed: {e}", exc_info=True)
            return {"success": False, "error": str(e)}
        return {"success": True, "message": f"Sent via {self.channel}"}

    @abstractmethod
    def deliver(self, notification) -> None:
        pass


class EmailSender(BaseSender):
    channel = "email"

    def deliver(self, notification) -> None:
        from .services import send_email_notification

        email = notification.user.email
        if not email:
            raise NotificationDeliveryError("No email")
        sent = send_email_notification(
            recipient_email=email,
            subject=notification.subject or "HotelHub",
            message=notification.message,
        )
        if not sent:
            raise NotificationDeliveryError("Email backend rejected the message")


class SmsSender(BaseSender):
    """Posts the message to an HTTP SMS gateway."""

    channel = "sms"

    def deliver(self, notification) -> None:
        url = settings.SMS_GATEWAY_URL
        if not url:
            raise NotificationDeliveryError("SMS gateway not configured")
        phone = notification.user.phone
        if not phone:
            raise NotificationDeliveryError("No phone number")

        headers = {}
        if settings.SMS_GATEWAY_TOKEN:
            headers["Authorization"] = f"Bearer {settings.SMS_GATEWAY_TOKEN}"
        response = requests.post(
            url,
            json={"to": phone, "message": notification.message[:1600]},
            headers=headers,
            timeout=settings.SMS_GATEWAY_TIMEOUT,
        )
        if response.status_code >= 400:
            logger.error(f"SMS gateway returned {response.status_code}: {response.text[:500]}")
        response.raise_for_status()


SENDERS: dict[str, type[BaseSender]] = {
    "email": EmailSender,
    "sms": SmsSender,
}


def get_sender(channel: str) -> BaseSender:
    try:
        return SENDERS[channel]()
    except KeyError:
        raise NotificationDeliveryError(f"Unsupported notification type: {channel}")
