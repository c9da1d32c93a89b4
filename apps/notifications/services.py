"""Notification services: creation, delivery, queue processing and stats."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Count, Q  # type: ignore

from .models import Notification
from .senders import NotificationDeliveryError, get_sender

if TYPE_CHECKING:  # pragma: no cover
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)


# ============================================================================
# EMAIL
# ============================================================================

def send_email_notification(recipient_email: str, subject: str, message: str) -> bool:
    """
    Sends a single plain text email.

    Returns:
        bool: True if the email backend accepted the message
    """
    try:
        send_mail(
            subject=subject,
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


# ============================================================================
# NOTIFICATIONS
# ============================================================================

def deliver_notification(notification: Notification) -> bool:
    """Runs one delivery attempt and records the outcome on the notification."""

    try:
        sender = get_sender(notification.type)
    except NotificationDeliveryError as e:
        notification.mark_failed(str(e))
        return False

    result = sender.send(notification)
    if result["success"]:
        notification.mark_sent()
        logger.info(f"Notification {notification.id} sent via {notification.type} to user {notification.user_id}")
        return True

    notification.mark_failed(result.get("error", "Unknown error"))
    logger.warning(f"Notification {notification.id} failed: {notification.error}")
    return False


def queue_notification(
    *,
    user: "CustomUser",
    message: str,
    subject: str = "",
    type: str = Notification.Type.EMAIL,
) -> Notification:
    """Stores a pending notification for the periodic processor."""

    return Notification.objects.create(
        user=user,
        type=type,
        subject=subject,
        message=message,
        status=Notification.Status.PENDING,
    )


def send_notification(
    *,
    user: "CustomUser",
    message: str,
    subject: str = "",
    type: str = Notification.Type.EMAIL,
    deliver: bool = True,
) -> Notification:
    """Creates a notification and, unless told otherwise, delivers it right away."""

    notification = queue_notification(user=user, message=message, subject=subject, type=type)
    if deliver:
        deliver_notification(notification)
    return notification


def process_pending_notifications(batch_size: int | None = None) -> dict[str, int]:
    """
    Delivers the oldest pending notifications.

    Rows are claimed with SKIP LOCKED where supported so concurrent workers
    never deliver the same notification twice.
    """
    if batch_size is None:
        batch_size = settings.HOTELHUB["NOTIFICATION_BATCH_SIZE"]

    with transaction.atomic():
        pending = Notification.objects.filter(status=Notification.Status.PENDING).order_by("created_at", "id")
        if transaction.get_connection().features.has_select_for_update_skip_locked:
            pending = pending.select_for_update(skip_locked=True)
        batch = list(pending[:batch_size])

        sent = failed = 0
        for notification in batch:
            if deliver_notification(notification):
                sent += 1
            else:
                failed += 1

    if batch:
        logger.info(f"Processed {len(batch)} pending notifications: {sent} sent, {failed} failed")
    return {"processed": len(batch), "sent": sent, "failed": failed}


def get_notification_stats() -> dict[str, int]:
    return Notification.objects.aggregate(
        total=Count("id"),
        pending=Count("id", filter=Q(status=Notification.Status.PENDING)),
        sent=Count("id", filter=Q(status=Notification.Status.SENT)),
        failed=Count("id", filter=Q(status=Notification.Status.FAILED)),
    )


def get_user_notifications(user: "CustomUser", limit: int | None = None):
    if limit is None:
        limit = settings.HOTELHUB["USER_NOTIFICATIONS_LIMIT"]
    return Notification.objects.filter(user=user).order_by("-created_at", "-id")[:limit]


def mark_all_read(user: "CustomUser") -> int:
    return Notification.objects.filter(user=user, is_read=False).update(is_read=True)
