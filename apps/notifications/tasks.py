"""Celery tasks for notification delivery."""

from __future__ import annotations

from celery import shared_task  # type: ignore

from .services import process_pending_notifications


@shared_task(name="notifications.process_pending_notifications")
def process_pending_notifications_task(batch_size: int | None = None) -> dict[str, int]:
    """Delivers the next batch of pending notifications. Runs every 30 seconds."""
    return process_pending_notifications(batch_size=batch_size)
