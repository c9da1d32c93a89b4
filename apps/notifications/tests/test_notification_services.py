"""Tests for notification delivery and queue processing."""

from __future__ import annotations

from unittest import mock

import pytest
import requests
from django.core import mail

from apps.notifications.models import Notification
from apps.notifications.services import (
    get_notification_stats,
    get_user_notifications,
    process_pending_notifications,
    queue_notification,
    send_notification,
)
from apps.notifications.tasks import process_pending_notifications_task
from apps.users.models import User


@pytest.fixture
def user():
    return User.objects.create_user(email="guest@example.com", phone="+15550004444", password="GuestPass123")


@pytest.mark.django_db
def test_send_email_notification(user):
    notification = send_notification(user=user, subject="Welcome", message="Hello there")

    assert notification.status == Notification.Status.SENT
    assert notification.sent_at is not None
    assert len(mail.outbox) == 1
    assert mail.outbox[0].to == ["guest@example.com"]
    assert mail.outbox[0].body == "Hello there"


@pytest.mark.django_db
def test_send_without_delivery_stays_pending(user):
    notification = send_notification(user=user, message="Later", deliver=False)

    assert notification.status == Notification.Status.PENDING
    assert mail.outbox == []


@pytest.mark.django_db
def test_sms_without_gateway_fails(user):
    notification = send_notification(user=user, type=Notification.Type.SMS, message="Code 1234")

    notification.refresh_from_db()
    assert notification.status == Notification.Status.FAILED
    assert notification.error == "SMS gateway not configured"


@pytest.mark.django_db
def test_sms_is_posted_to_gateway(user, settings):
    settings.SMS_GATEWAY_URL = "https://sms.example.com/send"
    settings.SMS_GATEWAY_TOKEN = "secret"

    with mock.patch("apps.notifications.senders.requests.post") as post:
        post.return_value.status_code = 200
        notification = send_notification(user=user, type=Notification.Type.SMS, message="Code 1234")

    assert notification.status == Notification.Status.SENT
    post.assert_called_once()
    _, kwargs = post.call_args
    assert kwargs["json"] == {"to": "+15550004444", "message": "Code 1234"}
    assert kwargs["headers"] == {"Authorization": "Bearer secret"}


@pytest.mark.django_db
def test_sms_gateway_error_is_recorded(user, settings):
    settings.SMS_GATEWAY_URL = "https://sms.example.com/send"

    with mock.patch("apps.notifications.senders.requests.post", side_effect=requests.ConnectionError("refused")):
        notification = send_notification(user=user, type=Notification.Type.SMS, message="Code 1234")

    assert notification.status == Notification.Status.FAILED
    assert "refused" in notification.error


@pytest.mark.django_db
def test_process_pending_delivers_oldest_first_in_batches(user):
    first = queue_notification(user=user, subject="first", message="1")
    second = queue_notification(user=user, subject="second", message="2")
    third = queue_notification(user=user, subject="third", message="3")

    result = process_pending_notifications(batch_size=2)

    assert result == {"processed": 2, "sent": 2, "failed": 0}
    assert [message.subject for message in mail.outbox] == ["first", "second"]
    for notification in (first, second, third):
        notification.refresh_from_db()
    assert third.status == Notification.Status.PENDING

    # Rows handled by the first run are not picked up again
    assert process_pending_notifications(batch_size=2) == {"processed": 1, "sent": 1, "failed": 0}
    assert process_pending_notifications(batch_size=2) == {"processed": 0, "sent": 0, "failed": 0}


@pytest.mark.django_db
def test_process_pending_counts_failures(user):
    queue_notification(user=user, type=Notification.Type.SMS, message="no gateway")
    queue_notification(user=user, message="email works")

    assert process_pending_notifications_task() == {"processed": 2, "sent": 1, "failed": 1}


@pytest.mark.django_db
def test_stats_and_user_listing(user, settings):
    settings.HOTELHUB = {**settings.HOTELHUB, "USER_NOTIFICATIONS_LIMIT": 2}
    other = User.objects.create_user(email="other@example.com", password="OtherPass123")
    send_notification(user=user, message="sent")
    send_notification(user=user, type=Notification.Type.SMS, message="failed")
    latest = queue_notification(user=user, message="pending")
    queue_notification(user=other, message="someone else")

    assert get_notification_stats() == {"total": 4, "pending": 2, "sent": 1, "failed": 1}
    listed = list(get_user_notifications(user))
    assert len(listed) == 2
    assert listed[0] == latest
