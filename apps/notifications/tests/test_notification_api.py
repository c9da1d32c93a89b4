"""API tests for the notification inbox and admin tooling."""

from __future__ import annotations

from django.conf import settings
from django.core import mail
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.notifications.models import Notification
from apps.notifications.services import queue_notification
from apps.users.models import User


class NotificationAPITests(APITestCase):
    def setUp(self) -> None:
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.other = User.objects.create_user(email="other@example.com", password="GuestPass123")
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.first = queue_notification(user=self.guest, subject="First", message="one")
        self.second = queue_notification(user=self.guest, subject="Second", message="two")
        self.foreign = queue_notification(user=self.other, subject="Foreign", message="three")
        self.client.force_authenticate(self.guest)
        self.list_url = reverse("notification-list")

    def test_list_is_scoped_and_newest_first(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["subject"] for row in response.data["results"]], ["Second", "First"])

    def test_recent_is_capped_and_scoped(self) -> None:
        with self.settings(HOTELHUB={**settings.HOTELHUB, "USER_NOTIFICATIONS_LIMIT": 1}):
            response = self.client.get(reverse("notification-recent"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["subject"] for row in response.data], ["Second"])

    def test_mark_read(self) -> None:
        response = self.client.post(reverse("notification-mark-read", args=[self.first.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.first.refresh_from_db()
        self.assertTrue(self.first.is_read)

        foreign = self.client.post(reverse("notification-mark-read", args=[self.foreign.id]))
        self.assertEqual(foreign.status_code, status.HTTP_404_NOT_FOUND)

        unread = self.client.get(self.list_url, {"is_read": "false"})
        self.assertEqual([row["subject"] for row in unread.data["results"]], ["Second"])

    def test_mark_all_read(self) -> None:
        response = self.client.post(reverse("notification-mark-all-read"))

        self.assertEqual(response.data, {"updated": 2})
        self.assertFalse(Notification.objects.filter(user=self.guest, is_read=False).exists())
        self.foreign.refresh_from_db()
        self.assertFalse(self.foreign.is_read)

    def test_admin_tools_are_restricted(self) -> None:
        for name in ("notification-stats",):
            self.assertEqual(self.client.get(reverse(name)).status_code, status.HTTP_403_FORBIDDEN)
        for name in ("notification-send", "notification-process"):
            self.assertEqual(self.client.post(reverse(name)).status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_sends_notification(self) -> None:
        self.client.force_authenticate(self.admin)
        payload = {"user": self.other.id, "type": "email", "subject": "Hello", "message": "Welcome aboard"}

        response = self.client.post(reverse("notification-send"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], Notification.Status.SENT)
        self.assertEqual(mail.outbox[-1].subject, "Hello")

    def test_admin_processes_queue_and_reads_stats(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(reverse("notification-process"), {"batch_size": 2}, format="json")
        self.assertEqual(response.data, {"processed": 2, "sent": 2, "failed": 0})

        stats = self.client.get(reverse("notification-stats"))
        self.assertEqual(stats.data, {"total": 3, "pending": 1, "sent": 2, "failed": 0})
