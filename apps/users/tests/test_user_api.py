"""API tests for user management."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class UserAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.guest = User.objects.create_user(
            email="guest@example.com",
            password="GuestPass123",
            first_name="Alice",
        )
        self.other = User.objects.create_user(
            email="bob@example.com",
            password="GuestPass123",
            first_name="Bob",
            role=User.RoleChoices.STAFF,
        )
        self.list_url = reverse("user-list")

    def test_list_is_admin_only(self) -> None:
        self.client.force_authenticate(self.guest)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 3)

    def test_list_filters_by_role_and_search(self) -> None:
        self.client.force_authenticate(self.admin)

        by_role = self.client.get(self.list_url, {"role": User.RoleChoices.STAFF})
        by_search = self.client.get(self.list_url, {"search": "alice"})

        self.assertEqual([row["email"] for row in by_role.data["results"]], ["bob@example.com"])
        self.assertEqual([row["email"] for row in by_search.data["results"]], ["guest@example.com"])

    def test_admin_creates_user_with_password(self) -> None:
        self.client.force_authenticate(self.admin)
        payload = {"email": "new@example.com", "password": "secret1", "role": User.RoleChoices.STAFF}

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        created = User.objects.get(email="new@example.com")
        self.assertTrue(created.check_password("secret1"))
        self.assertTrue(created.is_front_desk())

        missing = self.client.post(self.list_url, {"email": "nopass@example.com"}, format="json")
        self.assertEqual(missing.status_code, status.HTTP_400_BAD_REQUEST)

    def test_user_updates_only_themselves(self) -> None:
        self.client.force_authenticate(self.guest)

        own = self.client.patch(
            reverse("user-detail", args=[self.guest.id]), {"last_name": "Smith"}, format="json"
        )
        foreign = self.client.patch(
            reverse("user-detail", args=[self.other.id]), {"last_name": "Smith"}, format="json"
        )

        self.assertEqual(own.status_code, status.HTTP_200_OK, own.data)
        self.assertEqual(foreign.status_code, status.HTTP_403_FORBIDDEN)
        self.guest.refresh_from_db()
        self.assertEqual(self.guest.last_name, "Smith")

    def test_guest_cannot_change_own_role(self) -> None:
        self.client.force_authenticate(self.guest)

        self.client.patch(reverse("user-detail", args=[self.guest.id]), {"role": "admin"}, format="json")

        self.guest.refresh_from_db()
        self.assertEqual(self.guest.role, User.RoleChoices.GUEST)

    def test_me_returns_current_user(self) -> None:
        self.client.force_authenticate(self.other)
        response = self.client.get(reverse("user-me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "bob@example.com")

    def test_admin_cannot_delete_self(self) -> None:
        self.client.force_authenticate(self.admin)

        own = self.client.delete(reverse("user-detail", args=[self.admin.id]))
        other = self.client.delete(reverse("user-detail", args=[self.other.id]))

        self.assertEqual(own.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(other.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=self.other.id).exists())
