"""Role based permission classes shared by all HotelHub apps."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def is_admin_user(user) -> bool:
    """Administrators by role, plus Django staff/superusers."""
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_superuser", False) or getattr(user, "is_staff", False):
        return True
    return hasattr(user, "is_admin") and user.is_admin()


def is_operations_user(user) -> bool:
    """Anyone allowed to run the front desk: staff role or admin."""
    if is_admin_user(user):
        return True
    return bool(user and user.is_authenticated and hasattr(user, "is_front_desk") and user.is_front_desk())


class IsAdminRole(permissions.BasePermission):
    """Only administrators may access the endpoint."""

    message = "Administrator access required."

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_admin_user(request.user)


class IsStaffOrAdmin(permissions.BasePermission):
    """Front desk staff and administrators."""

    message = "Staff access required."

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_operations_user(request.user)


class IsAdminOrReadOnly(permissions.BasePermission):
    """Anyone can read, only administrators can write."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_admin_user(request.user)


class IsOwnerOrOperations(permissions.BasePermission):
    """
    Object-level permission for records that belong to a guest.

    The view names the owner attribute with `owner_field` (default "user").
    """

    def has_object_permission(self, request, view, obj) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if is_operations_user(user):
            return True
        owner_field = getattr(view, "owner_field", "user")
        return getattr(obj, f"{owner_field}_id", None) == user.id
