"""User API views."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter, SearchFilter  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework.response import Response  # type: ignore

from .permissions import IsAdminRole, is_admin_user
from .serializers import UserAdminSerializer, UserSerializer

User = get_user_model()


class UserViewSet(viewsets.ModelViewSet):
    """User management.

    - list/create/destroy are for administrators only
    - retrieve/update are open to the user themselves
    - `me` returns the current user's profile
    """

    queryset = User.objects.all()
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ["role", "is_active"]
    search_fields = ["email", "first_name", "last_name", "username", "phone"]
    ordering_fields = ["created_at", "email"]

    def get_permissions(self):  # type: ignore
        if self.action in {"me", "retrieve", "partial_update", "update"}:
            return [permissions.IsAuthenticated()]
        return [IsAdminRole()]

    def get_serializer_class(self):  # type: ignore
        if is_admin_user(self.request.user):
            return UserAdminSerializer
        return UserSerializer

    def _is_self(self, request, pk) -> bool:
        return str(request.user.pk) == str(pk)

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        if not is_admin_user(request.user) and not self._is_self(request, kwargs.get("pk")):
            return Response(status=status.HTTP_403_FORBIDDEN)
        return super().retrieve(request, *args, **kwargs)

    def update(self, request, *args, **kwargs):  # type: ignore
        # Administrators may edit anyone, everybody else only themselves.
        if not is_admin_user(request.user) and not self._is_self(request, kwargs.get("pk")):
            return Response(status=status.HTTP_403_FORBIDDEN)
        return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        if self._is_self(request, kwargs.get("pk")):
            return Response(
                {"detail": "Administrators cannot delete their own account."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return super().destroy(request, *args, **kwargs)

    @action(detail=False, methods=["get"], permission_classes=[permissions.IsAuthenticated])
    def me(self, request):
        """Returns the current user's profile."""
        return Response(UserSerializer(request.user).data)
