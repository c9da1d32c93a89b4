"""API views for notifications."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdminRole

from .models import Notification
from .serializers import NotificationSendSerializer, NotificationSerializer, ProcessPendingSerializer
from .services import (
    get_notification_stats,
    get_user_notifications,
    mark_all_read,
    process_pending_notifications,
    send_notification,
)


class NotificationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """The authenticated user's notifications, newest first, plus admin tooling."""

    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]
    filterset_fields = ['is_read', 'type', 'status']

    def get_queryset(self):  # type: ignore
        return Notification.objects.filter(user=self.request.user).order_by('-created_at', '-id')

    @action(detail=True, methods=['post'], url_path='mark-read')
    def mark_read(self, request, pk=None):  # type: ignore
        notification = self.get_object()
        notification.mark_read()
        return Response({'status': 'read'}, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'])
    def recent(self, request):  # type: ignore
        """Latest notifications for the app's bell menu, without pagination."""
        notifications = get_user_notifications(request.user)
        return Response(NotificationSerializer(notifications, many=True).data)

    @action(detail=False, methods=['post'], url_path='mark-all-read')
    def mark_all_read(self, request):  # type: ignore
        updated = mark_all_read(request.user)
        return Response({'updated': updated}, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], permission_classes=[permissions.IsAuthenticated, IsAdminRole])
    def send(self, request):  # type: ignore
        serializer = NotificationSendSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        notification = send_notification(**serializer.validated_data)
        return Response(NotificationSerializer(notification).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'], permission_classes=[permissions.IsAuthenticated, IsAdminRole])
    def stats(self, request):  # type: ignore
        return Response(get_notification_stats())

    @action(detail=False, methods=['post'], permission_classes=[permissions.IsAuthenticated, IsAdminRole])
    def process(self, request):  # type: ignore
        serializer = ProcessPendingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = process_pending_notifications(batch_size=serializer.validated_data.get('batch_size'))
        return Response(result, status=status.HTTP_200_OK)
