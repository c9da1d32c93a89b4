"""Serializers for notifications."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import Notification

User = get_user_model()


class NotificationSerializer(serializers.ModelSerializer):
    """Serializer for notifications."""

    class Meta:
        model = Notification
        fields = [
            'id', 'user', 'type', 'subject', 'message', 'status',
            'is_read', 'sent_at', 'error', 'created_at',
        ]
        read_only_fields = fields


class NotificationSendSerializer(serializers.Serializer):
    """Admin request to message a user."""

    user = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    type = serializers.ChoiceField(choices=Notification.Type.choices, default=Notification.Type.EMAIL)
    subject = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    message = serializers.CharField()
    deliver = serializers.BooleanField(default=True)


class ProcessPendingSerializer(serializers.Serializer):
    batch_size = serializers.IntegerField(min_value=1, max_value=500, required=False)
