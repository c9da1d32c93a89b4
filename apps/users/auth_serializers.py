"""Serializers for authentication flows (register, login, logout)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore
from rest_framework_simplejwt.exceptions import TokenError  # type: ignore
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .models import PHONE_VALIDATOR


User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)
    password_confirm = serializers.CharField(write_only=True)
    name = serializers.CharField(required=False, allow_blank=True, write_only=True)
    first_name = serializers.CharField(required=False, allow_blank=True)
    last_name = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs.get("password") != attrs.pop("password_confirm"):
            raise serializers.ValidationError({"password_confirm": "Passwords do not match."})

        email = attrs.get("email")
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError({"email": "A user with this email already exists."})

        phone = attrs.get("phone")
        if phone:
            phone = User.objects.normalize_phone(phone)
            if User.objects.filter(phone=phone).exists():
                raise serializers.ValidationError({"phone": "A user with this phone already exists."})
            attrs["phone"] = phone

        # The mobile client sends a single "name" field
        name = attrs.pop("name", "").strip()
        if name and not attrs.get("first_name"):
            first, _, last = name.partition(" ")
            attrs["first_name"] = first
            attrs.setdefault("last_name", last)
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    login = serializers.CharField(required=False)
    email = serializers.EmailField(required=False)
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        login = attrs.get("login") or attrs.get("email") or ""
        password = attrs.get("password", "")
        if not login:
            raise serializers.ValidationError({"login": "Email or phone is required."})

        try:
            if "@" in login:
                user = User.objects.get(email__iexact=login)
            else:
                user = User.objects.get(phone=User.objects.normalize_phone(login))
        except User.DoesNotExist:
            raise serializers.ValidationError({"login": "Invalid credentials."})

        if user.is_locked:
            raise serializers.ValidationError(
                {"non_field_errors": ["Account is temporarily locked. Try again later."]}
            )

        if not user.check_password(password):
            user.register_failed_attempt()
            raise serializers.ValidationError({"login": "Invalid credentials."})

        if not user.is_active:
            raise serializers.ValidationError({"login": "Account is disabled."})

        if user.failed_login_attempts or user.locked_until:
            user.unlock()

        attrs["user"] = user
        return attrs


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()

    def validate_refresh(self, value: str) -> str:
        try:
            self.token = RefreshToken(value)
        except TokenError:
            raise serializers.ValidationError("Token is invalid or expired.")
        return value

    def save(self, **kwargs):  # type: ignore
        try:
            self.token.blacklist()
        except TokenError:
            raise serializers.ValidationError({"refresh": "Token is invalid or expired."})
