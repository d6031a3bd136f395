"""Account serializers (API input/output and JWT claims)."""

from __future__ import annotations

from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from modules.accounts.models import User


class UserSerializer(serializers.ModelSerializer):
    """Read serializer; never exposes the password hash."""

    is_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "role",
            "is_active",
            "is_admin",
            "last_login",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CreateUserSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    name = serializers.CharField()
    role = serializers.CharField()
    is_active = serializers.BooleanField(required=False, default=True)


class StaffTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Adds the claims the shop-floor clients need to pick their view."""

    @classmethod
    def get_token(cls, user: User):
        token = super().get_token(user)
        token["email"] = user.email
        token["name"] = user.name
        token["role"] = user.role
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        data["user"] = UserSerializer(self.user).data
        return data
