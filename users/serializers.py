from rest_framework import serializers

from .models import User

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


class AdminUserSerializer(serializers.ModelSerializer):
    banReason = serializers.CharField(source='ban_reason', read_only=True)
    banExpires = serializers.DateTimeField(source='ban_expires', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'name',
            'role',
            'banned',
            'banReason',
            'banExpires',
            'createdAt',
            'updatedAt',
        ]


class RoleSerializer(serializers.Serializer):
    role = serializers.CharField()


class BanSerializer(serializers.Serializer):
    banReason = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    banExpiresIn = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class ChangePasswordSerializer(serializers.Serializer):
    currentPassword = serializers.CharField()
    newPassword = serializers.CharField(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    revokeOtherSessions = serializers.BooleanField(required=False, default=False)


class SetPasswordSerializer(serializers.Serializer):
    newPassword = serializers.CharField(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
