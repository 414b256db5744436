import json

from rest_framework import serializers

from .models import ActivityLog


class ActivityLogSerializer(serializers.ModelSerializer):
    entityId = serializers.CharField(source="entity_id", read_only=True)
    userId = serializers.IntegerField(source="user_id", read_only=True)
    userName = serializers.SerializerMethodField()
    ipAddress = serializers.CharField(source="ip_address", read_only=True)
    userAgent = serializers.CharField(source="user_agent", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    metadata = serializers.SerializerMethodField()

    class Meta:
        model = ActivityLog
        fields = [
            "id",
            "action",
            "entity",
            "entityId",
            "userId",
            "userName",
            "description",
            "metadata",
            "ipAddress",
            "userAgent",
            "createdAt",
        ]

    def get_userName(self, obj):
        return obj.user.display_name if obj.user else None

    def get_metadata(self, obj):
        if not obj.metadata:
            return None
        try:
            return json.loads(obj.metadata)
        except ValueError:
            return obj.metadata
