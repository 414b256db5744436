import time

from django.conf import settings
from django.db import connections
from django.db.utils import OperationalError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .permissions import IsAdminRole
from .serializers import ActivityLogSerializer
from .services import ActivityService


class ActivityLogListView(APIView):
    """
    GET /api/activity_log
    Admin-only reader with action/entity/userId/startDate/endDate filters.
    """
    permission_classes = [IsAdminRole]
    failure_messages = {"get": "獲取活動記錄失敗"}

    def get(self, request):
        filters = request.query_params
        logs, limit, offset = ActivityService.get_activity_logs(filters)
        total = ActivityService.get_activity_logs_count(filters)
        return Response(
            {
                "data": ActivityLogSerializer(logs, many=True).data,
                "total": total,
                "limit": limit,
                "offset": offset,
            }
        )


class HealthCheckView(APIView):
    """
    Lightweight health endpoint for uptime checks.
    - Checks DB connectivity
    - Returns env and simple latency
    """
    permission_classes = [AllowAny]
    authentication_classes = []  # public endpoint

    def get(self, request, *args, **kwargs):
        start = time.time()

        db_ok = True
        try:
            connections["default"].cursor()
        except OperationalError:
            db_ok = False

        duration_ms = int((time.time() - start) * 1000)

        return Response(
            {
                "status": "ok" if db_ok else "degraded",
                "db": db_ok,
                "env": getattr(settings, "ENV", "unknown"),
                "latency_ms": duration_ms,
            },
            status=200 if db_ok else 503,
        )
