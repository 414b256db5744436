import logging

from django.conf import settings
from django.http import JsonResponse

from .policies import AccessPolicy

logger = logging.getLogger("sportsreg.core")


class DashboardAccessMiddleware:
    """
    Gate every path under the dashboard prefix to admin-role sessions.

    Runs after AuthenticationMiddleware so ``request.user`` is resolved.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.prefix = getattr(settings, "DASHBOARD_PATH_PREFIX", "/dashboard")

    def __call__(self, request):
        if self._is_dashboard_path(request.path) and not self._allowed(request.user):
            logger.warning(f"Dashboard access denied for {request.user} on {request.path}")
            return JsonResponse(
                {"success": False, "statusCode": 403, "statusMessage": "Forbidden"},
                status=403,
            )
        return self.get_response(request)

    def _is_dashboard_path(self, path):
        return path == self.prefix or path.startswith(self.prefix + "/")

    @staticmethod
    def _allowed(user):
        return AccessPolicy.is_admin(user) and not getattr(user, "is_ban_active", False)
