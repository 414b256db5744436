# authx/authentication.py
# DRF authentication classes that refuse accounts under an active ban

import logging

from rest_framework.authentication import SessionAuthentication
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication

logger = logging.getLogger("sportsreg.users")

BANNED_MESSAGE = "帳號已被停權"


def ensure_not_banned(user):
    if getattr(user, "is_ban_active", False):
        logger.warning(f"Rejected request from banned user {user.pk}")
        raise AuthenticationFailed(BANNED_MESSAGE)


class ActiveUserJWTAuthentication(JWTAuthentication):
    def authenticate(self, request):
        result = super().authenticate(request)
        if result is not None:
            ensure_not_banned(result[0])
        return result


class ActiveUserSessionAuthentication(SessionAuthentication):
    def authenticate(self, request):
        result = super().authenticate(request)
        if result is not None:
            ensure_not_banned(result[0])
        return result
