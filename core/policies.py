# core/policies.py
"""
Centralized authorization policy.

Every guarded handler goes through ``authorize`` (directly, or through the
``HasRole`` permission class), so the session, role and ownership checks
live in one place instead of being repeated per route.
"""
from typing import Iterable, Optional, Tuple

from rest_framework.exceptions import NotAuthenticated, PermissionDenied

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLE_OWNER = "owner"

ADMIN_ROLES = (ROLE_ADMIN, ROLE_OWNER)

NOT_AUTHENTICATED_MESSAGE = "未授權"
FORBIDDEN_MESSAGE = "權限不足"


class AccessPolicy:
    """
    Pure checks. All methods return bool or (bool, str) with reason.
    """

    @staticmethod
    def is_authenticated(user) -> bool:
        return bool(user and user.is_authenticated)

    @staticmethod
    def has_role(user, roles: Optional[Iterable[str]]) -> bool:
        if not roles:
            return True
        return getattr(user, "role", None) in tuple(roles)

    @staticmethod
    def is_admin(user) -> bool:
        return AccessPolicy.is_authenticated(user) and AccessPolicy.has_role(user, ADMIN_ROLES)

    @staticmethod
    def check(user, roles=None, owner_id=None) -> Tuple[bool, Optional[str]]:
        if not AccessPolicy.is_authenticated(user):
            return False, NOT_AUTHENTICATED_MESSAGE
        if not AccessPolicy.has_role(user, roles):
            return False, FORBIDDEN_MESSAGE
        if owner_id is not None and owner_id != user.pk:
            return False, FORBIDDEN_MESSAGE
        return True, None


def authorize(user, roles=None, owner_id=None, message=None, login_message=None):
    """
    Raise unless ``user`` holds a session, one of ``roles`` (when given)
    and owns the resource (when ``owner_id`` is given).

    Returns the user so callers can write ``user = authorize(request.user)``.
    """
    allowed, reason = AccessPolicy.check(user, roles=roles, owner_id=owner_id)
    if allowed:
        return user
    if reason == NOT_AUTHENTICATED_MESSAGE:
        raise NotAuthenticated(login_message or NOT_AUTHENTICATED_MESSAGE)
    raise PermissionDenied(message or reason)
