# users/services.py
"""
Admin user management and password self-service.
"""
import logging
from datetime import timedelta

from django.contrib.auth import get_user_model, update_session_auth_hash
from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from core import constants
from core.services import ActivityService
from core.utils import parse_int

logger = logging.getLogger("sportsreg.users")

User = get_user_model()

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

SEARCH_FIELDS = {
    "name": "name",
    "email": "email",
    "username": "username",
}

SORT_FIELDS = {
    "createdAt": "created_at",
    "name": "name",
    "email": "email",
    "username": "username",
    "role": "role",
}

ASSIGNABLE_ROLES = (User.ROLE_USER, User.ROLE_ADMIN)


def _get_user(user_id):
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise NotFound("User not found")


def summarize(user):
    return {"id": user.pk, "username": user.username, "email": user.email, "name": user.name, "role": user.role}


def list_users(params):
    limit = parse_int(params.get("limit"), DEFAULT_LIMIT, minimum=1, maximum=MAX_LIMIT)
    offset = parse_int(params.get("offset"), 0)

    qs = User.objects.all()

    search_value = (params.get("searchValue") or "").strip()
    if search_value:
        field = SEARCH_FIELDS.get(params.get("searchField") or "name", "name")
        # Name search also matches the username so accounts without a display name show up
        condition = Q(**{f"{field}__icontains": search_value})
        if field == "name":
            condition |= Q(username__icontains=search_value)
        qs = qs.filter(condition)

    sort_field = SORT_FIELDS.get(params.get("sortBy") or "createdAt", "created_at")
    if (params.get("sortDirection") or "desc").lower() == "desc":
        sort_field = f"-{sort_field}"

    total = qs.count()
    users = list(qs.order_by(sort_field, "-id")[offset:offset + limit])
    return {"users": users, "total": total, "limit": limit, "offset": offset}


def set_role(user_id, role, request):
    if role not in ASSIGNABLE_ROLES:
        raise ValidationError({"role": "Invalid role. Must be 'user' or 'admin'"})

    target = _get_user(user_id)
    if target.is_owner:
        raise PermissionDenied("Cannot modify owner role")

    previous = target.role
    target.role = role
    target.save()

    ActivityService.log_request(
        request,
        action=constants.ACTION_ROLE_CHANGE,
        entity=constants.ENTITY_USER,
        entity_id=target.pk,
        description=f"變更使用者 {target.username} 角色為 {role}",
        metadata={"from": previous, "to": role},
    )
    logger.info(f"User {target.pk} role changed {previous} -> {role} by {request.user.pk}")
    return target


def ban_user(user_id, request, reason=None, expires_in=None):
    target = _get_user(user_id)
    if target.is_owner:
        raise PermissionDenied("Cannot ban owner")
    if target.pk == request.user.pk:
        raise PermissionDenied("Cannot ban yourself")

    target.banned = True
    target.ban_reason = reason or None
    target.ban_expires = timezone.now() + timedelta(seconds=expires_in) if expires_in else None
    target.save()

    ActivityService.log_request(
        request,
        action=constants.ACTION_BAN,
        entity=constants.ENTITY_USER,
        entity_id=target.pk,
        description=f"停權使用者 {target.username}",
        metadata={"reason": reason, "expiresIn": expires_in},
    )
    logger.info(f"User {target.pk} banned by {request.user.pk}")
    return target


def unban_user(user_id, request):
    target = _get_user(user_id)
    target.banned = False
    target.ban_reason = None
    target.ban_expires = None
    target.save()

    ActivityService.log_request(
        request,
        action=constants.ACTION_UNBAN,
        entity=constants.ENTITY_USER,
        entity_id=target.pk,
        description=f"解除停權使用者 {target.username}",
    )
    logger.info(f"User {target.pk} unbanned by {request.user.pk}")
    return target


def delete_user(user_id, request):
    target = _get_user(user_id)
    if target.is_owner:
        raise PermissionDenied("Cannot delete owner")
    if target.pk == request.user.pk:
        raise PermissionDenied("Cannot delete yourself")

    deleted = summarize(target)
    with transaction.atomic():
        target.delete()
        ActivityService.log_request(
            request,
            action=constants.ACTION_DELETE,
            entity=constants.ENTITY_USER,
            entity_id=deleted["id"],
            description=f"刪除使用者 {deleted['username']}",
            metadata=deleted,
        )
    logger.info(f"User {deleted['id']} deleted by {request.user.pk}")
    return deleted


# ---------------------------------------------------------------------------
# Self-service
# ---------------------------------------------------------------------------

def has_credential(user):
    return user.has_usable_password()


def change_password(request, current_password, new_password):
    user = request.user
    if not user.has_usable_password():
        raise ValidationError({"currentPassword": "尚未設定密碼，請先設定密碼"})
    if not user.check_password(current_password):
        raise ValidationError({"currentPassword": "目前密碼不正確"})

    user.set_password(new_password)
    user.save(update_fields=["password"])
    # Keep the current session alive after the hash changes
    update_session_auth_hash(request, user)
    logger.info(f"User {user.pk} changed password")


def set_password(request, new_password):
    user = request.user
    if user.has_usable_password():
        raise ValidationError({"newPassword": "已設定密碼，請使用變更密碼"})

    user.set_password(new_password)
    user.save(update_fields=["password"])
    update_session_auth_hash(request, user)
    logger.info(f"User {user.pk} set a password")
