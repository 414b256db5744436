# teams/services/user_players.py
"""
People a user registers as individual participants.

Banned players stay in the table but drop out of listings and cannot be
put on new registrations.
"""
import logging

from django.db.models import Count
from rest_framework.exceptions import NotFound

from core.exceptions import BusinessRuleViolation
from core.utils import parse_int

from ..models import UserPlayer

logger = logging.getLogger("sportsreg.teams")

PLAYER_FIELDS = ("name", "gender", "birthday", "is_banned", "ban_reason", "ban_until")
DEFAULT_LIMIT = 50


def list_user_players(user, params=None):
    params = params or {}
    limit = parse_int(params.get("limit"), DEFAULT_LIMIT, minimum=1)
    offset = parse_int(params.get("offset"), 0)
    qs = (
        UserPlayer.objects.filter(user=user, is_banned=False)
        .annotate(participation_count=Count("participations"))
        .order_by("-created_at", "-id")
    )
    return qs[offset:offset + limit]


def get_user_player(player_id, user):
    player = UserPlayer.objects.filter(pk=player_id, user=user).first()
    if player is None:
        raise NotFound("找不到隊員或無權限操作")
    return player


def create_user_player(data, user):
    player = UserPlayer.objects.create(
        user=user,
        name=data["name"],
        gender=data["gender"],
        birthday=data["birthday"],
    )
    logger.info(f"User player created: player={player.pk}, user={user.pk}")
    return player


def update_user_player(player_id, data, user):
    player = get_user_player(player_id, user)
    for key in PLAYER_FIELDS:
        if key in data:
            setattr(player, key, data[key])
    if not player.is_banned:
        player.ban_reason = None
        player.ban_until = None
    player.save()
    logger.info(f"User player updated: player={player.pk}")
    return player


def delete_user_player(player_id, user):
    player = get_user_player(player_id, user)
    if player.participations.exists():
        raise BusinessRuleViolation("此隊員已有報名紀錄，無法刪除")
    player.delete()
    logger.info(f"User player deleted: player={player_id}")
    return {"success": True}


def ban_user_player(player_id, user, ban_reason=None, ban_until=None):
    return update_user_player(
        player_id,
        {"is_banned": True, "ban_reason": ban_reason or None, "ban_until": ban_until},
        user,
    )


def unban_user_player(player_id, user):
    return update_user_player(player_id, {"is_banned": False}, user)
