# teams/services/team_members.py
import logging

from django.db import transaction
from rest_framework.exceptions import NotFound, PermissionDenied

from core.exceptions import BusinessRuleViolation
from core.policies import authorize

from ..models import Team, TeamMember
from .teams import get_owned_team

logger = logging.getLogger("sportsreg.teams")

MEMBER_FIELDS = (
    "name",
    "role",
    "gender",
    "birthday",
    "phone",
    "line_id",
    "email",
    "is_banned",
    "ban_reason",
    "ban_until",
)


def _clean(data):
    cleaned = {key: data[key] for key in MEMBER_FIELDS if key in data}
    # Empty optional strings are stored as NULL
    for key in ("phone", "line_id", "email", "ban_reason"):
        if key in cleaned and cleaned[key] == "":
            cleaned[key] = None
    return cleaned


def list_members(team_id, user):
    if not team_id:
        return TeamMember.objects.none()
    team = get_owned_team(team_id, user)
    if team is None:
        raise NotFound("找不到隊伍或無權限操作")
    return team.members.order_by("created_at", "id")


def create_member(data, user):
    team = Team.objects.filter(pk=data.get("team_id")).first()
    if team is None or team.user_id != user.pk:
        raise PermissionDenied("沒有權限操作此隊伍")

    member = TeamMember.objects.create(team=team, **_clean(data))
    logger.info(f"Team member created: member={member.pk}, team={team.pk}")
    return member


def batch_create_members(team_id, items, user):
    team = get_owned_team(team_id, user)
    if team is None:
        raise NotFound("找不到隊伍或無權限操作")

    with transaction.atomic():
        members = [TeamMember.objects.create(team=team, **_clean(item)) for item in items]

    logger.info(f"Team members batch created: team={team.pk}, count={len(members)}")
    return members


def _get_member(member_id):
    member = TeamMember.objects.select_related("team").filter(pk=member_id).first()
    if member is None:
        raise NotFound("成員不存在")
    return member


def update_member(member_id, data, user):
    member = _get_member(member_id)
    authorize(user, owner_id=member.team.user_id, message="沒有權限編輯此成員")

    for key, value in _clean(data).items():
        setattr(member, key, value)
    if member.is_banned is False:
        member.ban_reason = None
        member.ban_until = None
    member.save()

    logger.info(f"Team member updated: member={member.pk}")
    return member


def delete_member(member_id, user):
    member = _get_member(member_id)
    authorize(user, owner_id=member.team.user_id, message="沒有權限刪除此成員")

    if member.participations.exists():
        raise BusinessRuleViolation("此成員已有報名紀錄，無法刪除")

    member.delete()
    logger.info(f"Team member deleted: member={member_id}")
    return {"success": True, "message": "成員已成功刪除"}
