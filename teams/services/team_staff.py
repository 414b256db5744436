# teams/services/team_staff.py
import logging

from rest_framework.exceptions import NotFound

from core.utils import parse_id_param, parse_int

from ..models import TeamStaff
from .teams import get_owned_team

logger = logging.getLogger("sportsreg.teams")

STAFF_FIELDS = ("role", "name", "phone", "email", "address", "line_id")
DEFAULT_LIMIT = 50


def list_staff(user, params=None):
    """Only staff of teams the caller owns."""
    params = params or {}
    qs = TeamStaff.objects.select_related("team").filter(team__user=user)
    team_id = parse_id_param(params, "teamId")
    if team_id is not None:
        qs = qs.filter(team_id=team_id)
    if params.get("role"):
        qs = qs.filter(role=params["role"])

    limit = parse_int(params.get("limit"), DEFAULT_LIMIT, minimum=1)
    offset = parse_int(params.get("offset"), 0)
    return qs.order_by("-created_at", "-id")[offset:offset + limit]


def _get_owned_staff(staff_id, user):
    staff = TeamStaff.objects.select_related("team").filter(pk=staff_id, team__user=user).first()
    if staff is None:
        raise NotFound("找不到隊職員或無權限操作")
    return staff


def create_staff(data, user):
    team = get_owned_team(data.get("team_id"), user)
    if team is None:
        raise NotFound("找不到隊伍或無權限操作")

    staff = TeamStaff.objects.create(team=team, **{key: data[key] for key in STAFF_FIELDS if key in data})
    logger.info(f"Team staff created: staff={staff.pk}, team={team.pk}")
    return staff


def update_staff(staff_id, data, user):
    staff = _get_owned_staff(staff_id, user)
    for key in STAFF_FIELDS:
        if key in data:
            setattr(staff, key, data[key])
    staff.save()
    logger.info(f"Team staff updated: staff={staff.pk}")
    return staff


def delete_staff(staff_id, user):
    staff = _get_owned_staff(staff_id, user)
    staff.delete()
    logger.info(f"Team staff deleted: staff={staff_id}")
    return {"success": True}
