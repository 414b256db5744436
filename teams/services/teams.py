# teams/services/teams.py
import logging

from django.db import IntegrityError, transaction
from django.db.models import Count, Prefetch, Q
from rest_framework.exceptions import NotFound

from core.exceptions import BusinessRuleViolation
from core.policies import authorize
from core.utils import parse_int

from ..models import Team, TeamMember

logger = logging.getLogger("sportsreg.teams")

DUPLICATE_NAME = "隊伍名稱已存在"
DEFAULT_LIMIT = 50


def team_queryset():
    return (
        Team.objects.select_related("user")
        .prefetch_related(
            "staff",
            Prefetch("members", queryset=TeamMember.objects.order_by("created_at", "id")),
        )
        .annotate(
            member_count=Count("members", filter=Q(members__is_banned=False), distinct=True),
            staff_count=Count("staff", distinct=True),
            registration_count=Count("registrations", distinct=True),
        )
    )


def get_owned_team(team_id, user):
    """The caller's team or None; used where missing and foreign look alike."""
    try:
        return Team.objects.filter(pk=team_id, user=user).first()
    except (ValueError, TypeError):
        return None


def list_teams(user, params=None):
    params = params or {}
    limit = parse_int(params.get("limit"), DEFAULT_LIMIT, minimum=1)
    offset = parse_int(params.get("offset"), 0)
    return team_queryset().filter(user=user).order_by("-created_at", "-id")[offset:offset + limit]


def get_team(team_id, user):
    team = (
        team_queryset()
        .prefetch_related("registrations__game", "registrations__category")
        .filter(pk=team_id, user=user)
        .first()
    )
    if team is None:
        raise NotFound("隊伍不存在或無權限查看")
    return team


def _ensure_unique_name(name, exclude_id=None):
    qs = Team.objects.filter(name=name)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        raise BusinessRuleViolation(DUPLICATE_NAME)


def create_team(user, name):
    _ensure_unique_name(name)
    try:
        with transaction.atomic():
            team = Team.objects.create(user=user, name=name)
    except IntegrityError:
        # Lost a race with another request using the same name
        raise BusinessRuleViolation(DUPLICATE_NAME)

    logger.info(f"Team created: team={team.pk}, user={user.pk}")
    return team_queryset().get(pk=team.pk)


def update_team(team_id, user, name):
    team = Team.objects.filter(pk=team_id).first()
    if team is None:
        raise NotFound("隊伍不存在")
    authorize(user, owner_id=team.user_id, message="沒有權限編輯此隊伍")

    _ensure_unique_name(name, exclude_id=team.pk)
    team.name = name
    try:
        with transaction.atomic():
            team.save()
    except IntegrityError:
        raise BusinessRuleViolation(DUPLICATE_NAME)

    logger.info(f"Team updated: team={team.pk}, user={user.pk}")
    return team_queryset().get(pk=team.pk)


def delete_team(team_id, user):
    with transaction.atomic():
        team = get_owned_team(team_id, user)
        if team is None:
            raise NotFound("隊伍不存在或無權限")
        if team.registrations.exists():
            raise BusinessRuleViolation("隊伍已有報名紀錄，無法刪除")
        team.delete()

    logger.info(f"Team deleted: team={team_id}, user={user.pk}")
    return {"success": True}
