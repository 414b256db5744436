# games/services/registrations.py
"""
Signup, admin review and resubmission of registrations.

Every write runs in one transaction. Signup locks the game row before the
duplicate check so concurrent signups for the same game serialize on it.
"""
import logging

from django.db import transaction
from rest_framework.exceptions import NotFound

from core import constants
from core.exceptions import BusinessRuleViolation
from core.services import ActivityService
from core.utils import parse_id_param
from teams.models import Team, TeamMember, UserPlayer

from ..datetime_utils import is_signup_closed, is_signup_not_started, now
from ..models import GameCategory, Registration, RegistrationParticipant
from ..serializers import INCOMPLETE_PARTICIPANT_MESSAGE
from ..state_machine import apply_review, is_editable_by_registrant, transition
from .games import get_game_or_404

logger = logging.getLogger("sportsreg.games")

REGISTRATION_NOT_FOUND = "找不到此報名記錄"
UNAVAILABLE_PARTICIPANTS = "部分隊員不存在或已被禁賽"
FOREIGN_TEAM_MEMBERS = "部分隊伍成員不存在或不屬於此隊伍"


def registration_queryset():
    return Registration.objects.select_related("game", "category", "team", "registrant").prefetch_related(
        "participants__team_member", "participants__user_player"
    )


def get_registration(registration_id):
    return registration_queryset().get(pk=registration_id)


def list_game_registrations(game_id):
    game = get_game_or_404(game_id)
    return registration_queryset().filter(game=game).order_by("-created_at", "-id")


def list_user_registrations(user, params=None):
    params = params or {}
    qs = registration_queryset().filter(registrant=user)
    game_id = parse_id_param(params, "gameId")
    if game_id is not None:
        qs = qs.filter(game_id=game_id)
    if params.get("status"):
        qs = qs.filter(status=params["status"])
    return qs.order_by("-created_at", "-id")


def resolve_participants(items, user, team=None, unavailable_message=UNAVAILABLE_PARTICIPANTS):
    """
    Turn participant payloads into (person, is_main) pairs.

    User players must belong to ``user``; team members must belong to
    ``team``. Banned people are treated as unavailable. When nobody is
    flagged main, the first participant is.
    """
    player_ids = [item["userPlayerId"] for item in items if item.get("userPlayerId") is not None]
    member_ids = [item["teamMemberId"] for item in items if item.get("teamMemberId") is not None]

    if len(set(player_ids)) != len(player_ids) or len(set(member_ids)) != len(member_ids):
        raise BusinessRuleViolation("參賽者重複")

    if member_ids and team is None:
        raise BusinessRuleViolation(INCOMPLETE_PARTICIPANT_MESSAGE)

    players = {
        player.pk: player
        for player in UserPlayer.objects.filter(pk__in=player_ids, user=user)
        if not player.is_ban_active
    }
    members = {
        member.pk: member
        for member in TeamMember.objects.filter(pk__in=member_ids, team=team)
        if not member.is_ban_active
    } if member_ids else {}

    if len(players) != len(player_ids) or len(members) != len(member_ids):
        logger.warning(f"Participant check failed for user {user.pk}: players={player_ids}, members={member_ids}")
        raise BusinessRuleViolation(unavailable_message)

    resolved = []
    for item in items:
        if item.get("userPlayerId") is not None:
            person = players[item["userPlayerId"]]
        else:
            person = members[item["teamMemberId"]]
        resolved.append((person, bool(item.get("isMainPlayer"))))

    if resolved and not any(is_main for _, is_main in resolved):
        person, _ = resolved[0]
        resolved[0] = (person, True)
    return resolved


def _create_participants(registration, resolved):
    RegistrationParticipant.objects.bulk_create(
        [
            RegistrationParticipant(
                registration=registration,
                team_member=person if isinstance(person, TeamMember) else None,
                user_player=person if isinstance(person, UserPlayer) else None,
                is_main_player=is_main,
            )
            for person, is_main in resolved
        ]
    )


def signup(game_id, data, request):
    user = request.user

    with transaction.atomic():
        game = get_game_or_404(game_id, message="找不到此比賽", lock=True)

        category = GameCategory.objects.filter(pk=data["categoryId"], game=game).first()
        if category is None:
            raise NotFound("找不到此比賽類別")

        current = now()
        if is_signup_not_started(game, current):
            raise BusinessRuleViolation("報名尚未開始")
        if is_signup_closed(game, current):
            raise BusinessRuleViolation("報名已截止")

        team = None
        if data.get("teamId") is not None:
            team = Team.objects.filter(pk=data["teamId"], user=user).first()
            if team is None:
                raise NotFound("找不到隊伍或無權限操作")
            # Check-then-insert; serialized by the game row lock above
            if Registration.objects.filter(game=game, category=category, team=team).exists():
                logger.warning(f"Duplicate signup: team={team.pk}, game={game.pk}, category={category.pk}")
                raise BusinessRuleViolation("此隊伍已經報名此類別")

        resolved = resolve_participants(data["participants"], user, team)

        registration = Registration.objects.create(
            game=game,
            category=category,
            team=team,
            registrant=user,
            status=Registration.STATUS_PENDING,
            note=data.get("note"),
            submitted_at=current,
        )
        _create_participants(registration, resolved)

        ActivityService.log_request(
            request,
            action=constants.ACTION_SIGNUP,
            entity=constants.ENTITY_REGISTRATION,
            entity_id=registration.pk,
            description=f"報名賽事 {game.name} - {category.category_name}",
            metadata={"gameId": game.pk, "categoryId": category.pk, "teamId": team.pk if team else None},
        )

    logger.info(
        f"Registration created: registration={registration.pk}, game={game.pk}, "
        f"user={user.pk}, participants={len(resolved)}"
    )
    return get_registration(registration.pk)


def review(registration_id, new_status, request):
    with transaction.atomic():
        registration = Registration.objects.select_for_update().filter(pk=registration_id).first()
        if registration is None:
            raise NotFound(REGISTRATION_NOT_FOUND)

        previous = apply_review(registration, new_status, request.user, now())
        registration.save(update_fields=["status", "reviewed_at", "reviewed_by", "updated_at"])

        action = constants.ACTION_APPROVE if new_status == Registration.STATUS_APPROVED else constants.ACTION_REJECT
        ActivityService.log_request(
            request,
            action=action,
            entity=constants.ENTITY_REGISTRATION,
            entity_id=registration.pk,
            description=f"審核報名 #{registration.pk}: {previous} -> {new_status}",
            metadata={"from": previous, "to": new_status},
        )

    return get_registration(registration.pk)


def resubmit(registration_id, data, request):
    user = request.user

    with transaction.atomic():
        # Other users' registrations look missing
        registration = (
            Registration.objects.select_for_update(of=("self",))
            .select_related("game", "team")
            .filter(pk=registration_id, registrant=user)
            .first()
        )
        if registration is None:
            raise NotFound(REGISTRATION_NOT_FOUND)

        if not is_editable_by_registrant(registration):
            raise BusinessRuleViolation("已確認的報名無法修改")
        if is_signup_closed(registration.game):
            raise BusinessRuleViolation("報名時間已截止")

        message = FOREIGN_TEAM_MEMBERS if registration.team_id else UNAVAILABLE_PARTICIPANTS
        resolved = resolve_participants(data["participants"], user, registration.team, unavailable_message=message)

        registration.participants.all().delete()
        _create_participants(registration, resolved)

        if registration.status == Registration.STATUS_REJECTED:
            transition(registration, Registration.STATUS_PENDING, actor=user)
        registration.reviewed_at = None
        registration.reviewed_by = None
        registration.submitted_at = now()
        if "note" in data:
            registration.note = data["note"]
        registration.save()

        ActivityService.log_request(
            request,
            action=constants.ACTION_RESUBMIT,
            entity=constants.ENTITY_REGISTRATION,
            entity_id=registration.pk,
            description=f"重新送出報名 #{registration.pk}",
            metadata={"participants": len(resolved)},
        )

    logger.info(f"Registration resubmitted: registration={registration.pk}, user={user.pk}")
    return get_registration(registration.pk)
