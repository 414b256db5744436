# games/services/games.py
"""
Game CRUD with the nested detail / categories / fees write.
"""
import logging

from django.db import transaction
from django.db.models import Count, Prefetch
from rest_framework.exceptions import NotFound

from core import constants
from core.exceptions import BusinessRuleViolation
from core.services import ActivityService

from ..models import Game, GameCategory, GameDetail, GameFee, Registration

logger = logging.getLogger("sportsreg.games")

GAME_NOT_FOUND = "賽事不存在"


def game_queryset():
    return Game.objects.annotate(
        registration_count=Count("registrations", distinct=True),
        category_count=Count("categories", distinct=True),
    )


def list_games(region=None):
    qs = game_queryset()
    if region:
        qs = qs.filter(region=region)
    return qs.order_by("-created_at", "-id")


def get_game(game_id):
    """Game with detail, categories (+fees), fees and registrations loaded."""
    registrations = Registration.objects.select_related("game", "category", "team").prefetch_related(
        "participants__team_member", "participants__user_player"
    )
    try:
        return (
            game_queryset()
            .select_related("detail")
            .prefetch_related(
                Prefetch("categories", queryset=GameCategory.objects.prefetch_related("fees")),
                "fees",
                Prefetch("registrations", queryset=registrations),
            )
            .get(pk=game_id)
        )
    except (Game.DoesNotExist, ValueError, TypeError):
        raise NotFound(GAME_NOT_FOUND)


def get_game_or_404(game_id, message=GAME_NOT_FOUND, lock=False):
    qs = Game.objects.select_for_update() if lock else Game.objects.all()
    try:
        return qs.get(pk=game_id)
    except (Game.DoesNotExist, ValueError, TypeError):
        raise NotFound(message)


def get_game_detail(game_id):
    get_game_or_404(game_id)
    return GameDetail.objects.filter(game_id=game_id).first()


def get_game_fees(game_id, category_id=None):
    get_game_or_404(game_id)
    qs = GameFee.objects.filter(game_id=game_id)
    if category_id is not None:
        qs = qs.filter(category_id=category_id)
    return qs.order_by("created_at", "id")


def _apply_fields(game, data):
    game.name = data["name"]
    game.region = data["region"]
    game.venue = data["venue"]
    game.address = data["address"]
    game.signup_start = data["signupStart"]
    game.signup_end = data["signupEnd"]
    game.game_start = data["gameStart"]
    game.game_end = data["gameEnd"]


def _write_detail(game, data):
    if "basis" not in data and "note" not in data:
        return
    detail, _ = GameDetail.objects.get_or_create(game=game)
    if "basis" in data:
        detail.basis = data["basis"]
    if "note" in data:
        detail.note = data["note"]
    detail.save()


def _write_categories_and_fees(game, data):
    """
    Categories are replaced when supplied; fees are replaced when supplied.
    Fee ``categoryIndex`` points into the categories created by this call.
    """
    created_categories = []
    if "categories" in data:
        GameFee.objects.filter(game=game, category__isnull=False).delete()
        game.categories.all().delete()
        for item in data["categories"]:
            created_categories.append(
                GameCategory.objects.create(
                    game=game,
                    category_name=item["categoryName"],
                    conditions=item.get("conditions"),
                )
            )

    if "fees" in data:
        game.fees.all().delete()
        for item in data["fees"]:
            index = item.get("categoryIndex")
            GameFee.objects.create(
                game=game,
                category=created_categories[index] if index is not None else None,
                fee_type=item["feeType"],
                description=item.get("description"),
                amount=item["amount"],
                is_required=item.get("isRequired", True),
                note=item.get("note"),
            )


def create_game(data, request):
    with transaction.atomic():
        game = Game()
        _apply_fields(game, data)
        game.save()
        _write_detail(game, data)
        _write_categories_and_fees(game, data)

        ActivityService.log_request(
            request,
            action=constants.ACTION_CREATE,
            entity=constants.ENTITY_GAME,
            entity_id=game.pk,
            description=f"建立賽事 {game.name}",
            metadata={"region": game.region},
        )

    logger.info(f"Game created: game={game.pk}, actor={request.user.pk}")
    return get_game(game.pk)


def update_game(game_id, data, request):
    with transaction.atomic():
        game = get_game_or_404(game_id, lock=True)

        if "categories" in data and game.registrations.exists():
            raise BusinessRuleViolation("已有隊伍報名，無法修改賽事分類")

        _apply_fields(game, data)
        game.save()
        _write_detail(game, data)
        _write_categories_and_fees(game, data)

        ActivityService.log_request(
            request,
            action=constants.ACTION_UPDATE,
            entity=constants.ENTITY_GAME,
            entity_id=game.pk,
            description=f"更新賽事 {game.name}",
        )

    logger.info(f"Game updated: game={game.pk}, actor={request.user.pk}")
    return get_game(game.pk)


def delete_game(game_id, request):
    with transaction.atomic():
        game = get_game_or_404(game_id, lock=True)

        if game.registrations.exists():
            logger.warning(f"Blocked delete of game {game.pk}: registrations exist")
            raise BusinessRuleViolation("已有隊伍報名，無法刪除賽事")

        name = game.name
        game.delete()

        ActivityService.log_request(
            request,
            action=constants.ACTION_DELETE,
            entity=constants.ENTITY_GAME,
            entity_id=game_id,
            description=f"刪除賽事 {name}",
        )

    logger.info(f"Game deleted: game={game_id}, actor={request.user.pk}")
    return {"success": True, "message": "賽事已成功刪除"}
