# games/services/categories.py
import logging

from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from core import constants
from core.exceptions import BusinessRuleViolation
from core.services import ActivityService

from ..models import GameCategory
from .games import get_game_or_404

logger = logging.getLogger("sportsreg.games")

CATEGORY_NOT_FOUND = "找不到此比賽類別"


def list_categories(game_id=None):
    qs = GameCategory.objects.select_related("game")
    if game_id is not None:
        qs = qs.filter(game_id=game_id)
    return qs.order_by("created_at", "id")


def get_category_or_404(category_id):
    try:
        return GameCategory.objects.get(pk=category_id)
    except (GameCategory.DoesNotExist, ValueError, TypeError):
        raise NotFound(CATEGORY_NOT_FOUND)


def create_category(data, request):
    if not data.get("gameId"):
        raise ValidationError({"gameId": "賽事 ID 為必填欄位"})

    game = get_game_or_404(data["gameId"])
    category = GameCategory.objects.create(
        game=game,
        category_name=data["categoryName"],
        conditions=data.get("conditions"),
    )
    ActivityService.log_request(
        request,
        action=constants.ACTION_CREATE,
        entity=constants.ENTITY_GAME_CATEGORY,
        entity_id=category.pk,
        description=f"新增賽事分類 {category.category_name}",
        metadata={"gameId": game.pk},
    )
    logger.info(f"Category created: category={category.pk}, game={game.pk}")
    return category


def update_category(category_id, data, request):
    category = get_category_or_404(category_id)
    category.category_name = data["categoryName"]
    if "conditions" in data:
        category.conditions = data["conditions"]
    category.save()

    ActivityService.log_request(
        request,
        action=constants.ACTION_UPDATE,
        entity=constants.ENTITY_GAME_CATEGORY,
        entity_id=category.pk,
        description=f"更新賽事分類 {category.category_name}",
    )
    return category


def delete_category(category_id, request):
    with transaction.atomic():
        category = get_category_or_404(category_id)
        if category.registrations.exists():
            raise BusinessRuleViolation("此分類已有報名，無法刪除")

        name = category.category_name
        category.delete()

        ActivityService.log_request(
            request,
            action=constants.ACTION_DELETE,
            entity=constants.ENTITY_GAME_CATEGORY,
            entity_id=category_id,
            description=f"刪除賽事分類 {name}",
        )
    logger.info(f"Category deleted: category={category_id}")
    return {"success": True}
