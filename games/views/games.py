import csv

from django.http import HttpResponse
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import IsAdminRole, ReadOnlyOrAdmin
from core.utils import parse_id_param

from ..regions import get_region_options
from ..serializers import (
    GameDetailSerializer,
    GameFeeSerializer,
    GameFullSerializer,
    GameSerializer,
    GameWriteSerializer,
)
from ..services import games as game_service
from ..services import registrations as registration_service


class GameListCreateView(APIView):
    """
    GET  /api/games          ?region=  ?id=  (id returns one game with nested data)
    POST /api/games          admin only
    """
    permission_classes = [ReadOnlyOrAdmin]
    failure_messages = {"get": "獲取賽事清單失敗", "post": "建立賽事失敗"}

    def get(self, request):
        game_id = request.query_params.get("id")
        if game_id:
            return Response(GameFullSerializer(game_service.get_game(game_id)).data)

        games = game_service.list_games(region=request.query_params.get("region"))
        return Response(GameSerializer(games, many=True).data)

    def post(self, request):
        serializer = GameWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        game = game_service.create_game(serializer.validated_data, request)
        return Response(GameFullSerializer(game).data, status=status.HTTP_201_CREATED)


class GameDetailView(APIView):
    """
    GET    /api/games/<id>
    PUT    /api/games/<id>   admin only, full replace
    DELETE /api/games/<id>   admin only, blocked once anyone registered
    """
    permission_classes = [ReadOnlyOrAdmin]
    failure_messages = {"get": "獲取賽事失敗", "put": "更新賽事失敗", "delete": "刪除賽事失敗"}

    def get(self, request, game_id):
        return Response(GameFullSerializer(game_service.get_game(game_id)).data)

    def put(self, request, game_id):
        serializer = GameWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        game = game_service.update_game(game_id, serializer.validated_data, request)
        return Response(GameFullSerializer(game).data)

    def delete(self, request, game_id):
        return Response(game_service.delete_game(game_id, request))


class GameFeeListView(APIView):
    """GET /api/game_fee?gameId=&categoryId="""
    permission_classes = [AllowAny]
    failure_messages = {"get": "獲取費用資料失敗"}

    def get(self, request):
        game_id = parse_id_param(request.query_params, "gameId")
        if game_id is None:
            raise ValidationError({"gameId": "缺少賽事 ID"})
        category_id = parse_id_param(request.query_params, "categoryId")
        fees = game_service.get_game_fees(game_id, category_id)
        return Response(GameFeeSerializer(fees, many=True).data)


class GameDetailInfoView(APIView):
    """GET /api/game_detail?gameId="""
    permission_classes = [AllowAny]
    failure_messages = {"get": "獲取賽事詳情失敗"}

    def get(self, request):
        game_id = parse_id_param(request.query_params, "gameId")
        if game_id is None:
            raise ValidationError({"gameId": "缺少賽事 ID"})
        detail = game_service.get_game_detail(game_id)
        return Response(GameDetailSerializer(detail).data if detail else {})


class RegionListView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return Response(get_region_options())


class GameRegistrationExportView(APIView):
    """
    GET /api/games/<id>/registrations/export
    CSV of every participant on every registration of the game.
    """
    permission_classes = [IsAdminRole]

    def get(self, request, game_id):
        game = game_service.get_game_or_404(game_id)
        registrations = registration_service.list_game_registrations(game.pk)

        response = HttpResponse(content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="game_{game.pk}_registrations.csv"'

        writer = csv.writer(response)
        writer.writerow(["Registration ID", "Category", "Team", "Status", "Participant", "Gender", "Birthday", "Main Player", "Submitted At"])
        for registration in registrations:
            for participant in registration.participants.all():
                person = participant.person
                writer.writerow([
                    registration.pk,
                    registration.category.category_name,
                    registration.team.name if registration.team_id else "",
                    registration.status,
                    person.name,
                    person.gender,
                    person.birthday.isoformat(),
                    "Y" if participant.is_main_player else "",
                    registration.submitted_at.isoformat(),
                ])
        return response
