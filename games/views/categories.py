from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import IsAdminRole, ReadOnlyOrAdmin
from core.utils import parse_id_param

from ..serializers import GameCategorySerializer, GameCategoryWriteSerializer
from ..services import categories as category_service


class GameCategoryListCreateView(APIView):
    """
    GET  /api/game_category?gameId=
    POST /api/game_category   admin only
    """
    permission_classes = [ReadOnlyOrAdmin]
    failure_messages = {"get": "獲取賽事分類失敗", "post": "新增賽事分類失敗"}

    def get(self, request):
        categories = category_service.list_categories(parse_id_param(request.query_params, "gameId"))
        return Response(GameCategorySerializer(categories, many=True).data)

    def post(self, request):
        serializer = GameCategoryWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = category_service.create_category(serializer.validated_data, request)
        return Response(GameCategorySerializer(category).data, status=status.HTTP_201_CREATED)


class GameCategoryDetailView(APIView):
    permission_classes = [IsAdminRole]
    failure_messages = {"put": "更新賽事分類失敗", "delete": "刪除賽事分類失敗"}

    def put(self, request, category_id):
        serializer = GameCategoryWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = category_service.update_category(category_id, serializer.validated_data, request)
        return Response(GameCategorySerializer(category).data)

    def delete(self, request, category_id):
        return Response(category_service.delete_category(category_id, request))
