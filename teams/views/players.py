from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import HasRole

from ..serializers import UserPlayerBanSerializer, UserPlayerSerializer
from ..services import user_players as player_service


class UserPlayerListCreateView(APIView):
    """
    GET  /api/user_player   own, non-banned players
    POST /api/user_player   {name, gender, birthday}
    """
    permission_classes = [HasRole]
    login_required_message = "請先登入"
    failure_messages = {"get": "獲取隊員失敗", "post": "建立隊員失敗"}

    def get(self, request):
        players = player_service.list_user_players(request.user, request.query_params)
        return Response(UserPlayerSerializer(players, many=True).data)

    def post(self, request):
        serializer = UserPlayerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        player = player_service.create_user_player(serializer.validated_data, request.user)
        return Response(UserPlayerSerializer(player).data, status=status.HTTP_201_CREATED)


class UserPlayerDetailView(APIView):
    permission_classes = [HasRole]
    login_required_message = "請先登入"
    failure_messages = {"put": "更新隊員失敗", "delete": "刪除隊員失敗"}

    def put(self, request, player_id):
        serializer = UserPlayerSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        player = player_service.update_user_player(player_id, serializer.validated_data, request.user)
        return Response(UserPlayerSerializer(player).data)

    def delete(self, request, player_id):
        return Response(player_service.delete_user_player(player_id, request.user))


class UserPlayerBanView(APIView):
    """POST /api/user_player/<id>/ban  {banReason?, banUntil?}"""
    permission_classes = [HasRole]
    failure_messages = {"post": "禁賽設定失敗"}

    def post(self, request, player_id):
        serializer = UserPlayerBanSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        player = player_service.ban_user_player(
            player_id,
            request.user,
            ban_reason=serializer.validated_data.get("banReason"),
            ban_until=serializer.validated_data.get("banUntil"),
        )
        return Response(UserPlayerSerializer(player).data)


class UserPlayerUnbanView(APIView):
    permission_classes = [HasRole]
    failure_messages = {"post": "解除禁賽失敗"}

    def post(self, request, player_id):
        player = player_service.unban_user_player(player_id, request.user)
        return Response(UserPlayerSerializer(player).data)
