from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import HasRole

from ..serializers import TeamDetailSerializer, TeamSerializer, TeamWriteSerializer
from ..services import teams as team_service


class TeamListCreateView(APIView):
    """
    GET  /api/team   the caller's teams, newest first
    POST /api/team   {name}
    """
    permission_classes = [HasRole]
    login_required_message = "請先登入"
    failure_messages = {"get": "獲取隊伍失敗", "post": "建立隊伍失敗"}

    def get(self, request):
        teams = team_service.list_teams(request.user, request.query_params)
        return Response(TeamSerializer(teams, many=True).data)

    def post(self, request):
        serializer = TeamWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        team = team_service.create_team(request.user, serializer.validated_data["name"])
        return Response(
            {"success": True, "data": TeamSerializer(team).data},
            status=status.HTTP_201_CREATED,
        )


class TeamDetailView(APIView):
    permission_classes = [HasRole]
    login_required_message = "請先登入"
    failure_messages = {"get": "獲取隊伍失敗", "put": "更新隊伍失敗", "delete": "刪除隊伍失敗"}

    def get(self, request, team_id):
        team = team_service.get_team(team_id, request.user)
        return Response(TeamDetailSerializer(team, context={"include_banned_members": True}).data)

    def put(self, request, team_id):
        serializer = TeamWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        team = team_service.update_team(team_id, request.user, serializer.validated_data["name"])
        return Response({"success": True, "data": TeamSerializer(team).data})

    def delete(self, request, team_id):
        return Response(team_service.delete_team(team_id, request.user))
