from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import HasRole

from ..serializers import (
    TeamMemberBatchSerializer,
    TeamMemberCreateSerializer,
    TeamMemberSerializer,
)
from ..services import team_members as member_service


class TeamMemberListCreateView(APIView):
    """
    GET  /api/team_member?teamId=
    POST /api/team_member   {teamId, name, role, gender, birthday, phone?, email?}
    """
    permission_classes = [HasRole]
    login_required_message = "請先登入"
    failure_messages = {"get": "獲取成員失敗", "post": "創建成員失敗"}

    def get(self, request):
        members = member_service.list_members(request.query_params.get("teamId"), request.user)
        return Response(TeamMemberSerializer(members, many=True).data)

    def post(self, request):
        serializer = TeamMemberCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        member = member_service.create_member(serializer.validated_data, request.user)
        return Response(
            {"success": True, "data": TeamMemberSerializer(member).data},
            status=status.HTTP_201_CREATED,
        )


class TeamMemberBatchCreateView(APIView):
    """POST /api/team_member/batch  {teamId, members: [...]}"""
    permission_classes = [HasRole]
    login_required_message = "請先登入"
    failure_messages = {"post": "批量新增隊職員失敗"}

    def post(self, request):
        serializer = TeamMemberBatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        members = member_service.batch_create_members(
            serializer.validated_data["teamId"],
            serializer.validated_data["members"],
            request.user,
        )
        return Response(
            {"success": True, "members": TeamMemberSerializer(members, many=True).data},
            status=status.HTTP_201_CREATED,
        )


class TeamMemberDetailView(APIView):
    permission_classes = [HasRole]
    login_required_message = "請先登入"
    failure_messages = {"put": "更新成員失敗", "delete": "刪除成員失敗"}

    def put(self, request, member_id):
        serializer = TeamMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        member = member_service.update_member(member_id, serializer.validated_data, request.user)
        return Response({"success": True, "data": TeamMemberSerializer(member).data})

    def delete(self, request, member_id):
        return Response(member_service.delete_member(member_id, request.user))
