from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import HasRole

from ..serializers import TeamStaffSerializer, TeamStaffUpdateSerializer
from ..services import team_staff as staff_service


class TeamStaffListCreateView(APIView):
    """
    GET  /api/team_staff  ?teamId= ?role= ?limit= ?offset=
    POST /api/team_staff  {teamId, role, name, phone?, email?, address?, lineId?}
    """
    permission_classes = [HasRole]
    login_required_message = "請先登入"
    failure_messages = {"get": "獲取隊職員失敗", "post": "建立隊職員失敗"}

    def get(self, request):
        staff = staff_service.list_staff(request.user, request.query_params)
        return Response(TeamStaffSerializer(staff, many=True).data)

    def post(self, request):
        serializer = TeamStaffSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        staff = staff_service.create_staff(serializer.validated_data, request.user)
        return Response(TeamStaffSerializer(staff).data, status=status.HTTP_201_CREATED)


class TeamStaffDetailView(APIView):
    permission_classes = [HasRole]
    login_required_message = "請先登入"
    failure_messages = {"put": "更新隊職員失敗", "delete": "刪除隊職員失敗"}

    def put(self, request, staff_id):
        serializer = TeamStaffUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        staff = staff_service.update_staff(staff_id, serializer.validated_data, request.user)
        return Response(TeamStaffSerializer(staff).data)

    def delete(self, request, staff_id):
        return Response(staff_service.delete_staff(staff_id, request.user))
