from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import HasRole, IsAdminRole

from ..models import Registration
from ..serializers import (
    RegistrationSerializer,
    ResubmitSerializer,
    ReviewSerializer,
    SignupSerializer,
)
from ..services import registrations as registration_service


class GameSignupView(APIView):
    """
    POST /api/games/<id>/signup
    Body: { categoryId, teamId?, participants: [{userPlayerId|teamMemberId, isMainPlayer}], note? }
    """
    permission_classes = [HasRole]
    login_required_message = "請先登入"
    failure_messages = {"post": "報名失敗"}

    def post(self, request, game_id):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        registration = registration_service.signup(game_id, serializer.validated_data, request)
        return Response(
            {"success": True, "data": RegistrationSerializer(registration).data},
            status=status.HTTP_201_CREATED,
        )


class GameRegistrationListView(APIView):
    """GET /api/games/<id>/registrations (admin)"""
    permission_classes = [IsAdminRole]
    failure_messages = {"get": "獲取報名資料失敗"}

    def get(self, request, game_id):
        registrations = registration_service.list_game_registrations(game_id)
        return Response(RegistrationSerializer(registrations, many=True).data)


class MyRegistrationListView(APIView):
    """GET /api/registration  ?gameId= ?status="""
    permission_classes = [HasRole]
    failure_messages = {"get": "獲取報名資料失敗"}

    def get(self, request):
        registrations = registration_service.list_user_registrations(request.user, request.query_params)
        return Response(RegistrationSerializer(registrations, many=True).data)


class RegistrationResubmitView(APIView):
    """
    PUT /api/registration/<id>
    Registrant replaces the participant set; rejected goes back to pending.
    """
    permission_classes = [HasRole]
    failure_messages = {"put": "更新報名失敗"}

    def put(self, request, registration_id):
        serializer = ResubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        registration = registration_service.resubmit(registration_id, serializer.validated_data, request)
        return Response(
            {
                "success": True,
                "message": "報名更新成功",
                "registration": RegistrationSerializer(registration).data,
            }
        )


class RegistrationReviewView(APIView):
    """
    POST /api/registration/approve | /api/registration/reject
    Body: { id }
    """
    permission_classes = [IsAdminRole]
    review_status = None

    @property
    def failure_messages(self):
        verb = "核准" if self.review_status == Registration.STATUS_APPROVED else "拒絕"
        return {"post": f"{verb}報名失敗"}

    def post(self, request):
        serializer = ReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        registration = registration_service.review(serializer.validated_data["id"], self.review_status, request)
        return Response({"data": RegistrationSerializer(registration).data})
