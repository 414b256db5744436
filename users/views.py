# users/views.py - admin user management + password self-service

from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import HasRole, IsAdminRole

from . import services
from .serializers import (
    AdminUserSerializer,
    BanSerializer,
    ChangePasswordSerializer,
    RoleSerializer,
    SetPasswordSerializer,
)


class AdminUserListView(APIView):
    """
    GET /api/admin/users
    limit, offset, searchValue, searchField, sortBy, sortDirection
    """
    permission_classes = [IsAdminRole]
    failure_messages = {"get": "Failed to fetch users"}

    def get(self, request):
        result = services.list_users(request.query_params)
        result["users"] = AdminUserSerializer(result["users"], many=True).data
        return Response(result)


class AdminUserDetailView(APIView):
    permission_classes = [IsAdminRole]
    failure_messages = {"delete": "Failed to delete user"}

    def delete(self, request, user_id):
        deleted = services.delete_user(user_id, request)
        return Response({"success": True, "deletedUser": deleted})


class AdminUserRoleView(APIView):
    permission_classes = [IsAdminRole]
    failure_messages = {"put": "Failed to update user role"}

    def put(self, request, user_id):
        serializer = RoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.set_role(user_id, serializer.validated_data["role"], request)
        return Response({"success": True, "user": AdminUserSerializer(user).data})


class AdminUserBanView(APIView):
    permission_classes = [IsAdminRole]
    failure_messages = {"post": "Failed to ban user"}

    def post(self, request, user_id):
        serializer = BanSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.ban_user(
            user_id,
            request,
            reason=serializer.validated_data.get("banReason"),
            expires_in=serializer.validated_data.get("banExpiresIn"),
        )
        return Response({"success": True, "user": AdminUserSerializer(user).data})


class AdminUserUnbanView(APIView):
    permission_classes = [IsAdminRole]
    failure_messages = {"post": "Failed to unban user"}

    def post(self, request, user_id):
        user = services.unban_user(user_id, request)
        return Response({"success": True, "user": AdminUserSerializer(user).data})


class ChangePasswordView(APIView):
    permission_classes = [HasRole]
    failure_messages = {"post": "變更密碼失敗"}

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.change_password(
            request,
            serializer.validated_data["currentPassword"],
            serializer.validated_data["newPassword"],
        )
        return Response({"success": True, "message": "密碼已變更"})


class SetPasswordView(APIView):
    permission_classes = [HasRole]
    failure_messages = {"post": "設定密碼失敗"}

    def post(self, request):
        serializer = SetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.set_password(request, serializer.validated_data["newPassword"])
        return Response({"success": True, "message": "密碼已設定"})


class HasCredentialView(APIView):
    permission_classes = [HasRole]

    def get(self, request):
        return Response({"hasCredential": services.has_credential(request.user)})
