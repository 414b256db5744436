import logging

from django.conf import settings
from django.contrib.auth import get_user_model, login, logout
from django.contrib.auth.forms import PasswordResetForm
from django.contrib.auth.tokens import default_token_generator
from django.utils.encoding import force_str
from django.utils.http import urlsafe_base64_decode
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from rest_framework import status
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .authentication import BANNED_MESSAGE
from .emails import send_password_reset_email
from .serializers import (
    ForgotPasswordSerializer,
    LoginSerializer,
    MeSerializer,
    ResetPasswordSerializer,
    SignupSerializer,
)

logger = logging.getLogger("sportsreg.users")

User = get_user_model()

FORGOT_PASSWORD_MESSAGE = "If the email is registered, you will receive a password reset link"


class SignupView(APIView):
    # allow unauthenticated
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"User {user.pk} signed up")
        return Response(
            {"success": True, "user": MeSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """
    POST /api/auth/login
    Starts a cookie session for username/email + password.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']
        if user.is_ban_active:
            raise PermissionDenied(BANNED_MESSAGE)

        login(request, user)
        logger.info(f"User {user.pk} logged in")
        return Response({"success": True, "user": MeSerializer(user).data})


class LogoutView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        logout(request)
        return Response({"success": True})


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(MeSerializer(request.user).data)


class GoogleLoginView(APIView):
    """
    POST /api/auth/google {id_token}
    Accounts created here have no usable password until set-password.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        token = request.data.get('id_token')
        if not token:
            raise ValidationError({"id_token": "ID Token is required"})

        try:
            id_info = id_token.verify_oauth2_token(
                token,
                google_requests.Request(),
                settings.GOOGLE_CLIENT_ID or None,
            )
        except ValueError as e:
            raise ValidationError({"id_token": f"Invalid token: {e}"})

        email = id_info.get('email')
        if not email:
            raise ValidationError({"id_token": "Email not found in token"})

        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            username = email.split('@')[0]
            if User.objects.filter(username=username).exists():
                username = f"{username}_{User.objects.count()}"
            user = User.objects.create_user(
                username=username,
                email=email,
                password=None,  # Unusable password
                name=id_info.get('name', ''),
            )
            logger.info(f"Created user {user.pk} from Google sign-in")

        if user.is_ban_active:
            raise PermissionDenied(BANNED_MESSAGE)

        login(request, user, backend='django.contrib.auth.backends.ModelBackend')
        return Response({"success": True, "user": MeSerializer(user).data})


class ForgotPasswordView(APIView):
    """
    POST /api/auth/forgot-password {email, redirectTo?}
    Answers the same way whether or not the email is registered.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = ForgotPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email']
        redirect_to = serializer.validated_data.get('redirectTo') or None

        for user in PasswordResetForm().get_users(email):
            send_password_reset_email(user, redirect_to)
            logger.info(f"Password reset link sent to user {user.pk}")

        return Response({"success": True, "message": FORGOT_PASSWORD_MESSAGE})


class ResetPasswordView(APIView):
    """
    POST /api/auth/reset-password {uid, token, newPassword}
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            user = User.objects.get(pk=force_str(urlsafe_base64_decode(data['uid'])))
        except (User.DoesNotExist, ValueError, TypeError, OverflowError):
            user = None

        if user is None or not default_token_generator.check_token(user, data['token']):
            raise ValidationError({"token": "重設連結無效或已過期"})

        user.set_password(data['newPassword'])
        user.save(update_fields=['password'])
        logger.info(f"User {user.pk} reset their password")
        return Response({"success": True})
