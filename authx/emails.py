# authx/emails.py
from urllib.parse import urlencode

from django.conf import settings
from django.contrib.auth.tokens import default_token_generator
from django.core.mail import send_mail
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode


def build_reset_url(user, redirect_to=None):
    """
    Build the link the web client uses to finish a password reset.
    """
    base = redirect_to or f"{settings.FRONTEND_URL.rstrip('/')}/reset-password"
    query = urlencode(
        {
            "uid": urlsafe_base64_encode(force_bytes(user.pk)),
            "token": default_token_generator.make_token(user),
        }
    )
    separator = "&" if "?" in base else "?"
    return f"{base}{separator}{query}"


def send_password_reset_email(user, redirect_to=None):
    if not getattr(user, "email", None):
        return

    reset_url = build_reset_url(user, redirect_to)
    message = (
        f"Hi {user.display_name},\n\n"
        f"We received a request to reset your password.\n"
        f"Open the link below to choose a new one:\n"
        f"{reset_url}\n\n"
        f"If you did not request this, you can ignore this email.\n"
    )

    send_mail(
        subject="Reset your password",
        message=message,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
        fail_silently=False,
    )
