import re
from unittest.mock import patch

from django.core import mail
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from games.tests.helpers import PASSWORD, make_user
from users.models import User


class SignupLoginTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_signup_creates_plain_user(self):
        resp = self.client.post(
            "/api/auth/signup",
            {"username": "newbie", "email": "newbie@example.com", "password": PASSWORD, "name": "New", "role": "owner"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.json()["user"]["role"], "user")
        user = User.objects.get(username="newbie")
        self.assertEqual(user.role, "user")
        self.assertFalse(user.is_staff)

    def test_signup_rejects_duplicate_email_and_weak_password(self):
        make_user("taken")
        resp = self.client.post(
            "/api/auth/signup",
            {"username": "other", "email": "taken@example.com", "password": PASSWORD},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "此電子郵件已被註冊")

        resp = self.client.post(
            "/api/auth/signup",
            {"username": "weak", "email": "weak@example.com", "password": "password"},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(User.objects.filter(username="weak").exists())

    def test_login_with_username_or_email_then_me(self):
        make_user("walker", name="Walker")

        resp = self.client.post("/api/auth/login", {"email": "walker@example.com", "password": PASSWORD}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["username"], "walker")

        resp = self.client.get("/api/auth/me")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Walker")

        self.client.post("/api/auth/logout")
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)

        resp = self.client.post("/api/auth/login", {"username": "walker", "password": PASSWORD}, format="json")
        self.assertEqual(resp.status_code, 200)

    def test_login_failures(self):
        make_user("walker")
        resp = self.client.post("/api/auth/login", {"username": "walker", "password": "nope"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "帳號或密碼錯誤")

        make_user("banned_one", banned=True)
        resp = self.client.post("/api/auth/login", {"username": "banned_one", "password": PASSWORD}, format="json")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["statusMessage"], "帳號已被停權")

    def test_jwt_login(self):
        make_user("tokens")
        resp = self.client.post("/api/auth/jwt/login", {"username": "tokens", "password": PASSWORD}, format="json")
        self.assertEqual(resp.status_code, 200)
        access = resp.json()["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        self.assertEqual(self.client.get("/api/auth/me").json()["username"], "tokens")

    @patch("authx.views.id_token.verify_oauth2_token")
    def test_google_login_creates_user_without_password(self, verify):
        verify.return_value = {"email": "gina@example.com", "name": "Gina"}
        resp = self.client.post("/api/auth/google", {"id_token": "abc"}, format="json")
        self.assertEqual(resp.status_code, 200)

        user = User.objects.get(email="gina@example.com")
        self.assertEqual(user.name, "Gina")
        self.assertFalse(user.has_usable_password())
        self.assertEqual(self.client.get("/api/user/has-credential").json(), {"hasCredential": False})

    @patch("authx.views.id_token.verify_oauth2_token", side_effect=ValueError("bad signature"))
    def test_google_login_rejects_invalid_token(self, verify):
        resp = self.client.post("/api/auth/google", {"id_token": "abc"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(User.objects.exists())


@override_settings(
    EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend",
    FRONTEND_URL="https://games.example.com",
)
class PasswordResetTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user("forgetful")

    def test_unknown_email_answers_the_same(self):
        resp = self.client.post("/api/auth/forgot-password", {"email": "nobody@example.com"}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["success"])
        self.assertEqual(len(mail.outbox), 0)

    def test_invalid_email(self):
        resp = self.client.post("/api/auth/forgot-password", {"email": "not-an-email"}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_reset_flow(self):
        resp = self.client.post("/api/auth/forgot-password", {"email": "forgetful@example.com"}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(mail.outbox), 1)

        body = mail.outbox[0].body
        self.assertIn("https://games.example.com/reset-password?", body)
        uid = re.search(r"uid=([\w-]+)", body).group(1)
        token = re.search(r"token=([\w-]+)", body).group(1)

        resp = self.client.post(
            "/api/auth/reset-password",
            {"uid": uid, "token": token, "newPassword": "Brand-N3w-Pass!"},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("Brand-N3w-Pass!"))

        # Tokens are single use
        resp = self.client.post(
            "/api/auth/reset-password",
            {"uid": uid, "token": token, "newPassword": "Another-N3w-Pass!"},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "重設連結無效或已過期")
