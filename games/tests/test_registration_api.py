from datetime import timedelta
from unittest.mock import patch

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from core.models import ActivityLog
from games.models import Registration, RegistrationParticipant
from games.tests.helpers import make_category, make_game, make_player, make_team, make_user


class SignupApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user("signup_user")
        self.other = make_user("other_user")
        self.game = make_game()
        self.category = make_category(self.game)
        self.amy = make_player(self.user, "Amy")
        self.bob = make_player(self.user, "Bob")
        self.team = make_team(self.user, "Tigers")

    def signup(self, payload, game=None):
        game = game or self.game
        return self.client.post(f"/api/games/{game.pk}/signup", payload, format="json")

    def players_payload(self, *players, **extra):
        return {
            "categoryId": self.category.pk,
            "participants": [{"userPlayerId": p.pk} for p in players],
            **extra,
        }

    def test_requires_login(self):
        resp = self.signup(self.players_payload(self.amy))
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.json()["statusMessage"], "請先登入")

    def test_signup_with_user_players(self):
        self.client.force_authenticate(user=self.user)
        resp = self.signup(self.players_payload(self.amy, self.bob, note="first time"))
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)

        body = resp.json()
        self.assertTrue(body["success"])
        data = body["data"]
        self.assertEqual(data["status"], "pending")
        self.assertEqual(data["userId"], self.user.pk)
        self.assertIsNone(data["teamId"])
        self.assertEqual(data["note"], "first time")
        self.assertEqual([p["name"] for p in data["participants"]], ["Amy", "Bob"])
        # Nobody flagged main, so the first one is
        self.assertEqual([p["isMainPlayer"] for p in data["participants"]], [True, False])

        log = ActivityLog.objects.get(action="signup")
        self.assertEqual(log.entity, "registration")
        self.assertEqual(log.entity_id, str(data["id"]))

    def test_signup_with_team_members(self):
        self.client.force_authenticate(user=self.user)
        members = list(self.team.members.all())
        payload = {
            "categoryId": self.category.pk,
            "teamId": self.team.pk,
            "participants": [
                {"teamMemberId": members[0].pk},
                {"teamMemberId": members[1].pk, "isMainPlayer": True},
            ],
        }
        resp = self.signup(payload)
        self.assertEqual(resp.status_code, 201)
        data = resp.json()["data"]
        self.assertEqual(data["teamId"], self.team.pk)
        self.assertEqual(data["teamName"], "Tigers")
        self.assertEqual([p["isMainPlayer"] for p in data["participants"]], [False, True])

    def test_duplicate_team_signup(self):
        self.client.force_authenticate(user=self.user)
        member = self.team.members.first()
        payload = {
            "categoryId": self.category.pk,
            "teamId": self.team.pk,
            "participants": [{"teamMemberId": member.pk}],
        }
        self.assertEqual(self.signup(payload).status_code, 201)

        resp = self.signup(payload)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "此隊伍已經報名此類別")
        self.assertEqual(Registration.objects.count(), 1)

    def test_foreign_team(self):
        foreign = make_team(self.other, "Lions")
        self.client.force_authenticate(user=self.user)
        payload = {
            "categoryId": self.category.pk,
            "teamId": foreign.pk,
            "participants": [{"teamMemberId": foreign.members.first().pk}],
        }
        resp = self.signup(payload)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["statusMessage"], "找不到隊伍或無權限操作")

    def test_window_not_open(self):
        self.client.force_authenticate(user=self.user)
        later = make_game(name="Later", opens_in=timedelta(days=2), closes_in=timedelta(days=4))
        self.category = make_category(later)
        resp = self.signup(self.players_payload(self.amy), game=later)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "報名尚未開始")

    def test_window_bounds_are_inclusive(self):
        self.client.force_authenticate(user=self.user)
        for edge in (self.game.signup_start, self.game.signup_end):
            with patch("games.services.registrations.now", return_value=edge):
                resp = self.signup(self.players_payload(self.amy))
            self.assertEqual(resp.status_code, 201, edge)
            self.assertEqual(Registration.objects.latest("id").submitted_at, edge)
        self.assertEqual(Registration.objects.count(), 2)

    def test_window_closed(self):
        self.client.force_authenticate(user=self.user)
        past = make_game(name="Past", opens_in=timedelta(days=-5), closes_in=timedelta(days=-1))
        self.category = make_category(past)
        resp = self.signup(self.players_payload(self.amy), game=past)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "報名已截止")

    def test_unknown_game_and_category(self):
        self.client.force_authenticate(user=self.user)
        resp = self.client.post("/api/games/9999/signup", self.players_payload(self.amy), format="json")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["statusMessage"], "找不到此比賽")

        other_category = make_category(make_game(name="Elsewhere"))
        payload = self.players_payload(self.amy)
        payload["categoryId"] = other_category.pk
        resp = self.signup(payload)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["statusMessage"], "找不到此比賽類別")

    def test_banned_or_foreign_player_is_rejected(self):
        self.client.force_authenticate(user=self.user)
        banned = make_player(self.user, "Ban", is_banned=True, ban_reason="fight")
        resp = self.signup(self.players_payload(self.amy, banned))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "部分隊員不存在或已被禁賽")

        stranger = make_player(self.other, "Stranger")
        resp = self.signup(self.players_payload(stranger))
        self.assertEqual(resp.json()["statusMessage"], "部分隊員不存在或已被禁賽")
        self.assertEqual(Registration.objects.count(), 0)

    def test_expired_ban_does_not_block(self):
        self.client.force_authenticate(user=self.user)
        expired = make_player(self.user, "Back", is_banned=True, ban_until=timezone.now() - timedelta(days=1))
        resp = self.signup(self.players_payload(expired))
        self.assertEqual(resp.status_code, 201)

    def test_incomplete_or_duplicate_participants(self):
        self.client.force_authenticate(user=self.user)
        resp = self.signup({"categoryId": self.category.pk, "participants": [{"isMainPlayer": True}]})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "參賽者資料不完整")

        resp = self.signup(self.players_payload(self.amy, self.amy))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "參賽者重複")

    def test_required_fields(self):
        self.client.force_authenticate(user=self.user)
        resp = self.signup({"categoryId": self.category.pk, "participants": []})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "請填寫所有必填欄位")

        resp = self.signup({"participants": [{"userPlayerId": self.amy.pk}]})
        self.assertEqual(resp.json()["statusMessage"], "請填寫所有必填欄位")


class ReviewAndResubmitTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_user("review_admin", role="admin")
        self.user = make_user("registrant")
        self.other = make_user("bystander")
        self.game = make_game()
        self.category = make_category(self.game)
        self.amy = make_player(self.user, "Amy")
        self.bob = make_player(self.user, "Bob")
        self.registration = self.make_registration(self.game)

    def make_registration(self, game, status=Registration.STATUS_PENDING):
        registration = Registration.objects.create(
            game=game,
            category=game.categories.first() or make_category(game),
            registrant=self.user,
            status=status,
            submitted_at=timezone.now() - timedelta(hours=1),
        )
        RegistrationParticipant.objects.create(registration=registration, user_player=self.amy, is_main_player=True)
        return registration

    # -----------------------------------------
    # REVIEW
    # -----------------------------------------
    def test_admin_approves(self):
        self.client.force_authenticate(user=self.admin)
        resp = self.client.post("/api/registration/approve", {"id": self.registration.pk}, format="json")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(data["status"], "approved")
        self.assertEqual(data["reviewedBy"], self.admin.pk)
        self.assertIsNotNone(data["reviewedAt"])
        self.assertTrue(ActivityLog.objects.filter(action="approve", entity_id=self.registration.pk).exists())

    def test_admin_rejects(self):
        self.client.force_authenticate(user=self.admin)
        resp = self.client.post("/api/registration/reject", {"id": self.registration.pk}, format="json")
        self.assertEqual(resp.json()["data"]["status"], "rejected")

    def test_review_needs_admin(self):
        self.client.force_authenticate(user=self.user)
        resp = self.client.post("/api/registration/approve", {"id": self.registration.pk}, format="json")
        self.assertEqual(resp.status_code, 403)
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, "pending")

    def test_review_validation(self):
        self.client.force_authenticate(user=self.admin)
        resp = self.client.post("/api/registration/approve", {}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "報名 ID 為必填項目")

        resp = self.client.post("/api/registration/approve", {"id": 9999}, format="json")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["statusMessage"], "找不到此報名記錄")

    def test_game_registrations_and_export_for_admin(self):
        self.client.force_authenticate(user=self.admin)
        resp = self.client.get(f"/api/games/{self.game.pk}/registrations")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([r["id"] for r in resp.json()], [self.registration.pk])

        resp = self.client.get(f"/api/games/{self.game.pk}/registrations/export")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp["Content-Type"].startswith("text/csv"))
        self.assertIn("Amy", resp.content.decode("utf-8"))

        self.client.force_authenticate(user=self.user)
        resp = self.client.get(f"/api/games/{self.game.pk}/registrations")
        self.assertEqual(resp.status_code, 403)

    # -----------------------------------------
    # OWN REGISTRATIONS / RESUBMIT
    # -----------------------------------------
    def test_my_registrations(self):
        self.client.force_authenticate(user=self.user)
        resp = self.client.get("/api/registration")
        self.assertEqual([r["id"] for r in resp.json()], [self.registration.pk])

        self.client.force_authenticate(user=self.other)
        self.assertEqual(self.client.get("/api/registration").json(), [])

    def test_my_registrations_filters(self):
        other_game = make_game(name="Second Cup")
        second = self.make_registration(other_game, status=Registration.STATUS_REJECTED)
        self.client.force_authenticate(user=self.user)

        resp = self.client.get(f"/api/registration?gameId={other_game.pk}")
        self.assertEqual([r["id"] for r in resp.json()], [second.pk])
        resp = self.client.get("/api/registration?status=pending")
        self.assertEqual([r["id"] for r in resp.json()], [self.registration.pk])

        resp = self.client.get("/api/registration?gameId=abc")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "參數格式不正確")

    def resubmit(self, registration, players):
        return self.client.put(
            f"/api/registration/{registration.pk}",
            {"participants": [{"userPlayerId": p.pk} for p in players]},
            format="json",
        )

    def test_resubmit_rejected_goes_back_to_pending(self):
        self.registration.status = Registration.STATUS_REJECTED
        self.registration.reviewed_by = self.admin
        self.registration.reviewed_at = timezone.now()
        self.registration.save()

        self.client.force_authenticate(user=self.user)
        resp = self.resubmit(self.registration, [self.bob])
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"], "報名更新成功")
        data = body["registration"]
        self.assertEqual(data["status"], "pending")
        self.assertIsNone(data["reviewedAt"])
        self.assertIsNone(data["reviewedBy"])
        self.assertEqual([p["name"] for p in data["participants"]], ["Bob"])
        self.assertEqual(RegistrationParticipant.objects.filter(registration=self.registration).count(), 1)

    def test_resubmit_locked_statuses(self):
        self.client.force_authenticate(user=self.user)
        for locked in (Registration.STATUS_APPROVED, Registration.STATUS_CONFIRMED):
            self.registration.status = locked
            self.registration.save()
            resp = self.resubmit(self.registration, [self.bob])
            self.assertEqual(resp.status_code, 400)
            self.assertEqual(resp.json()["statusMessage"], "已確認的報名無法修改")

    def test_resubmit_by_someone_else(self):
        self.client.force_authenticate(user=self.other)
        resp = self.resubmit(self.registration, [self.bob])
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["statusMessage"], "找不到此報名記錄")

    def test_resubmit_after_window(self):
        past = make_game(name="Closed", opens_in=timedelta(days=-5), closes_in=timedelta(days=-1))
        registration = self.make_registration(past)
        self.client.force_authenticate(user=self.user)
        resp = self.resubmit(registration, [self.bob])
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "報名時間已截止")
