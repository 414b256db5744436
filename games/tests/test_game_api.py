from datetime import timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from core.models import ActivityLog
from games.models import Game, GameCategory, GameFee, Registration
from games.tests.helpers import make_category, make_game, make_user


class GameApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_user("game_admin", role="admin")
        self.user = make_user("plain_user")

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def payload(self, **overrides):
        now = timezone.now()
        data = {
            "name": "Spring Cup",
            "region": "taichung",
            "venue": "Sports Park",
            "address": "99 Park Ave",
            "signupStart": (now - timedelta(days=1)).isoformat(),
            "signupEnd": (now + timedelta(days=10)).isoformat(),
            "gameStart": (now + timedelta(days=20)).isoformat(),
            "gameEnd": (now + timedelta(days=21)).isoformat(),
            "basis": "League rules v2",
            "categories": [
                {"categoryName": "Men Open"},
                {"categoryName": "Women Open", "conditions": "18+"},
            ],
            "fees": [
                {"feeType": "Entry", "amount": "1500.00"},
                {"feeType": "Women entry", "amount": "1200", "categoryIndex": 1},
            ],
        }
        data.update(overrides)
        return data

    # -----------------------------------------
    # READ
    # -----------------------------------------
    def test_list_is_public_and_filters_by_region(self):
        make_game(name="North Cup", region="taipei")
        make_game(name="South Cup", region="kaohsiung")

        resp = self.client.get("/api/games")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.json()), 2)

        resp = self.client.get("/api/games?region=kaohsiung")
        data = resp.json()
        self.assertEqual([g["name"] for g in data], ["South Cup"])
        self.assertEqual(data[0]["regionName"], "高雄市")
        self.assertEqual(data[0]["status"], "registration")
        self.assertEqual(data[0]["statusText"], "報名進行中")

    def test_list_by_id_returns_nested_game(self):
        game = make_game()
        make_category(game)

        resp = self.client.get(f"/api/games?id={game.pk}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["id"], game.pk)
        self.assertEqual(len(resp.json()["categories"]), 1)

    def test_get_missing_game(self):
        resp = self.client.get("/api/games/9999")
        self.assertEqual(resp.status_code, 404)
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["statusCode"], 404)
        self.assertEqual(body["statusMessage"], "賽事不存在")

    def test_upcoming_status(self):
        game = make_game(opens_in=timedelta(days=2), closes_in=timedelta(days=5))
        resp = self.client.get(f"/api/games/{game.pk}")
        self.assertEqual(resp.json()["status"], "upcoming")

    def test_regions(self):
        resp = self.client.get("/api/regions")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 22)
        self.assertIn({"value": "taipei", "label": "臺北市"}, resp.json())

    def test_fee_and_detail_need_game_id(self):
        resp = self.client.get("/api/game_fee")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "缺少賽事 ID")

        game = make_game()
        resp = self.client.get(f"/api/game_detail?gameId={game.pk}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {})

    def test_malformed_id_filters_are_bad_requests(self):
        game = make_game()
        for url in (
            f"/api/game_fee?gameId={game.pk}&categoryId=abc",
            "/api/game_fee?gameId=abc",
            "/api/game_detail?gameId=abc",
            "/api/game_category?gameId=abc",
        ):
            resp = self.client.get(url)
            self.assertEqual(resp.status_code, 400, url)
            self.assertEqual(resp.json()["statusMessage"], "參數格式不正確")

    def test_fees_filter_by_category(self):
        game = make_game()
        category = make_category(game)
        GameFee.objects.create(game=game, fee_type="Entry", amount="800")
        GameFee.objects.create(game=game, category=category, fee_type="Category entry", amount="500")

        resp = self.client.get(f"/api/game_fee?gameId={game.pk}&categoryId={category.pk}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([fee["feeType"] for fee in resp.json()], ["Category entry"])

    # -----------------------------------------
    # CREATE
    # -----------------------------------------
    def test_create_requires_session(self):
        resp = self.client.post("/api/games", self.payload(), format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.json()["statusMessage"], "未授權")

    def test_create_requires_admin(self):
        self.auth(self.user)
        resp = self.client.post("/api/games", self.payload(), format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(resp.json()["statusMessage"], "權限不足")
        self.assertEqual(Game.objects.count(), 0)

    def test_admin_creates_game_with_categories_and_fees(self):
        self.auth(self.admin)
        resp = self.client.post("/api/games", self.payload(), format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)

        data = resp.json()
        self.assertEqual(data["name"], "Spring Cup")
        self.assertEqual(data["detail"]["basis"], "League rules v2")
        self.assertEqual(len(data["categories"]), 2)

        women = GameCategory.objects.get(category_name="Women Open")
        fee = GameFee.objects.get(fee_type="Women entry")
        self.assertEqual(fee.category_id, women.pk)
        self.assertIsNone(GameFee.objects.get(fee_type="Entry").category_id)

        log = ActivityLog.objects.get(entity="game", action="create")
        self.assertEqual(log.entity_id, str(data["id"]))
        self.assertEqual(log.user_id, self.admin.pk)

    def test_bare_dates_are_local_midnight(self):
        self.auth(self.admin)
        today = timezone.localdate()
        payload = self.payload(
            signupStart=str(today - timedelta(days=1)),
            signupEnd=str(today + timedelta(days=3)),
            gameStart=str(today + timedelta(days=5)),
            gameEnd=str(today + timedelta(days=6)),
        )
        resp = self.client.post("/api/games", payload, format="json")
        self.assertEqual(resp.status_code, 201)
        self.assertTrue(resp.json()["signupEnd"].endswith("T00:00:00+08:00"))

    def test_missing_field(self):
        self.auth(self.admin)
        payload = self.payload()
        del payload["venue"]
        resp = self.client.post("/api/games", payload, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "缺少必要欄位: venue")
        self.assertIn("errors", resp.json())

    def test_invalid_date(self):
        self.auth(self.admin)
        resp = self.client.post("/api/games", self.payload(gameEnd="not-a-date"), format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "日期格式不正確")

    def test_window_order_is_checked(self):
        self.auth(self.admin)
        now = timezone.now()
        payload = self.payload(
            signupStart=(now + timedelta(days=5)).isoformat(),
            signupEnd=(now + timedelta(days=1)).isoformat(),
        )
        resp = self.client.post("/api/games", payload, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "報名開始時間必須早於報名結束時間")

        payload = self.payload(gameStart=(now + timedelta(days=2)).isoformat())
        resp = self.client.post("/api/games", payload, format="json")
        self.assertEqual(resp.json()["statusMessage"], "報名結束時間必須早於賽事開始時間")

        payload = self.payload()
        payload["gameEnd"] = (now + timedelta(days=15)).isoformat()
        resp = self.client.post("/api/games", payload, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "賽事開始時間必須早於賽事結束時間")
        self.assertEqual(Game.objects.count(), 0)

    def test_one_day_game_is_accepted(self):
        self.auth(self.admin)
        payload = self.payload()
        payload["gameEnd"] = payload["gameStart"]
        resp = self.client.post("/api/games", payload, format="json")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["gameStart"], resp.json()["gameEnd"])

    def test_region_must_be_known(self):
        self.auth(self.admin)
        resp = self.client.post("/api/games", self.payload(region="atlantis"), format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "無效的地區")

        resp = self.client.post("/api/games", self.payload(region="高雄市"), format="json")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["region"], "kaohsiung")
        self.assertEqual(resp.json()["regionName"], "高雄市")

    def test_fee_category_index_out_of_range(self):
        self.auth(self.admin)
        payload = self.payload(fees=[{"feeType": "Entry", "amount": "100", "categoryIndex": 5}])
        resp = self.client.post("/api/games", payload, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "費用的分類索引無效")

    # -----------------------------------------
    # UPDATE / DELETE
    # -----------------------------------------
    def test_update_replaces_fields(self):
        game = make_game()
        self.auth(self.admin)
        resp = self.client.put(f"/api/games/{game.pk}", self.payload(name="Renamed"), format="json")
        self.assertEqual(resp.status_code, 200)
        game.refresh_from_db()
        self.assertEqual(game.name, "Renamed")
        self.assertEqual(game.categories.count(), 2)

    def _register(self, game):
        category = make_category(game)
        return Registration.objects.create(
            game=game,
            category=category,
            registrant=self.user,
            submitted_at=timezone.now(),
        )

    def test_update_categories_blocked_after_registrations(self):
        game = make_game()
        self._register(game)
        self.auth(self.admin)
        resp = self.client.put(f"/api/games/{game.pk}", self.payload(), format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "已有隊伍報名，無法修改賽事分類")

        payload = self.payload(name="Only fields")
        del payload["categories"]
        del payload["fees"]
        resp = self.client.put(f"/api/games/{game.pk}", payload, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Only fields")

    def test_delete_game(self):
        game = make_game()
        self.auth(self.admin)
        resp = self.client.delete(f"/api/games/{game.pk}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"success": True, "message": "賽事已成功刪除"})
        self.assertFalse(Game.objects.filter(pk=game.pk).exists())
        self.assertTrue(ActivityLog.objects.filter(entity="game", action="delete", entity_id=game.pk).exists())

    def test_delete_blocked_when_registered(self):
        game = make_game()
        self._register(game)
        self.auth(self.admin)
        resp = self.client.delete(f"/api/games/{game.pk}")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "已有隊伍報名，無法刪除賽事")
        self.assertTrue(Game.objects.filter(pk=game.pk).exists())


class GameCategoryApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_user("cat_admin", role="owner")
        self.game = make_game()

    def test_list_by_game(self):
        make_category(self.game, "A")
        make_category(make_game(name="Other"), "B")
        resp = self.client.get(f"/api/game_category?gameId={self.game.pk}")
        self.assertEqual([c["categoryName"] for c in resp.json()], ["A"])

    def test_create_update_delete(self):
        self.client.force_authenticate(user=self.admin)
        resp = self.client.post(
            "/api/game_category",
            {"gameId": self.game.pk, "categoryName": "Mixed"},
            format="json",
        )
        self.assertEqual(resp.status_code, 201)
        category_id = resp.json()["id"]

        resp = self.client.put(
            f"/api/game_category/{category_id}",
            {"categoryName": "Mixed doubles", "conditions": "2 players"},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["categoryName"], "Mixed doubles")

        resp = self.client.delete(f"/api/game_category/{category_id}")
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(GameCategory.objects.filter(pk=category_id).exists())

    def test_create_needs_game_id(self):
        self.client.force_authenticate(user=self.admin)
        resp = self.client.post("/api/game_category", {"categoryName": "Mixed"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "賽事 ID 為必填欄位")

    def test_delete_blocked_with_registrations(self):
        category = make_category(self.game)
        Registration.objects.create(
            game=self.game,
            category=category,
            registrant=self.admin,
            submitted_at=timezone.now(),
        )
        self.client.force_authenticate(user=self.admin)
        resp = self.client.delete(f"/api/game_category/{category.pk}")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "此分類已有報名，無法刪除")

    def test_missing_category(self):
        self.client.force_authenticate(user=self.admin)
        resp = self.client.put("/api/game_category/9999", {"categoryName": "X"}, format="json")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["statusMessage"], "找不到此比賽類別")
