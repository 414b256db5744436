from datetime import timedelta

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from core import constants
from core.models import ActivityLog
from core.services import ActivityService
from games.tests.helpers import make_user


class ActivityServiceTestCase(TestCase):
    def setUp(self):
        self.admin = make_user("log_admin", role="admin")

    def test_metadata_is_stored_as_json_text(self):
        log = ActivityService.create_activity_log(
            action=constants.ACTION_CREATE,
            entity=constants.ENTITY_GAME,
            description="建立賽事",
            entity_id=12,
            user=self.admin,
            metadata={"region": "臺北市", "count": 2},
        )
        self.assertEqual(log.entity_id, "12")
        self.assertEqual(log.metadata, '{"region": "臺北市", "count": 2}')

    def test_entries_are_immutable(self):
        log = ActivityService.create_activity_log(action="create", entity="game", description="x")
        log.description = "changed"
        with self.assertRaises(ValidationError):
            log.save()
        with self.assertRaises(ValidationError):
            log.delete()
        self.assertEqual(ActivityLog.objects.get(pk=log.pk).description, "x")

    def test_filters(self):
        other = make_user("log_other")
        ActivityService.create_activity_log(action="create", entity="game", description="a", user=self.admin)
        ActivityService.create_activity_log(action="delete", entity="game", description="b", user=other)
        old = ActivityService.create_activity_log(action="ban", entity="user", description="c", user=self.admin)
        ActivityLog.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=10))

        self.assertEqual(ActivityService.get_activity_logs_count({"entity": "game"}), 2)
        self.assertEqual(ActivityService.get_activity_logs_count({"action": "delete"}), 1)
        self.assertEqual(ActivityService.get_activity_logs_count({"userId": str(self.admin.pk)}), 2)

        start = (timezone.localdate() - timedelta(days=1)).isoformat()
        self.assertEqual(ActivityService.get_activity_logs_count({"startDate": start}), 2)
        end = (timezone.localdate() - timedelta(days=10)).isoformat()
        self.assertEqual(ActivityService.get_activity_logs_count({"endDate": end}), 1)

    def test_newest_first_with_limit(self):
        for index in range(3):
            ActivityService.create_activity_log(action="create", entity="game", description=str(index))
        logs, limit, offset = ActivityService.get_activity_logs({"limit": "2"})
        self.assertEqual([log.description for log in logs], ["2", "1"])
        self.assertEqual((limit, offset), (2, 0))

        _, limit, _ = ActivityService.get_activity_logs({"limit": "500"})
        self.assertEqual(limit, constants.ACTIVITY_LOG_MAX_LIMIT)


class ActivityLogApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_user("reader_admin", role="admin", name="Reader")
        ActivityService.create_activity_log(
            action="signup",
            entity="registration",
            description="報名",
            entity_id=3,
            user=self.admin,
            metadata={"gameId": 1},
        )

    def test_admin_reads_log(self):
        self.client.force_authenticate(user=self.admin)
        resp = self.client.get("/api/activity_log?entity=registration")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["total"], 1)
        self.assertEqual(body["limit"], 50)
        self.assertEqual(body["offset"], 0)
        entry = body["data"][0]
        self.assertEqual(entry["entityId"], "3")
        self.assertEqual(entry["userName"], "Reader")
        self.assertEqual(entry["metadata"], {"gameId": 1})

    def test_non_admin_is_forbidden(self):
        self.client.force_authenticate(user=make_user("curious"))
        resp = self.client.get("/api/activity_log")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["statusMessage"], "權限不足")

    def test_malformed_filters_are_bad_requests(self):
        self.client.force_authenticate(user=self.admin)

        resp = self.client.get("/api/activity_log?userId=abc")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["statusMessage"], "參數格式不正確")

        for query in ("startDate=2025-02-30", "endDate=not-a-date", "startDate=2025-01-01T25:00"):
            resp = self.client.get(f"/api/activity_log?{query}")
            self.assertEqual(resp.status_code, 400, query)
            self.assertEqual(resp.json()["statusMessage"], "日期格式不正確")
