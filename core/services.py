import json
import logging
from datetime import datetime, time

from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework.exceptions import ValidationError

from .constants import ACTIVITY_LOG_DEFAULT_LIMIT, ACTIVITY_LOG_MAX_LIMIT
from .models import ActivityLog
from .utils import get_client_ip, get_user_agent, parse_id_param, parse_int

logger = logging.getLogger("sportsreg.core")

INVALID_DATE_MESSAGE = "日期格式不正確"


def _parse_bound(filters, key, end_of_day=False):
    """Accept ISO datetimes or plain dates; dates cover the whole local day."""
    value = filters.get(key)
    if not value:
        return None
    try:
        parsed = parse_datetime(value)
        day = parse_date(value) if parsed is None else None
    except ValueError:
        parsed = day = None
    if parsed is None:
        if day is None:
            raise ValidationError({key: INVALID_DATE_MESSAGE})
        parsed = datetime.combine(day, time.max if end_of_day else time.min)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


class ActivityService:
    @staticmethod
    def create_activity_log(
        action,
        entity,
        description,
        entity_id=None,
        user=None,
        metadata=None,
        ip_address=None,
        user_agent=None,
    ):
        """
        Append one entry to the activity log.

        ``metadata`` is any JSON-serializable value; it is stored as text.
        """
        log = ActivityLog.objects.create(
            action=action,
            entity=entity,
            entity_id=str(entity_id) if entity_id is not None else None,
            user=user if user is not None and user.is_authenticated else None,
            description=description,
            metadata=json.dumps(metadata, cls=DjangoJSONEncoder, ensure_ascii=False) if metadata is not None else None,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        logger.info(f"Activity {action} on {entity}:{entity_id} by {log.user_id}")
        return log

    @staticmethod
    def log_request(request, action, entity, description, entity_id=None, metadata=None):
        """Convenience wrapper that pulls user, IP and user agent off the request."""
        return ActivityService.create_activity_log(
            action=action,
            entity=entity,
            description=description,
            entity_id=entity_id,
            user=request.user,
            metadata=metadata,
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
        )

    @staticmethod
    def filter_logs(filters=None):
        filters = filters or {}
        qs = ActivityLog.objects.select_related("user")

        if filters.get("action"):
            qs = qs.filter(action=filters["action"])
        if filters.get("entity"):
            qs = qs.filter(entity=filters["entity"])
        user_id = parse_id_param(filters, "userId")
        if user_id is not None:
            qs = qs.filter(user_id=user_id)

        start = _parse_bound(filters, "startDate")
        if start is not None:
            qs = qs.filter(created_at__gte=start)
        end = _parse_bound(filters, "endDate", end_of_day=True)
        if end is not None:
            qs = qs.filter(created_at__lte=end)

        return qs.order_by("-created_at", "-id")

    @staticmethod
    def get_activity_logs(filters=None):
        filters = filters or {}
        limit = parse_int(filters.get("limit"), ACTIVITY_LOG_DEFAULT_LIMIT, minimum=1, maximum=ACTIVITY_LOG_MAX_LIMIT)
        offset = parse_int(filters.get("offset"), 0)
        qs = ActivityService.filter_logs(filters)
        return list(qs[offset:offset + limit]), limit, offset

    @staticmethod
    def get_activity_logs_count(filters=None):
        return ActivityService.filter_logs(filters).count()
