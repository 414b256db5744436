# games/datetime_utils.py
"""
Centralized datetime handling for games.

Game windows are compared against ``now()`` only through these helpers so
tests and services agree on the clock and on the window boundaries.
"""
from datetime import datetime, time
from typing import Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

GAME_STATUS_UPCOMING = "upcoming"
GAME_STATUS_REGISTRATION = "registration"
GAME_STATUS_CLOSED = "closed"
GAME_STATUS_ONGOING = "ongoing"
GAME_STATUS_ENDED = "ended"

GAME_STATUS_TEXT = {
    GAME_STATUS_UPCOMING: "即將開放報名",
    GAME_STATUS_REGISTRATION: "報名進行中",
    GAME_STATUS_CLOSED: "報名已截止",
    GAME_STATUS_ONGOING: "賽事進行中",
    GAME_STATUS_ENDED: "賽事已結束",
}


def now() -> datetime:
    """
    Single source of truth for "now" in games.
    """
    return timezone.now()


def parse_game_datetime(value) -> Optional[datetime]:
    """
    Parse an ISO datetime or a bare date.

    Bare dates (YYYY-MM-DD) mean local midnight in TIME_ZONE; naive
    datetimes are taken as local time too. Returns None when unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed = parse_datetime(text)
            if parsed is None:
                day = parse_date(text)
                if day is None:
                    return None
                parsed = datetime.combine(day, time.min)
        except ValueError:
            return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def is_signup_open(game, current: Optional[datetime] = None) -> bool:
    current = current or now()
    return game.signup_start <= current <= game.signup_end


def is_signup_not_started(game, current: Optional[datetime] = None) -> bool:
    return (current or now()) < game.signup_start


def is_signup_closed(game, current: Optional[datetime] = None) -> bool:
    return (current or now()) > game.signup_end


def get_game_status(game, current: Optional[datetime] = None) -> str:
    """
    upcoming -> registration -> closed -> ongoing -> ended
    """
    current = current or now()
    if current < game.signup_start:
        return GAME_STATUS_UPCOMING
    if is_signup_open(game, current):
        return GAME_STATUS_REGISTRATION
    if current < game.game_start:
        return GAME_STATUS_CLOSED
    if current <= game.game_end:
        return GAME_STATUS_ONGOING
    return GAME_STATUS_ENDED


def get_status_text(status: str) -> str:
    return GAME_STATUS_TEXT.get(status, "未知")


def format_for_api(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return timezone.localtime(dt).isoformat()
