from datetime import date, timedelta

from django.utils import timezone

from games.models import Game, GameCategory
from teams.models import Team, TeamMember, UserPlayer
from users.models import User

PASSWORD = "Str0ng-Pass!42"


def make_user(username, role="user", **extra):
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password=PASSWORD,
        role=role,
        **extra,
    )


def make_game(name="City Open", region="taipei", opens_in=None, closes_in=None, **extra):
    """Game whose signup window is open now unless offsets say otherwise."""
    now = timezone.now()
    signup_start = now + (opens_in if opens_in is not None else -timedelta(days=1))
    signup_end = now + (closes_in if closes_in is not None else timedelta(days=7))
    return Game.objects.create(
        name=name,
        region=region,
        venue="Main Arena",
        address="1 Stadium Rd",
        signup_start=signup_start,
        signup_end=signup_end,
        game_start=max(signup_end, now) + timedelta(days=3),
        game_end=max(signup_end, now) + timedelta(days=5),
        **extra,
    )


def make_category(game, name="Men Open"):
    return GameCategory.objects.create(game=game, category_name=name)


def make_player(user, name="Amy", **extra):
    return UserPlayer.objects.create(user=user, name=name, gender="F", birthday=date(2000, 1, 1), **extra)


def make_team(user, name="Tigers", members=2):
    team = Team.objects.create(user=user, name=name)
    for index in range(members):
        TeamMember.objects.create(
            team=team,
            name=f"{name} member {index + 1}",
            gender="M",
            birthday=date(1998, 5, 1),
        )
    return team
