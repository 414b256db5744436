# client/composables.py
"""
Per-resource wrappers over ``ApiClient``.

Each ``use_*`` factory returns an object whose ``state`` (a
``ResourceState``) follows the last call. Reads leave failures in
``state.error``; writes record them and raise ``ApiError``.
"""
import logging
from datetime import datetime

from .api import ApiClient, ApiError
from .state import ResourceState

logger = logging.getLogger("sportsreg.client")

ADMIN_ROLES = ("admin", "owner")


class Resource:
    def __init__(self, client=None):
        self.client = client or ApiClient()
        self.state = ResourceState()

    def _query(self, call, *args, **kwargs):
        return self.state.track(call, *args, **kwargs)

    def _mutate(self, call, *args, **kwargs):
        return self.state.track(call, *args, reraise=True, store=False, **kwargs)


# -----------------------------------------
# GAMES
# -----------------------------------------
class Games(Resource):
    def list(self, region=None):
        return self._query(self.client.get, "games", {"region": region})

    def get(self, game_id):
        return self._query(self.client.get, f"games/{game_id}")

    def create(self, payload):
        return self._mutate(self.client.post, "games", payload)

    def update(self, game_id, payload):
        return self._mutate(self.client.put, f"games/{game_id}", payload)

    def delete(self, game_id):
        return self._mutate(self.client.delete, f"games/{game_id}")

    def categories(self, game_id):
        return self._query(self.client.get, "game_category", {"gameId": game_id}, store=False)

    def fees(self, game_id):
        return self._query(self.client.get, "game_fee", {"gameId": game_id}, store=False)

    def detail(self, game_id):
        return self._query(self.client.get, "game_detail", {"gameId": game_id}, store=False)

    def regions(self):
        return self._query(self.client.get, "regions", store=False)

    def signup(self, game_id, category_id, participants, team_id=None, note=None):
        payload = {"categoryId": category_id, "participants": participants, "teamId": team_id}
        if note is not None:
            payload["note"] = note
        return self._mutate(self.client.post, f"games/{game_id}/signup", payload)


# -----------------------------------------
# REGISTRATIONS
# -----------------------------------------
class Registrations(Resource):
    def list(self, game_id=None, status=None):
        return self._query(self.client.get, "registration", {"gameId": game_id, "status": status})

    def list_for_game(self, game_id):
        return self._query(self.client.get, f"games/{game_id}/registrations")

    def resubmit(self, registration_id, participants, note=None):
        payload = {"participants": participants}
        if note is not None:
            payload["note"] = note
        return self._mutate(self.client.put, f"registration/{registration_id}", payload)

    def approve(self, registration_id):
        return self._mutate(self.client.post, "registration/approve", {"id": registration_id})

    def reject(self, registration_id):
        return self._mutate(self.client.post, "registration/reject", {"id": registration_id})


# -----------------------------------------
# TEAMS
# -----------------------------------------
class Teams(Resource):
    def list(self):
        return self._query(self.client.get, "team")

    def get(self, team_id):
        return self._query(self.client.get, f"team/{team_id}", store=False)

    def create(self, name):
        return self._mutate(self.client.post, "team", {"name": name})

    def update(self, team_id, name):
        return self._mutate(self.client.put, f"team/{team_id}", {"name": name})

    def delete(self, team_id):
        return self._mutate(self.client.delete, f"team/{team_id}")


class TeamMembers(Resource):
    def list(self, team_id):
        return self._query(self.client.get, "team_member", {"teamId": team_id})

    def create(self, team_id, payload):
        return self._mutate(self.client.post, "team_member", {**payload, "teamId": team_id})

    def batch_create(self, team_id, members):
        return self._mutate(self.client.post, "team_member/batch", {"teamId": team_id, "members": members})

    def update(self, member_id, payload):
        return self._mutate(self.client.put, f"team_member/{member_id}", payload)

    def delete(self, member_id):
        return self._mutate(self.client.delete, f"team_member/{member_id}")


class TeamStaff(Resource):
    def list(self, team_id=None, role=None):
        return self._query(self.client.get, "team_staff", {"teamId": team_id, "role": role})

    def create(self, payload):
        return self._mutate(self.client.post, "team_staff", payload)

    def update(self, staff_id, payload):
        return self._mutate(self.client.put, f"team_staff/{staff_id}", payload)

    def delete(self, staff_id):
        return self._mutate(self.client.delete, f"team_staff/{staff_id}")


class UserPlayers(Resource):
    def list(self):
        return self._query(self.client.get, "user_player")

    def create(self, payload):
        return self._mutate(self.client.post, "user_player", payload)

    def update(self, player_id, payload):
        return self._mutate(self.client.put, f"user_player/{player_id}", payload)

    def delete(self, player_id):
        return self._mutate(self.client.delete, f"user_player/{player_id}")

    def ban(self, player_id, ban_reason=None, ban_until=None):
        return self._mutate(
            self.client.post,
            f"user_player/{player_id}/ban",
            {"banReason": ban_reason, "banUntil": ban_until},
        )

    def unban(self, player_id):
        return self._mutate(self.client.post, f"user_player/{player_id}/unban")


# -----------------------------------------
# ADMIN
# -----------------------------------------
class UserManagement(Resource):
    """
    Admin user panel. Actions answer True/False and reload the list on
    success, so a table bound to ``state.data`` stays current.
    """

    def __init__(self, client=None):
        super().__init__(client)
        self.last_query = {}

    def list_users(self, **query):
        self.last_query = query
        return self._query(self.client.get, "admin/users", query)

    def _action(self, call, *args):
        try:
            self._mutate(call, *args)
        except ApiError:
            return False
        self.list_users(**self.last_query)
        return True

    def set_role(self, user_id, role):
        return self._action(self.client.put, f"admin/users/{user_id}/role", {"role": role})

    def ban_user(self, user_id, ban_reason=None, ban_expires_in=None):
        return self._action(
            self.client.post,
            f"admin/users/{user_id}/ban",
            {"banReason": ban_reason, "banExpiresIn": ban_expires_in},
        )

    def unban_user(self, user_id):
        return self._action(self.client.post, f"admin/users/{user_id}/unban")

    def remove_user(self, user_id):
        return self._action(self.client.delete, f"admin/users/{user_id}")


class ActivityLog(Resource):
    def list(self, limit=None, offset=None, **filters):
        return self._query(self.client.get, "activity_log", {"limit": limit, "offset": offset, **filters})


class DashboardStats(Resource):
    """
    Counts shown on the dashboard landing page.

    ``refresh`` skips silently when the session is not an admin. On failure
    the previous counts stay (0 when there were none).
    """
    KEYS = ("gamesCount", "usersCount", "monthlyRegistrations")

    def __init__(self, client=None, today=None):
        super().__init__(client)
        self.state.data = {}
        self.today = today

    @property
    def statistics(self):
        return self.state.data

    def refresh(self):
        self.state.is_loading = True
        self.state.error = None
        try:
            me = self.client.me()
            if not me or me.get("role") not in ADMIN_ROLES:
                logger.info("Dashboard stats skipped, session is not an admin")
                return self.statistics

            month = (self.today or datetime.now()).strftime("%Y-%m")
            users = self.client.get("admin/users", {"limit": 100})
            monthly = [user for user in users["users"] if (user.get("createdAt") or "").startswith(month)]
            games = self.client.get("games")

            self.state.data = {
                "gamesCount": len(games) if isinstance(games, list) else 0,
                "usersCount": users.get("total") or 0,
                "monthlyRegistrations": len(monthly),
            }
        except (ApiError, KeyError, TypeError) as e:
            self.state.error = getattr(e, "status_message", None) or str(e)
            logger.warning(f"Dashboard stats refresh failed: {self.state.error}")
            self.state.data = {key: self.state.data.get(key) or 0 for key in self.KEYS}
        finally:
            self.state.is_loading = False
        return self.statistics


def use_games(client=None):
    return Games(client)


def use_registrations(client=None):
    return Registrations(client)


def use_teams(client=None):
    return Teams(client)


def use_team_members(client=None):
    return TeamMembers(client)


def use_team_staff(client=None):
    return TeamStaff(client)


def use_user_player(client=None):
    return UserPlayers(client)


def use_user_management(client=None):
    return UserManagement(client)


def use_activity_log(client=None):
    return ActivityLog(client)


def use_dashboard_stats(client=None, today=None):
    return DashboardStats(client, today=today)
