from .api import ApiClient, ApiError
from .state import ResourceState
from .composables import (
    use_activity_log,
    use_dashboard_stats,
    use_games,
    use_registrations,
    use_team_members,
    use_team_staff,
    use_teams,
    use_user_management,
    use_user_player,
)
