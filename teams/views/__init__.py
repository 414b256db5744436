from .teams import (
    TeamListCreateView,
    TeamDetailView,
)
from .members import (
    TeamMemberListCreateView,
    TeamMemberBatchCreateView,
    TeamMemberDetailView,
)
from .staff import (
    TeamStaffListCreateView,
    TeamStaffDetailView,
)
from .players import (
    UserPlayerListCreateView,
    UserPlayerDetailView,
    UserPlayerBanView,
    UserPlayerUnbanView,
)
