from django.urls import path

from .views import (
    TeamDetailView,
    TeamListCreateView,
    TeamMemberBatchCreateView,
    TeamMemberDetailView,
    TeamMemberListCreateView,
    TeamStaffDetailView,
    TeamStaffListCreateView,
    UserPlayerBanView,
    UserPlayerDetailView,
    UserPlayerListCreateView,
    UserPlayerUnbanView,
)

urlpatterns = [
    path("team", TeamListCreateView.as_view(), name="team-list"),
    path("team/<int:team_id>", TeamDetailView.as_view(), name="team-detail"),

    path("team_member", TeamMemberListCreateView.as_view(), name="team-member-list"),
    path("team_member/batch", TeamMemberBatchCreateView.as_view(), name="team-member-batch"),
    path("team_member/<int:member_id>", TeamMemberDetailView.as_view(), name="team-member-detail"),

    path("team_staff", TeamStaffListCreateView.as_view(), name="team-staff-list"),
    path("team_staff/<int:staff_id>", TeamStaffDetailView.as_view(), name="team-staff-detail"),

    path("user_player", UserPlayerListCreateView.as_view(), name="user-player-list"),
    path("user_player/<int:player_id>", UserPlayerDetailView.as_view(), name="user-player-detail"),
    path("user_player/<int:player_id>/ban", UserPlayerBanView.as_view(), name="user-player-ban"),
    path("user_player/<int:player_id>/unban", UserPlayerUnbanView.as_view(), name="user-player-unban"),
]
