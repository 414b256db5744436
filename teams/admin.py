from django.contrib import admin

from .models import Team, TeamMember, TeamStaff, UserPlayer


class TeamMemberInline(admin.TabularInline):
    model = TeamMember
    extra = 0


class TeamStaffInline(admin.TabularInline):
    model = TeamStaff
    extra = 0


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ('name', 'user', 'created_at')
    search_fields = ('name', 'user__username')
    inlines = [TeamStaffInline, TeamMemberInline]


@admin.register(TeamMember)
class TeamMemberAdmin(admin.ModelAdmin):
    list_display = ('name', 'team', 'role', 'gender', 'birthday', 'is_banned')
    list_filter = ('is_banned', 'gender')
    search_fields = ('name', 'team__name')


@admin.register(UserPlayer)
class UserPlayerAdmin(admin.ModelAdmin):
    list_display = ('name', 'user', 'gender', 'birthday', 'is_banned')
    list_filter = ('is_banned', 'gender')
    search_fields = ('name', 'user__username')
