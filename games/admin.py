from django.contrib import admin

from .models import Game, GameCategory, GameDetail, GameFee, Registration, RegistrationParticipant


class GameCategoryInline(admin.TabularInline):
    model = GameCategory
    extra = 0


class GameFeeInline(admin.TabularInline):
    model = GameFee
    extra = 0


class GameDetailInline(admin.StackedInline):
    model = GameDetail
    extra = 0


@admin.register(Game)
class GameAdmin(admin.ModelAdmin):
    list_display = ('name', 'region', 'venue', 'signup_start', 'signup_end', 'game_start', 'game_end')
    list_filter = ('region', 'game_start')
    search_fields = ('name', 'venue', 'address')
    inlines = [GameDetailInline, GameCategoryInline, GameFeeInline]


class RegistrationParticipantInline(admin.TabularInline):
    model = RegistrationParticipant
    extra = 0
    raw_id_fields = ('team_member', 'user_player')


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ('id', 'game', 'category', 'team', 'registrant', 'status', 'submitted_at', 'reviewed_at')
    list_filter = ('status', 'game')
    search_fields = ('game__name', 'team__name', 'registrant__username')
    raw_id_fields = ('registrant', 'reviewed_by', 'team')
    inlines = [RegistrationParticipantInline]
