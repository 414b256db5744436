from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'name', 'role', 'banned', 'is_staff', 'created_at')
    list_filter = ('role', 'banned', 'is_active')
    search_fields = ('username', 'email', 'name')
    fieldsets = UserAdmin.fieldsets + (
        ('Account', {'fields': ('name', 'role', 'banned', 'ban_reason', 'ban_expires')}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Account', {'fields': ('name', 'role')}),
    )
