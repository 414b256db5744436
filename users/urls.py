# users/urls.py

from django.urls import path

from .views import (
    AdminUserBanView,
    AdminUserDetailView,
    AdminUserListView,
    AdminUserRoleView,
    AdminUserUnbanView,
    ChangePasswordView,
    HasCredentialView,
    SetPasswordView,
)

admin_urlpatterns = [
    path('users', AdminUserListView.as_view(), name='admin-user-list'),
    path('users/<int:user_id>', AdminUserDetailView.as_view(), name='admin-user-detail'),
    path('users/<int:user_id>/role', AdminUserRoleView.as_view(), name='admin-user-role'),
    path('users/<int:user_id>/ban', AdminUserBanView.as_view(), name='admin-user-ban'),
    path('users/<int:user_id>/unban', AdminUserUnbanView.as_view(), name='admin-user-unban'),
]

urlpatterns = [
    path('change-password', ChangePasswordView.as_view(), name='change-password'),
    path('set-password', SetPasswordView.as_view(), name='set-password'),
    path('has-credential', HasCredentialView.as_view(), name='has-credential'),
]
