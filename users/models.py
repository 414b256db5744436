# users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    ROLE_USER = "user"
    ROLE_ADMIN = "admin"
    ROLE_OWNER = "owner"

    ROLE_CHOICES = (
        (ROLE_USER, "User"),
        (ROLE_ADMIN, "Admin"),
        (ROLE_OWNER, "Owner"),
    )

    # Roles allowed into the admin console
    ADMIN_ROLES = (ROLE_ADMIN, ROLE_OWNER)

    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=ROLE_USER,
    )
    name = models.CharField(max_length=150, blank=True)

    # Account-level ban, set from the admin panel
    banned = models.BooleanField(default=False)
    ban_reason = models.TextField(blank=True, null=True)
    ban_expires = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["role"], name="user_role_idx"),
            models.Index(fields=["created_at"], name="user_created_idx"),
        ]

    def save(self, *args, **kwargs):
        # Admin-role users get into the Django admin mounted under the dashboard
        self.is_staff = self.role in self.ADMIN_ROLES or self.is_superuser
        super().save(*args, **kwargs)

    @property
    def is_admin_role(self):
        return self.role in self.ADMIN_ROLES

    @property
    def is_owner(self):
        return self.role == self.ROLE_OWNER

    @property
    def is_ban_active(self):
        if not self.banned:
            return False
        return self.ban_expires is None or self.ban_expires > timezone.now()

    @property
    def display_name(self):
        return self.name or self.get_full_name() or self.username

    def __str__(self):
        return self.username
