from django.conf import settings
from django.db import models
from django.utils import timezone

GENDER_MALE = "M"
GENDER_FEMALE = "F"

GENDER_CHOICES = [
    (GENDER_MALE, "男"),
    (GENDER_FEMALE, "女"),
]


class BannableMixin(models.Model):
    """Player-level ban (separate from the account-level ban on User)."""

    is_banned = models.BooleanField(default=False)
    ban_reason = models.TextField(blank=True, null=True)
    ban_until = models.DateTimeField(blank=True, null=True)

    class Meta:
        abstract = True

    @property
    def is_ban_active(self):
        if not self.is_banned:
            return False
        return self.ban_until is None or self.ban_until > timezone.now()


class Team(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="teams",
    )
    name = models.CharField(max_length=50, unique=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.name


class TeamMember(BannableMixin):
    team = models.ForeignKey(
        Team,
        on_delete=models.CASCADE,
        related_name="members",
    )
    name = models.CharField(max_length=50)
    role = models.CharField(max_length=50, default="選手")
    gender = models.CharField(max_length=1, choices=GENDER_CHOICES)
    birthday = models.DateField()
    phone = models.CharField(max_length=30, blank=True, null=True)
    line_id = models.CharField(max_length=100, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"{self.name} ({self.team.name})"


class TeamStaff(models.Model):
    ROLE_LEADER = "leader"
    ROLE_COACH = "coach"

    ROLE_CHOICES = [
        (ROLE_LEADER, "領隊"),
        (ROLE_COACH, "教練"),
    ]

    team = models.ForeignKey(
        Team,
        on_delete=models.CASCADE,
        related_name="staff",
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES)
    name = models.CharField(max_length=50)
    phone = models.CharField(max_length=30, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    address = models.CharField(max_length=255, blank=True, null=True)
    line_id = models.CharField(max_length=100, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "Team staff"

    def __str__(self):
        return f"{self.get_role_display()} {self.name}"


class UserPlayer(BannableMixin):
    """A person a user registers as an individual participant."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="players",
    )
    name = models.CharField(max_length=50)
    gender = models.CharField(max_length=1, choices=GENDER_CHOICES)
    birthday = models.DateField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.name
