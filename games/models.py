from django.conf import settings
from django.db import models
from django.db.models import Q


class Game(models.Model):
    name = models.CharField(max_length=255)
    region = models.CharField(max_length=32, db_index=True)
    venue = models.CharField(max_length=255)
    address = models.CharField(max_length=255)

    # Signup window and game window; signup_start < signup_end < game_start <= game_end
    signup_start = models.DateTimeField()
    signup_end = models.DateTimeField()
    game_start = models.DateTimeField()
    game_end = models.DateTimeField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.name


class GameDetail(models.Model):
    game = models.OneToOneField(
        Game,
        on_delete=models.CASCADE,
        related_name="detail",
    )
    basis = models.TextField(blank=True, null=True)
    note = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Detail for {self.game}"


class GameCategory(models.Model):
    game = models.ForeignKey(
        Game,
        on_delete=models.CASCADE,
        related_name="categories",
    )
    category_name = models.CharField(max_length=255)
    conditions = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        verbose_name_plural = "Game categories"

    def __str__(self):
        return f"{self.game} - {self.category_name}"


class GameFee(models.Model):
    game = models.ForeignKey(
        Game,
        on_delete=models.CASCADE,
        related_name="fees",
    )
    category = models.ForeignKey(
        GameCategory,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="fees",
    )
    fee_type = models.CharField(max_length=100)
    description = models.TextField(blank=True, null=True)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    is_required = models.BooleanField(default=True)
    note = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"{self.fee_type} {self.amount}"


class Registration(models.Model):
    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_CONFIRMED = "confirmed"
    STATUS_REJECTED = "rejected"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_REJECTED, "Rejected"),
    ]

    # Statuses that can no longer be edited by the registrant
    LOCKED_STATUSES = (STATUS_APPROVED, STATUS_CONFIRMED)

    game = models.ForeignKey(
        Game,
        on_delete=models.PROTECT,
        related_name="registrations",
    )
    category = models.ForeignKey(
        GameCategory,
        on_delete=models.PROTECT,
        related_name="registrations",
    )
    team = models.ForeignKey(
        "teams.Team",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="registrations",
    )
    registrant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="registrations",
    )

    status = models.CharField(
        max_length=16,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        db_index=True,
    )
    note = models.TextField(blank=True, null=True)

    submitted_at = models.DateTimeField()
    reviewed_at = models.DateTimeField(blank=True, null=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_registrations",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["game", "category", "team"], name="registration_slot_idx"),
            models.Index(fields=["registrant", "-created_at"], name="registration_user_idx"),
        ]

    @property
    def is_locked(self):
        return self.status in self.LOCKED_STATUSES

    def __str__(self):
        return f"{self.registrant} -> {self.game} ({self.status})"


class RegistrationParticipant(models.Model):
    """
    One person on a registration: either a team member or a user player.
    """
    registration = models.ForeignKey(
        Registration,
        on_delete=models.CASCADE,
        related_name="participants",
    )
    team_member = models.ForeignKey(
        "teams.TeamMember",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="participations",
    )
    user_player = models.ForeignKey(
        "teams.UserPlayer",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="participations",
    )
    is_main_player = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(team_member__isnull=False, user_player__isnull=True)
                    | Q(team_member__isnull=True, user_player__isnull=False)
                ),
                name="participant_single_source",
            ),
        ]

    @property
    def person(self):
        return self.team_member or self.user_player

    def __str__(self):
        return f"{self.person} in registration {self.registration_id}"
