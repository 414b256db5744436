from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class ActivityLog(models.Model):
    """
    Append-only record of administrative and domain actions.

    Rows are written once by ActivityService and never updated or deleted
    through the ORM. ``metadata`` is stored as serialized JSON text so the
    payload survives schema changes of the entities it describes.
    """

    action = models.CharField(max_length=64, db_index=True)
    entity = models.CharField(max_length=64, db_index=True)
    entity_id = models.CharField(max_length=64, blank=True, null=True)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="activity_logs",
    )

    description = models.TextField()
    metadata = models.TextField(blank=True, null=True)

    ip_address = models.CharField(max_length=64, blank=True, null=True)
    user_agent = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["entity", "entity_id"], name="activity_entity_idx"),
            models.Index(fields=["user", "-created_at"], name="activity_user_idx"),
        ]

    def save(self, *args, **kwargs):
        if self.pk is not None:
            raise ValidationError("Activity log entries are immutable.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Activity log entries cannot be deleted.")

    def __str__(self):
        return f"{self.user_id} - {self.action} - {self.entity}:{self.entity_id}"
