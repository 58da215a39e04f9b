from django.conf import settings
from django.db import models

from utils.rbac import ROLE_ADMIN, ROLE_USER


class UserRole(models.Model):
    """
    Role grant for a user. Admin capability is the presence of an
    ``admin`` row; users without rows are plain users.
    """

    ROLE_CHOICES = [
        (ROLE_ADMIN, "Admin"),
        (ROLE_USER, "User"),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="roles")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "authentication"
        db_table = "user_roles"
        unique_together = ["user", "role"]

    def __str__(self):
        return f"{self.user_id}: {self.role}"
