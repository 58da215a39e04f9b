from django.conf import settings
from django.db import models


class Profile(models.Model):
    # Primary key is the auth user id, so profile id == user id
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, primary_key=True, related_name="profile"
    )

    full_name = models.CharField(max_length=150)
    mobile_number = models.CharField(max_length=20)
    college = models.CharField(max_length=150, blank=True, help_text="College name (denormalized)")
    email = models.EmailField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "authentication"
        db_table = "profiles"
        ordering = ["full_name"]
        indexes = [
            models.Index(fields=["college"], name="profiles_college_idx"),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.email})"
