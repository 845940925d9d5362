from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    class Role(models.TextChoices):
        LEARNER = "learner", "Lernende*r"
        ADMIN = "admin", "Admin"

    ACTIVITY_FIELDS = (
        "checked_products",
        "tagged_cases",
        "liked_cases",
        "generated_licenses",
        "generated_certificates",
    )

    role = models.CharField(
        max_length=32,
        choices=Role.choices,
        default=Role.LEARNER,
    )

    display_name = models.CharField("Lernname", max_length=120, blank=True)
    access_code = models.CharField(max_length=14, unique=True, null=True, blank=True)

    checked_products = models.IntegerField(default=0)
    tagged_cases = models.IntegerField(default=0)
    liked_cases = models.IntegerField(default=0)
    generated_licenses = models.IntegerField(default=0)
    generated_certificates = models.IntegerField(default=0)

    def __str__(self):
        return self.display_name or self.get_full_name() or self.username

    @property
    def is_ecrc_admin(self) -> bool:
        if self.is_superuser or self.role == self.Role.ADMIN:
            return True
        admin_emails = getattr(settings, "ECRC_ADMIN_EMAILS", [])
        return bool(self.email) and self.email.lower() in admin_emails

    @property
    def total_activity(self) -> int:
        return self.checked_products + self.tagged_cases + self.liked_cases

    @property
    def activity(self) -> dict:
        return {name: getattr(self, name) for name in self.ACTIVITY_FIELDS}
