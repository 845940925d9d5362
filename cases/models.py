from django.conf import settings
from django.db import models

EMOJI_OPTIONS = ("👍", "❤️", "🎯", "💡", "⭐", "🔥")
TAG_OPTIONS = ("#nützlich", "#relevant", "#wichtig", "#komplex", "#einfach", "#kreativ")

POPULAR_THRESHOLD = 10


class CaseExample(models.Model):
    class Category(models.TextChoices):
        PHOTO = "foto", "Foto-Nutzung"
        IMAGE = "bild", "Bild/Grafik-Nutzung"
        MUSIC = "musik", "Musiknutzung"
        VIDEO = "video", "Videonutzung"
        TEXT = "text", "Textnutzung"
        CREATIVE_COMMONS = "creative_commons", "Creative Commons"
        LICENSING = "lizenz", "Lizenzfragen"
        OTHER = "sonstiges", "Sonstiges"

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="case_examples",
    )
    author_name = models.CharField(max_length=120, blank=True)
    title = models.CharField(max_length=100)
    description = models.TextField(max_length=500)
    category = models.CharField(max_length=32, choices=Category.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    admin_comment = models.TextField(blank=True)
    admin_comment_at = models.DateTimeField(null=True, blank=True)
    admin_comment_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    @property
    def has_admin_comment(self) -> bool:
        return bool(self.admin_comment)


class CaseReaction(models.Model):
    case = models.ForeignKey(CaseExample, on_delete=models.CASCADE, related_name="reactions")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="case_reactions")
    emoji = models.CharField(max_length=8)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["case", "user", "emoji"], name="unique_case_reaction"),
        ]

    def __str__(self):
        return f"{self.emoji} {self.case_id}"


class CaseTag(models.Model):
    case = models.ForeignKey(CaseExample, on_delete=models.CASCADE, related_name="tags")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="case_tags")
    tag = models.CharField(max_length=32)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["case", "user", "tag"], name="unique_case_tag"),
        ]

    def __str__(self):
        return f"{self.tag} {self.case_id}"
