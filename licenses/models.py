from django.conf import settings
from django.db import models

from copyright_check.choices import CCLicense

CREATIVE_WORK_REASONS = (
    "Ich habe es selbst geschaffen",
    "Es zeigt meine persönliche Kreativität",
    "Es ist das Ergebnis meiner intellektuellen Arbeit",
    "Es erforderte kreative Entscheidungen",
)

INDIVIDUAL_CHARACTER_REASONS = (
    "Es unterscheidet sich von anderen Werken",
    "Es trägt meine persönliche Handschrift",
    "Es hat eine einzigartige Gestaltung",
    "Es zeigt meinen individuellen Stil",
)

EXPRESSION_FORMS = (
    "Digitales Werk (online verfügbar)",
    "Gedrucktes Werk",
    "Audio-/Videoaufnahme",
    "Physisches Objekt",
)

LICENSE_DESCRIPTIONS = {
    CCLicense.CC0: "Vollständige Freigabe - Du verzichtest auf alle Rechte",
    CCLicense.BY: "Andere dürfen dein Werk nutzen, verändern und kommerziell verwenden - mit Namensnennung",
    CCLicense.BY_SA: "Wie CC BY, aber Bearbeitungen müssen unter der gleichen Lizenz geteilt werden",
    CCLicense.BY_ND: "Nutzung erlaubt, aber keine Veränderungen",
    CCLicense.BY_NC: "Nur nicht-kommerzielle Nutzung erlaubt",
    CCLicense.BY_NC_SA: "Kombination aus NC und SA",
    CCLicense.BY_NC_ND: "Strengste CC-Lizenz - nur unverändert und nicht-kommerziell",
}


class GeneratedLicense(models.Model):
    class WorkType(models.TextChoices):
        PHOTO = "foto", "Foto"
        IMAGE = "bild", "Bild/Grafik"
        AUDIO = "audio", "Musik/Audio"
        VIDEO = "video", "Video"
        TEXT = "text", "Text/Dokument"
        SOFTWARE = "software", "Software/Code"
        BOOK = "buch", "Buch/E-Book"
        ARTWORK = "kunstwerk", "Kunstwerk"
        PRESENTATION = "praesentation", "Präsentation"
        OTHER = "anderes", "Anderes"

    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="licenses")
    title = models.CharField(max_length=200)
    media_type = models.CharField(max_length=32, choices=WorkType.choices)
    custom_media_type = models.CharField(max_length=100, blank=True)
    author_name = models.CharField(max_length=120)
    description = models.TextField()
    work_link = models.URLField(blank=True)

    creative_work_reasons = models.JSONField(default=list, blank=True)
    creative_work_custom = models.TextField(blank=True)
    individual_character_reasons = models.JSONField(default=list, blank=True)
    individual_character_custom = models.TextField(blank=True)
    expression_forms = models.JSONField(default=list, blank=True)
    expression_custom = models.TextField(blank=True)

    license = models.CharField(max_length=16, choices=CCLicense.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} ({self.license})"

    @property
    def media_type_display(self) -> str:
        if self.media_type == self.WorkType.OTHER and self.custom_media_type:
            return self.custom_media_type
        return self.get_media_type_display()

    @property
    def license_url(self) -> str:
        return CCLicense(self.license).url

    @property
    def license_description(self) -> str:
        return LICENSE_DESCRIPTIONS.get(self.license, "")

    @property
    def declaration(self) -> str:
        return (
            f"Hiermit erkläre ich, {self.author_name}, dass ich Urheber des oben genannten Werks bin "
            "und es unter der gewählten Creative Commons Lizenz zur Verfügung stelle."
        )

    def justification_groups(self):
        return [
            ("A) Geistige Schöpfung", self.creative_work_reasons, self.creative_work_custom),
            ("B) Individueller Charakter", self.individual_character_reasons, self.individual_character_custom),
            ("C) Form des Ausdrucks", self.expression_forms, self.expression_custom),
        ]
