from django.db import models


class MediaType(models.TextChoices):
    PHOTO = "photo", "Foto"
    IMAGE = "image", "Bild/Grafik"
    AUDIO = "audio", "Musik/Audio"
    VIDEO = "video", "Video"
    TEXT = "text", "Text"
    SOFTWARE = "software", "Software/Code"
    DESIGN = "design", "Grafik/Design"
    OTHER = "other", "Sonstiges"


class SourceType(models.TextChoices):
    INTERNET = "internet", "Internet (Website, Social Media)"
    PRINT = "print", "Buch/Zeitschrift/Zeitung"
    SCIENTIFIC = "scientific", "Wissenschaftliche Quelle"
    PERSON = "person", "Von einer Person direkt erhalten"
    PURCHASED = "purchased", "Gekauft (Stock-Foto, etc.)"
    CREATIVE_COMMONS = "creative_commons", "Creative Commons / Open Source"
    OTHER = "other", "Sonstiges"


class UsageType(models.TextChoices):
    PRESENTATION = "presentation", "Präsentation (Unterricht)"
    WRITTEN_WORK = "written_work", "Schriftliche Arbeit (Schule/Uni)"
    NEWSLETTER = "newsletter", "Schul-Newsletter / Elternbrief"
    SCHOOL_WEBSITE = "school_website", "Schulwebsite / Intranet"
    ANNUAL_REPORT = "annual_report", "Jahresbericht / Broschüre"
    LIBRARY = "library", "Mediothek (Ausstellung, Katalog)"
    CANTEEN = "canteen", "Mensa (Speisekarte, Poster)"
    FACILITY = "facility", "Hausdienst (Beschilderung, Infotafel)"
    SOCIAL_MEDIA = "social_media", "Social Media (Schul-Account)"
    VIDEO_PROJECT = "video_project", "Video-Projekt (YouTube, Schul-TV)"
    COMMERCIAL = "commercial", "Kommerzielle Nutzung"
    BOOK = "book", "Buch / E-Book"
    ARTWORK = "artwork", "Eigenes Kunstwerk"
    OTHER = "other", "Sonstiges"


class UsageContext(models.TextChoices):
    QUOTATION = "zitat", "Als Zitat (kleiner Ausschnitt, mit Quellenangabe)"
    MAIN_CONTENT = "hauptinhalt", "Als Hauptinhalt (ganzes Bild/Text, zentral für Arbeit)"
    DERIVATIVE = "bearbeitet", "Bearbeitet/verändert (Remix, Filter, Übersetzung)"
    MAIN_IMAGE = "hauptbild", "Als Hauptbild"
    INTERNAL = "intern", "Nur intern"
    PUBLIC = "oeffentlich", "Öffentlich zugänglich"


class CCLicense(models.TextChoices):
    CC0 = "CC0", "CC0 - Public Domain"
    BY = "CC-BY", "CC BY - Namensnennung"
    BY_SA = "CC-BY-SA", "CC BY-SA - Weitergabe unter gleichen Bedingungen"
    BY_ND = "CC-BY-ND", "CC BY-ND - Keine Bearbeitung"
    BY_NC = "CC-BY-NC", "CC BY-NC - Nicht kommerziell"
    BY_NC_SA = "CC-BY-NC-SA", "CC BY-NC-SA"
    BY_NC_ND = "CC-BY-NC-ND", "CC BY-NC-ND"

    @property
    def non_commercial(self) -> bool:
        return "-NC" in self.value

    @property
    def no_derivatives(self) -> bool:
        return self.value.endswith("-ND")

    @property
    def share_alike(self) -> bool:
        return self.value.endswith("-SA")

    @property
    def url(self) -> str:
        if self is CCLicense.CC0:
            return "https://creativecommons.org/publicdomain/zero/1.0/"
        slug = self.value.lower().replace("cc-", "", 1)
        return f"https://creativecommons.org/licenses/{slug}/4.0/"


# Which context answers the last wizard step offers, per usage type.
WRITTEN_CONTEXTS = (UsageContext.QUOTATION, UsageContext.MAIN_CONTENT, UsageContext.DERIVATIVE)
ONLINE_CONTEXTS = (UsageContext.QUOTATION, UsageContext.MAIN_IMAGE)
PREMISES_CONTEXTS = (UsageContext.INTERNAL, UsageContext.PUBLIC)

ONLINE_USAGES = (UsageType.SOCIAL_MEDIA, UsageType.VIDEO_PROJECT)
ADMINISTRATION_USAGES = (UsageType.NEWSLETTER, UsageType.SCHOOL_WEBSITE, UsageType.ANNUAL_REPORT)
PREMISES_USAGES = (UsageType.LIBRARY, UsageType.CANTEEN, UsageType.FACILITY)


def contexts_for(usage_type) -> tuple:
    if usage_type == UsageType.WRITTEN_WORK:
        return WRITTEN_CONTEXTS
    if usage_type in ONLINE_USAGES:
        return ONLINE_CONTEXTS
    if usage_type in PREMISES_USAGES:
        return PREMISES_CONTEXTS
    return ()


def asks_exposure(usage_type) -> bool:
    """Whether the context step asks the public/private question directly."""
    return usage_type in (UsageType.WRITTEN_WORK, UsageType.PRESENTATION) or usage_type in ADMINISTRATION_USAGES
