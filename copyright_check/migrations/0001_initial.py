from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CopyrightCheck",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Entwurf"), ("completed", "Abgeschlossen")],
                        default="draft",
                        max_length=16,
                    ),
                ),
                (
                    "media_type",
                    models.CharField(
                        choices=[
                            ("photo", "Foto"),
                            ("image", "Bild/Grafik"),
                            ("audio", "Musik/Audio"),
                            ("video", "Video"),
                            ("text", "Text"),
                            ("software", "Software/Code"),
                            ("design", "Grafik/Design"),
                            ("other", "Sonstiges"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "source_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("internet", "Internet (Website, Social Media)"),
                            ("print", "Buch/Zeitschrift/Zeitung"),
                            ("scientific", "Wissenschaftliche Quelle"),
                            ("person", "Von einer Person direkt erhalten"),
                            ("purchased", "Gekauft (Stock-Foto, etc.)"),
                            ("creative_commons", "Creative Commons / Open Source"),
                            ("other", "Sonstiges"),
                        ],
                        max_length=32,
                    ),
                ),
                ("description", models.TextField(blank=True)),
                ("is_ai_created", models.BooleanField(blank=True, null=True)),
                ("has_human_creativity", models.BooleanField(blank=True, null=True)),
                ("is_public_domain", models.BooleanField(blank=True, null=True)),
                ("has_cc_license", models.BooleanField(blank=True, null=True)),
                (
                    "cc_license",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("CC0", "CC0 - Public Domain"),
                            ("CC-BY", "CC BY - Namensnennung"),
                            ("CC-BY-SA", "CC BY-SA - Weitergabe unter gleichen Bedingungen"),
                            ("CC-BY-ND", "CC BY-ND - Keine Bearbeitung"),
                            ("CC-BY-NC", "CC BY-NC - Nicht kommerziell"),
                            ("CC-BY-NC-SA", "CC BY-NC-SA"),
                            ("CC-BY-NC-ND", "CC BY-NC-ND"),
                        ],
                        max_length=16,
                    ),
                ),
                ("is_protected", models.BooleanField(blank=True, null=True)),
                (
                    "usage_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("presentation", "Präsentation (Unterricht)"),
                            ("written_work", "Schriftliche Arbeit (Schule/Uni)"),
                            ("newsletter", "Schul-Newsletter / Elternbrief"),
                            ("school_website", "Schulwebsite / Intranet"),
                            ("annual_report", "Jahresbericht / Broschüre"),
                            ("library", "Mediothek (Ausstellung, Katalog)"),
                            ("canteen", "Mensa (Speisekarte, Poster)"),
                            ("facility", "Hausdienst (Beschilderung, Infotafel)"),
                            ("social_media", "Social Media (Schul-Account)"),
                            ("video_project", "Video-Projekt (YouTube, Schul-TV)"),
                            ("commercial", "Kommerzielle Nutzung"),
                            ("book", "Buch / E-Book"),
                            ("artwork", "Eigenes Kunstwerk"),
                            ("other", "Sonstiges"),
                        ],
                        max_length=32,
                    ),
                ),
                ("is_public", models.BooleanField(blank=True, null=True)),
                (
                    "usage_context",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("zitat", "Als Zitat (kleiner Ausschnitt, mit Quellenangabe)"),
                            ("hauptinhalt", "Als Hauptinhalt (ganzes Bild/Text, zentral für Arbeit)"),
                            ("bearbeitet", "Bearbeitet/verändert (Remix, Filter, Übersetzung)"),
                            ("hauptbild", "Als Hauptbild"),
                            ("intern", "Nur intern"),
                            ("oeffentlich", "Öffentlich zugänglich"),
                        ],
                        max_length=16,
                    ),
                ),
                ("has_license", models.BooleanField(blank=True, null=True)),
                ("is_commercial", models.BooleanField(blank=True, null=True)),
                ("result", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="checks",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
