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
            name="GeneratedLicense",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                (
                    "media_type",
                    models.CharField(
                        choices=[
                            ("foto", "Foto"),
                            ("bild", "Bild/Grafik"),
                            ("audio", "Musik/Audio"),
                            ("video", "Video"),
                            ("text", "Text/Dokument"),
                            ("software", "Software/Code"),
                            ("buch", "Buch/E-Book"),
                            ("kunstwerk", "Kunstwerk"),
                            ("praesentation", "Präsentation"),
                            ("anderes", "Anderes"),
                        ],
                        max_length=32,
                    ),
                ),
                ("custom_media_type", models.CharField(blank=True, max_length=100)),
                ("author_name", models.CharField(max_length=120)),
                ("description", models.TextField()),
                ("work_link", models.URLField(blank=True)),
                ("creative_work_reasons", models.JSONField(blank=True, default=list)),
                ("creative_work_custom", models.TextField(blank=True)),
                ("individual_character_reasons", models.JSONField(blank=True, default=list)),
                ("individual_character_custom", models.TextField(blank=True)),
                ("expression_forms", models.JSONField(blank=True, default=list)),
                ("expression_custom", models.TextField(blank=True)),
                (
                    "license",
                    models.CharField(
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
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="licenses",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
