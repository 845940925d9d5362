from django.apps import AppConfig


class CopyrightCheckConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "copyright_check"
    verbose_name = "Urheberrechtsprüfung"
