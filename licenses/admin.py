from django.contrib import admin

from .models import GeneratedLicense


@admin.register(GeneratedLicense)
class GeneratedLicenseAdmin(admin.ModelAdmin):
    list_display = ("title", "owner", "license", "media_type", "created_at")
    list_filter = ("license", "media_type")
    search_fields = ("title", "author_name", "owner__username")
