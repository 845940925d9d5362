from django.contrib import admin

from .models import CopyrightCheck


@admin.register(CopyrightCheck)
class CopyrightCheckAdmin(admin.ModelAdmin):
    list_display = ("id", "owner", "media_type", "usage_type", "status", "created_at")
    list_filter = ("status", "media_type", "usage_type")
    search_fields = ("description", "owner__username", "owner__display_name")
    readonly_fields = ("result", "created_at", "updated_at", "completed_at")
