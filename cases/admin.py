from django.contrib import admin

from .models import CaseExample, CaseReaction, CaseTag


class CaseReactionInline(admin.TabularInline):
    model = CaseReaction
    extra = 0


class CaseTagInline(admin.TabularInline):
    model = CaseTag
    extra = 0


@admin.register(CaseExample)
class CaseExampleAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "author_name", "created_at")
    list_filter = ("category",)
    search_fields = ("title", "description", "author_name")
    inlines = [CaseReactionInline, CaseTagInline]
