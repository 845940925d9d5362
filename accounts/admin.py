from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    fieldsets = BaseUserAdmin.fieldsets + (
        ("ECRC", {"fields": ("role", "display_name", "access_code")}),
        (
            "Aktivität",
            {
                "fields": (
                    "checked_products",
                    "tagged_cases",
                    "liked_cases",
                    "generated_licenses",
                    "generated_certificates",
                )
            },
        ),
    )
    list_display = ("username", "display_name", "email", "role", "checked_products")
    list_filter = ("role",)
    search_fields = ("username", "display_name", "email", "access_code")
