"""
Django admin configuration for applications app.
"""

from django.contrib import admin

from applications.infrastructure.models import Application


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    """Admin interface for Application model."""

    list_display = ["name", "created_by", "key_count", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["name", "api_key", "created_by"]
    readonly_fields = ["id", "api_key", "created_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "name", "created_by"),
            },
        ),
        (
            "Credentials",
            {
                "fields": ("api_key",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at",),
                "classes": ("collapse",),
            },
        ),
    )

    def key_count(self, obj):
        """Number of keys issued by the application."""
        return obj.keys.count()

    key_count.short_description = "Keys"
