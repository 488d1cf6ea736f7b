"""
Django admin configuration for licenses app.
"""

from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from licenses.infrastructure.models import LicenseKey


@admin.register(LicenseKey)
class LicenseKeyAdmin(admin.ModelAdmin):
    """Admin interface for LicenseKey model."""

    list_display = [
        "key",
        "application",
        "status_display",
        "device_usage",
        "expires_at",
        "first_used",
        "created_at",
    ]
    list_filter = ["banned", "used", "expires_at", "created_at"]
    search_fields = ["key", "prefix", "application__name", "application__api_key"]
    readonly_fields = ["id", "key", "created_at", "first_used"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "key", "application", "prefix"),
            },
        ),
        (
            "Limits",
            {
                "fields": ("expires_at", "device_limit", "banned"),
            },
        ),
        (
            "Usage",
            {
                "fields": ("used", "system_info", "first_used"),
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

    def status_display(self, obj):
        """Display key status with color."""
        if obj.banned:
            return format_html('<span style="color: red;">Banned</span>')
        if obj.expires_at < timezone.now():
            return format_html('<span style="color: orange;">Expired</span>')
        return format_html('<span style="color: green;">Active</span>')

    status_display.short_description = "Status"

    def device_usage(self, obj):
        """Bound devices against the limit."""
        return f"{obj.devices.count()}/{obj.device_limit}"

    device_usage.short_description = "Devices"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("application")
