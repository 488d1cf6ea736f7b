"""
Django admin configuration for activations app.
"""

from django.contrib import admin

from activations.infrastructure.models import DeviceBinding


@admin.register(DeviceBinding)
class DeviceBindingAdmin(admin.ModelAdmin):
    """Admin interface for DeviceBinding model."""

    list_display = ["hwid", "license_key", "bound_at"]
    list_filter = ["bound_at"]
    search_fields = ["hwid", "license_key__key"]
    readonly_fields = ["id", "bound_at"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("license_key")
