"""
Django admin configuration for support app.
"""

from django.contrib import admin

from support.infrastructure.models import SupportGrant


@admin.register(SupportGrant)
class SupportGrantAdmin(admin.ModelAdmin):
    """Admin interface for SupportGrant model."""

    list_display = ["user_id", "added_by", "added_at"]
    list_filter = ["added_at"]
    search_fields = ["user_id", "added_by"]
    readonly_fields = ["id", "added_at"]
