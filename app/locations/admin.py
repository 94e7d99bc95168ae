"""Django admin configuration for locations."""

from django.contrib import admin

from locations.models import Location


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    """Admin configuration for Location."""

    list_display = ["user", "latitude", "longitude", "accuracy", "updated_at"]
    search_fields = ["user__email"]
    raw_id_fields = ["user"]
    readonly_fields = ["id", "updated_at"]
