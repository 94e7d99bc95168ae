"""
Serializers for location API.

Serializers:
    LocationSerializer: Position representation
    LocationUpdateSerializer: Input for PUT /locations/me/
    PartnerLocationSerializer: Partner position response
    BothLocationsSerializer: User and partner positions response
"""

from rest_framework import serializers

from locations.models import Location


class LocationSerializer(serializers.ModelSerializer):
    """Read-only position."""

    class Meta:
        model = Location
        fields = ["latitude", "longitude", "accuracy", "updated_at"]
        read_only_fields = fields


class LocationUpdateSerializer(serializers.Serializer):
    """
    Input for a position update.

    Range checks mirror the Location model validators.
    """

    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    accuracy = serializers.FloatField(min_value=0, required=False, allow_null=True)


class PartnerLocationSerializer(serializers.Serializer):
    """Partner position response."""

    partner_id = serializers.CharField(source="partner.id")
    partner_name = serializers.CharField(source="partner.get_short_name")
    location = LocationSerializer(allow_null=True)


class BothLocationsSerializer(serializers.Serializer):
    """User and partner positions response."""

    partner_id = serializers.CharField(source="partner.id")
    partner_name = serializers.CharField(source="partner.get_short_name")
    my_location = LocationSerializer(allow_null=True)
    partner_location = LocationSerializer(allow_null=True)
