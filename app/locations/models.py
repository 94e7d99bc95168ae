"""
Location model.

Each user has at most one Location row holding their last reported
position. Only the update time is tracked; the row is overwritten on
every update.
"""

from __future__ import annotations

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.model_mixins import ObjectIdPrimaryKeyMixin

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


class Location(ObjectIdPrimaryKeyMixin, models.Model):
    """
    Last known position of a user.

    Fields:
        user: Owner of the position (one-to-one)
        latitude: Degrees in [-90, 90]
        longitude: Degrees in [-180, 180]
        accuracy: Optional accuracy radius in meters (>= 0)
        updated_at: When the position was last reported
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="location",
        help_text="User this position belongs to",
    )

    latitude = models.FloatField(
        validators=[
            MinValueValidator(LATITUDE_RANGE[0]),
            MaxValueValidator(LATITUDE_RANGE[1]),
        ],
        help_text="Latitude in degrees",
    )

    longitude = models.FloatField(
        validators=[
            MinValueValidator(LONGITUDE_RANGE[0]),
            MaxValueValidator(LONGITUDE_RANGE[1]),
        ],
        help_text="Longitude in degrees",
    )

    accuracy = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0.0)],
        help_text="Accuracy radius in meters",
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the position was last reported",
    )

    class Meta:
        db_table = "locations_location"
        ordering = ["-updated_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(latitude__gte=-90) & models.Q(latitude__lte=90),
                name="location_latitude_range",
            ),
            models.CheckConstraint(
                condition=models.Q(longitude__gte=-180) & models.Q(longitude__lte=180),
                name="location_longitude_range",
            ),
            models.CheckConstraint(
                condition=models.Q(accuracy__isnull=True) | models.Q(accuracy__gte=0),
                name="location_accuracy_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"Location(user={self.user_id}, {self.latitude}, {self.longitude})"
