"""
Location service layer.

Services:
    LocationService: Update a user's position and read a partner's

Partners are users who share an active chat (see ChatService.are_partners);
a user can only read the location of a partner.

Usage:
    from locations.services import LocationService

    result = LocationService.update_location(user, 48.8566, 2.3522, accuracy=12.5)
    result = LocationService.get_both_locations(user, partner)
    result.data["partner_location"]  # Location or None
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from core.services import BaseService, ServiceResult

from locations.models import LATITUDE_RANGE, LONGITUDE_RANGE, Location

if TYPE_CHECKING:
    from typing import Any

    from authentication.models import User


def _as_number(value: Any) -> float | None:
    """Coerce value to a finite float, or None if it is not one."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class LocationService(BaseService):
    """
    Service for location sharing.

    Methods:
        update_location: Upsert the user's position
        get_partner_location: Partner's last position
        get_both_locations: User's and partner's positions together
    """

    @classmethod
    def update_location(
        cls,
        user: User,
        latitude: Any,
        longitude: Any,
        accuracy: Any = None,
    ) -> ServiceResult[Location]:
        """
        Record the user's current position.

        Args:
            user: User reporting a position
            latitude: Degrees in [-90, 90]
            longitude: Degrees in [-180, 180]
            accuracy: Optional accuracy radius in meters (>= 0)

        Returns:
            ServiceResult with the saved Location

        Error codes:
            VALIDATION_ERROR: A value is missing, non-numeric or out of range
        """
        errors: dict[str, list[str]] = {}

        lat = _as_number(latitude)
        if lat is None:
            errors["latitude"] = ["Latitude must be a valid number"]
        elif not LATITUDE_RANGE[0] <= lat <= LATITUDE_RANGE[1]:
            errors["latitude"] = ["Latitude must be between -90 and 90"]

        lon = _as_number(longitude)
        if lon is None:
            errors["longitude"] = ["Longitude must be a valid number"]
        elif not LONGITUDE_RANGE[0] <= lon <= LONGITUDE_RANGE[1]:
            errors["longitude"] = ["Longitude must be between -180 and 180"]

        acc = None
        if accuracy is not None:
            acc = _as_number(accuracy)
            if acc is None or acc < 0:
                errors["accuracy"] = ["Accuracy must be a non-negative number"]

        if errors:
            return ServiceResult.failure(
                "Invalid location",
                error_code="VALIDATION_ERROR",
                errors=errors,
            )

        location, created = Location.objects.update_or_create(
            user=user,
            defaults={"latitude": lat, "longitude": lon, "accuracy": acc},
        )

        cls.get_logger().debug(
            f"{'Created' if created else 'Updated'} location for user {user.id}"
        )
        return ServiceResult.success(location)

    @classmethod
    def get_partner_location(
        cls,
        user: User,
        partner: User,
    ) -> ServiceResult[dict[str, Any]]:
        """
        Partner's last position.

        Returns:
            ServiceResult with {"partner": User, "location": Location | None}

        Error codes:
            NOT_PARTNER: Users do not share an active chat
        """
        from chat.services import ChatService

        if not ChatService.are_partners(user, partner):
            return ServiceResult.failure(
                "User is not your partner",
                error_code="NOT_PARTNER",
            )

        location = Location.objects.filter(user=partner).first()
        return ServiceResult.success({"partner": partner, "location": location})

    @classmethod
    def get_both_locations(
        cls,
        user: User,
        partner: User,
    ) -> ServiceResult[dict[str, Any]]:
        """
        User's and partner's positions together.

        Returns:
            ServiceResult with {"partner", "my_location", "partner_location"}

        Error codes:
            NOT_PARTNER: Users do not share an active chat
        """
        result = cls.get_partner_location(user, partner)
        if not result.success:
            return result

        return ServiceResult.success(
            {
                "partner": partner,
                "my_location": Location.objects.filter(user=user).first(),
                "partner_location": result.data["location"],
            }
        )
