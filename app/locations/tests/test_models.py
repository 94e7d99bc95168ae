"""
Tests for the Location model.
"""

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from locations.models import Location
from locations.tests.factories import LocationFactory


@pytest.mark.django_db
class TestLocation:
    def test_one_location_per_user(self, user):
        LocationFactory(user=user)

        with pytest.raises(IntegrityError):
            Location.objects.create(user=user, latitude=0, longitude=0)

    @pytest.mark.parametrize(
        "field,value",
        [("latitude", 90.5), ("latitude", -91), ("longitude", 180.1), ("accuracy", -1)],
    )
    def test_full_clean_rejects_out_of_range(self, user, field, value):
        location = Location(user=user, latitude=0, longitude=0, accuracy=None)
        setattr(location, field, value)

        with pytest.raises(ValidationError):
            location.full_clean()

    def test_database_rejects_out_of_range_latitude(self, user):
        with pytest.raises(IntegrityError):
            Location.objects.create(user=user, latitude=95, longitude=0)

    def test_boundaries_are_valid(self, user):
        location = Location(user=user, latitude=-90, longitude=180, accuracy=0)

        location.full_clean()
