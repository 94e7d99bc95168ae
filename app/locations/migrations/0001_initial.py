"""
Create Location, one row per user holding the last reported position.

Coordinate ranges are enforced by validators and by check constraints.
"""

import core.helpers
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Location",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=core.helpers.generate_object_id,
                        editable=False,
                        help_text="Unique 24-character hexadecimal identifier",
                        max_length=24,
                        primary_key=True,
                        serialize=False,
                        validators=[
                            django.core.validators.RegexValidator(
                                code="invalid_object_id",
                                message="Identifier must be 24 lowercase hexadecimal characters.",
                                regex="^[0-9a-f]{24}$",
                            )
                        ],
                    ),
                ),
                (
                    "latitude",
                    models.FloatField(
                        help_text="Latitude in degrees",
                        validators=[
                            django.core.validators.MinValueValidator(-90.0),
                            django.core.validators.MaxValueValidator(90.0),
                        ],
                    ),
                ),
                (
                    "longitude",
                    models.FloatField(
                        help_text="Longitude in degrees",
                        validators=[
                            django.core.validators.MinValueValidator(-180.0),
                            django.core.validators.MaxValueValidator(180.0),
                        ],
                    ),
                ),
                (
                    "accuracy",
                    models.FloatField(
                        blank=True,
                        null=True,
                        help_text="Accuracy radius in meters",
                        validators=[django.core.validators.MinValueValidator(0.0)],
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="When the position was last reported",
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        help_text="User this position belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="location",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "locations_location",
                "ordering": ["-updated_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("latitude__gte", -90), ("latitude__lte", 90)),
                        name="location_latitude_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("longitude__gte", -180), ("longitude__lte", 180)),
                        name="location_longitude_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("accuracy__isnull", True), ("accuracy__gte", 0), _connector="OR"
                        ),
                        name="location_accuracy_non_negative",
                    ),
                ],
            },
        ),
    ]
