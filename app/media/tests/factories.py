"""
Factory Boy factories for media models.

Usage:
    from media.tests.factories import MediaItemFactory

    item = MediaItemFactory(owner=user, partner=partner)
    pdf = MediaItemFactory(file_name="notes.pdf", mime_type="application/pdf")
"""

import factory

from authentication.tests.factories import UserFactory
from media.models import MediaItem


class MediaItemFactory(factory.django.DjangoModelFactory):
    """Factory for MediaItem model (a JPEG by default)."""

    class Meta:
        model = MediaItem

    owner = factory.SubFactory(UserFactory)
    partner = factory.SubFactory(UserFactory)
    file_name = factory.Sequence(lambda n: f"photo_{n}.jpg")
    file_url = factory.LazyAttribute(lambda o: f"https://files.example.com/{o.file_name}")
    file_size = 2048
    mime_type = "image/jpeg"
