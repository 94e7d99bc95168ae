"""
Tests for MediaItem model.

These tests verify:
- Derived display fields (file_extension, formatted_file_size)
- Soft delete behavior through the default manager
- Object id primary keys
"""

from __future__ import annotations

import pytest

from core.helpers import is_object_id
from media.models import MediaItem, format_file_size
from media.tests.factories import MediaItemFactory


class TestFormatFileSize:
    """Tests for the 1024-based size formatter."""

    @pytest.mark.parametrize(
        "size,expected",
        [
            (0, "0 Bytes"),
            (512, "512 Bytes"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (1024 * 1024, "1 MB"),
            (int(2.25 * 1024**3), "2.25 GB"),
            (5 * 1024**4, "5120 GB"),
        ],
    )
    def test_formats(self, size, expected):
        assert format_file_size(size) == expected


@pytest.mark.django_db
class TestMediaItem:
    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("beach.JPG", "jpg"),
            ("archive.tar.gz", "gz"),
            ("README", ""),
        ],
    )
    def test_file_extension(self, file_name, expected):
        """
        Extension is lowercase and taken after the last dot.

        Why it matters: names without a dot must not echo the whole name
        back as an "extension".
        """
        item = MediaItemFactory(file_name=file_name)

        assert item.file_extension == expected

    def test_str_includes_size(self):
        item = MediaItemFactory(file_name="a.jpg", file_size=1536)

        assert str(item) == "a.jpg (1.5 KB)"

    def test_primary_key_is_object_id(self):
        assert is_object_id(MediaItemFactory().id)

    def test_soft_deleted_hidden_from_default_manager(self):
        """
        Soft-deleted items remain in all_objects only.

        Why it matters: a deleted item must vanish from both partners'
        libraries while the row is kept.
        """
        item = MediaItemFactory()

        item.soft_delete()

        assert not MediaItem.objects.filter(pk=item.pk).exists()
        assert MediaItem.all_objects.get(pk=item.pk).deleted_at is not None
