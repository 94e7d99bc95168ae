"""
Media models package.

Exports:
    MediaItem: A file shared between two partners
"""

from media.models.media_item import MediaItem, format_file_size

__all__ = [
    "MediaItem",
    "format_file_size",
]
