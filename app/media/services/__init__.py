"""Media services for shared partner files."""

from media.services.library import MediaService

__all__ = [
    "MediaService",
]
