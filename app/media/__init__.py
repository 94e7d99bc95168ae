"""
Media app for the shared partner media library.

This app provides:
- MediaItem model for files shared between partners
- Metadata validation (MIME allowlist, per-type size limits)
- Library listing, owner-only soft delete and storage statistics
"""
