"""
Shared media library service.

Partners share files with each other; each MediaItem records who
uploaded it (owner) and who it was shared with (partner). Both users see
the item in their library until the owner deletes it.

Usage:
    from media.services import MediaService

    result = MediaService.create_item(
        owner=user,
        partner=partner,
        file_name="beach.jpg",
        file_url="https://cdn.example.com/beach.jpg",
        file_size=2048,
        mime_type="image/jpeg",
    )
    items = MediaService.list_items(user)
    stats = MediaService.get_stats(user).data
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db.models import Q, Sum

from core.services import BaseService, ServiceResult

from media.models import MediaItem, format_file_size
from media.validators import MediaMetadataValidator

if TYPE_CHECKING:
    from typing import Any

    from django.db.models import QuerySet

    from authentication.models import User


class MediaService(BaseService):
    """
    Service for the shared media library.

    Methods:
        create_item: Record a file shared with a partner
        list_items: Items owned by or shared with a user
        delete_item: Soft delete an item (owner only)
        get_stats: Counts and storage used
    """

    @classmethod
    def create_item(
        cls,
        owner: User,
        partner: User,
        file_name: str,
        file_url: str,
        file_size: int,
        mime_type: str,
    ) -> ServiceResult[MediaItem]:
        """
        Record a file shared with a partner.

        The partner is notified with a file_shared notification.

        Error codes:
            SAME_USER: Cannot share a file with yourself
            NOT_PARTNER: Users do not share an active chat
            MISSING_FILE_URL: No file location given
            MISSING_FILE_NAME, INVALID_FILE_SIZE, UNSUPPORTED_FILE_TYPE,
            FILE_TOO_LARGE: Metadata validation failed
        """
        from chat.services import ChatService
        from notifications.models import NotificationType
        from notifications.services import NotificationService

        if owner.pk == partner.pk:
            return ServiceResult.failure(
                "Cannot share a file with yourself",
                error_code="SAME_USER",
            )

        if not ChatService.are_partners(owner, partner):
            return ServiceResult.failure(
                "User is not your partner",
                error_code="NOT_PARTNER",
            )

        if not file_url or not file_url.strip():
            return ServiceResult.failure(
                "File URL is required",
                error_code="MISSING_FILE_URL",
            )

        validation = MediaMetadataValidator().validate(file_name, file_size, mime_type)
        if not validation.is_valid:
            return ServiceResult.failure(validation.error, error_code=validation.error_code)

        with cls.atomic():
            item = MediaItem.objects.create(
                owner=owner,
                partner=partner,
                file_name=validation.file_name,
                file_url=file_url.strip(),
                file_size=file_size,
                mime_type=mime_type,
            )
            NotificationService.create(
                recipient=partner,
                notification_type=NotificationType.FILE_SHARED,
                title="New file shared",
                message=f"{owner.get_short_name()} shared {item.file_name}",
                data={"media_item_id": item.id},
            )

        cls.get_logger().info(
            f"User {owner.id} shared media item {item.id} with user {partner.id}"
        )
        return ServiceResult.success(item)

    @classmethod
    def _library_filter(cls, user: User, partner: User | None) -> Q:
        if partner is None:
            return Q(owner=user) | Q(partner=user)
        return Q(owner=user, partner=partner) | Q(owner=partner, partner=user)

    @classmethod
    def list_items(cls, user: User, partner: User | None = None) -> QuerySet:
        """
        Items owned by or shared with user, newest first.

        Args:
            user: Library owner
            partner: Restrict to items exchanged with this partner
        """
        return (
            MediaItem.objects.filter(cls._library_filter(user, partner))
            .select_related("owner", "partner")
            .order_by("-uploaded_at", "-id")
        )

    @classmethod
    def delete_item(cls, item: MediaItem, user: User) -> ServiceResult[None]:
        """
        Soft delete an item.

        Error codes:
            NOT_OWNER: Only the uploader can delete an item
            ALREADY_DELETED: Item is already deleted
        """
        if item.owner_id != user.pk:
            return ServiceResult.failure(
                "Only the owner can delete this file",
                error_code="NOT_OWNER",
            )

        if item.is_deleted:
            return ServiceResult.failure(
                "File is already deleted",
                error_code="ALREADY_DELETED",
            )

        item.soft_delete()
        cls.get_logger().info(f"User {user.id} deleted media item {item.id}")
        return ServiceResult.success(None)

    @classmethod
    def get_stats(cls, user: User, partner: User | None = None) -> ServiceResult[dict[str, Any]]:
        """
        Library statistics.

        Returns:
            ServiceResult with total_media, my_media, partner_media,
            total_storage_used (bytes) and formatted_storage_used
        """
        items = MediaItem.objects.filter(cls._library_filter(user, partner))
        total_media = items.count()
        my_media = items.filter(owner=user).count()
        storage = items.aggregate(total=Sum("file_size"))["total"] or 0

        return ServiceResult.success(
            {
                "total_media": total_media,
                "my_media": my_media,
                "partner_media": total_media - my_media,
                "total_storage_used": storage,
                "formatted_storage_used": format_file_size(storage),
            }
        )
