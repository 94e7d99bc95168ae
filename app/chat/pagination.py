"""
Keyset pagination for chat message history.

Messages are paged in a fixed total order: created_at descending, then id
descending. A page request carries an optional opaque cursor (see
chat.cursors) naming the last record the client has seen, and the next
page holds the records strictly beyond that (created_at, id) pair:

    created_at < anchor.created_at
    OR (created_at == anchor.created_at AND id < anchor.id)

Because the bound is a value rather than a row offset, records inserted
between two requests never shift a page: nothing is repeated or skipped,
and an anchor whose message has since been deleted still positions the
query.

Components:
    PageDirection: OLDER (default, newest first) or NEWER (oldest first)
    PageRequest: page size, optional cursor token, direction
    MessagePage: returned records plus next_cursor / has_more
    MessageStore: storage capability the paginator needs
    InMemoryMessageStore: list-backed store (tests, fixtures)
    QuerySetMessageStore: Django queryset-backed store
    KeysetPaginator: validates the request and assembles the page

Usage:
    from chat.pagination import KeysetPaginator, PageRequest, QuerySetMessageStore

    store = QuerySetMessageStore(Message.objects.filter(chat=chat))
    page = KeysetPaginator(store).paginate(PageRequest(page_size=20, cursor=token))
    page.items        # up to 20 messages, newest first
    page.next_cursor  # token for the following page, or None
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from django.db.models import Q

from core.diagnostics import LoggingDiagnosticSink
from core.exceptions import ValidationError

from chat.constants import PAGINATION_CONFIG
from chat.cursors import MessageCursorCodec, MessageCursorPayload
from chat.exceptions import InvalidCursorError, InvalidPageSizeError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime
    from typing import Any

    from django.db.models import QuerySet

    from core.diagnostics import DiagnosticSink

    Anchor = tuple[datetime, str]


class PageDirection(str, Enum):
    """Which side of the anchor a page is taken from."""

    OLDER = "older"
    NEWER = "newer"


@dataclass(frozen=True)
class PageRequest:
    """
    A single page request.

    Attributes:
        page_size: Number of records wanted (validated by the paginator)
        cursor: Opaque token from a previous page, or None for the first page
        direction: OLDER pages walk back in time, NEWER pages walk forward
    """

    page_size: int
    cursor: str | None = None
    direction: PageDirection = PageDirection.OLDER

    def __post_init__(self):
        try:
            direction = PageDirection(self.direction)
        except ValueError:
            raise ValidationError(
                "Direction must be 'older' or 'newer'",
                error_code="INVALID_DIRECTION",
            ) from None
        object.__setattr__(self, "direction", direction)


@dataclass
class MessagePage:
    """
    One page of records.

    Attributes:
        items: Records in page order
        next_cursor: Token for the following page (None on the last page)
        has_more: Whether records exist beyond this page
    """

    items: list[Any] = field(default_factory=list)
    next_cursor: str | None = None
    has_more: bool = False


# =============================================================================
# Ordering
# =============================================================================


def keyset_key(record: Any) -> Anchor:
    """Return the (created_at, id) sort key of a record."""
    return (record.created_at, record.id)


def is_beyond(key: Anchor, anchor: Anchor, direction: PageDirection) -> bool:
    """
    Check whether key lies strictly past anchor in the given direction.

    Tuple comparison is lexicographic, which is exactly the composite
    (created_at, id) rule.
    """
    if direction is PageDirection.OLDER:
        return key < anchor
    return key > anchor


def validate_page_size(page_size: Any, max_page_size: int) -> int:
    """
    Validate a page size against [1, max_page_size].

    Raises:
        InvalidPageSizeError: If page_size is not an int in range
    """
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        raise InvalidPageSizeError(max_page_size)
    if not 1 <= page_size <= max_page_size:
        raise InvalidPageSizeError(max_page_size)
    return page_size


def parse_page_size(raw: str | None, default: int, max_page_size: int) -> int:
    """
    Parse a page size taken from a query string.

    Args:
        raw: Raw parameter value (None or "" selects the default)
        default: Page size used when the parameter is absent
        max_page_size: Upper bound

    Raises:
        InvalidPageSizeError: If raw is not an integer in range
    """
    if raw is None or raw == "":
        return validate_page_size(default, max_page_size)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise InvalidPageSizeError(max_page_size) from None
    return validate_page_size(value, max_page_size)


# =============================================================================
# Stores
# =============================================================================


@runtime_checkable
class MessageStore(Protocol):
    """
    Storage capability required by KeysetPaginator.

    fetch() returns up to limit records strictly beyond anchor (or from
    the start when anchor is None), ordered by (created_at, id)
    descending for OLDER and ascending for NEWER. Records expose
    created_at and id.
    """

    def fetch(
        self,
        *,
        anchor: Anchor | None,
        direction: PageDirection,
        limit: int,
    ) -> Sequence[Any]: ...


class InMemoryMessageStore:
    """
    MessageStore over a Python list.

    Example:
        store = InMemoryMessageStore([message_a, message_b])
        store.add(message_c)
    """

    def __init__(self, records: Iterable[Any] = ()):
        self._records = list(records)

    def add(self, record: Any) -> None:
        self._records.append(record)

    def remove(self, record: Any) -> None:
        self._records.remove(record)

    def fetch(
        self,
        *,
        anchor: Anchor | None,
        direction: PageDirection,
        limit: int,
    ) -> list[Any]:
        ordered = sorted(
            self._records,
            key=keyset_key,
            reverse=direction is PageDirection.OLDER,
        )
        if anchor is not None:
            ordered = [r for r in ordered if is_beyond(keyset_key(r), anchor, direction)]
        return ordered[:limit]


class QuerySetMessageStore:
    """
    MessageStore over a Django queryset.

    The queryset supplies the scope (one chat, visibility filters); this
    store adds the range predicate, ordering and limit. A composite index
    on (chat, -created_at, -id) serves both directions.
    """

    def __init__(self, queryset: QuerySet):
        self.queryset = queryset

    def fetch(
        self,
        *,
        anchor: Anchor | None,
        direction: PageDirection,
        limit: int,
    ) -> list[Any]:
        queryset = self.queryset
        if direction is PageDirection.OLDER:
            ordering = ("-created_at", "-id")
            lookup = "lt"
        else:
            ordering = ("created_at", "id")
            lookup = "gt"

        if anchor is not None:
            created_at, pk = anchor
            queryset = queryset.filter(
                Q(**{f"created_at__{lookup}": created_at})
                | Q(created_at=created_at, **{f"id__{lookup}": pk})
            )
        return list(queryset.order_by(*ordering)[:limit])


# =============================================================================
# Paginator
# =============================================================================


class KeysetPaginator:
    """
    Turns page requests into pages using a MessageStore.

    The store is asked for one record more than the page size; the extra
    record only decides has_more and is never returned. next_cursor is
    built from the last returned record when has_more is true.

    Args:
        store: Record source
        max_page_size: Largest accepted page size
        codec: Cursor codec (defaults to one signed with SECRET_KEY)
        diagnostics: Sink for rejected cursors and served pages

    Example:
        paginator = KeysetPaginator(InMemoryMessageStore(messages), max_page_size=50)
        first = paginator.paginate(PageRequest(page_size=2))
        second = paginator.paginate(PageRequest(page_size=2, cursor=first.next_cursor))
    """

    def __init__(
        self,
        store: MessageStore,
        max_page_size: int | None = None,
        codec: MessageCursorCodec | None = None,
        diagnostics: DiagnosticSink | None = None,
    ):
        self.store = store
        self.max_page_size = max_page_size or PAGINATION_CONFIG.MAX_PAGE_SIZE
        self.codec = codec or MessageCursorCodec()
        self.diagnostics = diagnostics or LoggingDiagnosticSink(__name__)

    def decode_anchor(self, cursor: str | None) -> Anchor | None:
        """Decode a cursor into its (created_at, id) anchor."""
        if cursor is None:
            return None
        try:
            return self.codec.decode(cursor).key
        except InvalidCursorError:
            self.diagnostics.record(
                "message_cursor_rejected",
                level=logging.WARNING,
                length=len(cursor) if isinstance(cursor, str) else None,
            )
            raise

    def paginate(self, request: PageRequest) -> MessagePage:
        """
        Return the page described by request.

        Raises:
            InvalidPageSizeError: If the page size is out of range
            InvalidCursorError: If the cursor does not decode
        """
        page_size = validate_page_size(request.page_size, self.max_page_size)
        anchor = self.decode_anchor(request.cursor)

        records = list(
            self.store.fetch(
                anchor=anchor,
                direction=request.direction,
                limit=page_size + 1,
            )
        )
        has_more = len(records) > page_size
        items = records[:page_size]

        next_cursor = None
        if has_more:
            next_cursor = self.codec.encode(MessageCursorPayload.from_message(items[-1]))

        self.diagnostics.record(
            "message_page_served",
            count=len(items),
            direction=request.direction.value,
            first_page=anchor is None,
            has_more=has_more,
        )
        return MessagePage(items=items, next_cursor=next_cursor, has_more=has_more)
