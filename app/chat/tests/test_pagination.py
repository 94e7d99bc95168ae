"""
Tests for keyset pagination over an in-memory store.

These tests exercise KeysetPaginator without a database:
- Ordering and the (created_at, id) tie-break
- next_cursor / has_more look-ahead
- Full walks at page size 1
- Inserts between page requests
- Deleted anchors and past-the-end cursors
- Page size bounds and direction handling
- Diagnostic events
"""

import logging
from datetime import timedelta

import pytest

from chat.cursors import MessageCursorCodec, MessageCursorPayload
from chat.exceptions import InvalidCursorError, InvalidPageSizeError
from chat.pagination import (
    InMemoryMessageStore,
    KeysetPaginator,
    MessageStore,
    PageDirection,
    PageRequest,
    is_beyond,
    keyset_key,
    parse_page_size,
    validate_page_size,
)
from core.diagnostics import NullDiagnosticSink
from core.exceptions import ValidationError


@pytest.fixture
def codec():
    return MessageCursorCodec(key="test-key")


@pytest.fixture
def paginator_factory(codec, sink):
    def _make(records, max_page_size=100):
        return KeysetPaginator(
            InMemoryMessageStore(records),
            max_page_size=max_page_size,
            codec=codec,
            diagnostics=sink,
        )

    return _make


def walk(paginator, page_size, direction=PageDirection.OLDER):
    """Follow next_cursor until the last page; return pages of items."""
    pages = []
    cursor = None
    while True:
        page = paginator.paginate(
            PageRequest(page_size=page_size, cursor=cursor, direction=direction)
        )
        pages.append(page.items)
        if not page.has_more:
            return pages
        cursor = page.next_cursor


# =============================================================================
# Ordering Helpers
# =============================================================================


class TestOrderingHelpers:
    def test_keyset_key_is_created_at_then_id(self, make_record, base_time):
        record = make_record(base_time, suffix=7)

        assert keyset_key(record) == (base_time, f"{7:024x}")

    def test_is_beyond_breaks_ties_on_id(self, make_record, base_time):
        low = keyset_key(make_record(base_time, suffix=1))
        high = keyset_key(make_record(base_time, suffix=2))

        assert is_beyond(low, high, PageDirection.OLDER)
        assert not is_beyond(high, low, PageDirection.OLDER)
        assert is_beyond(high, low, PageDirection.NEWER)

    def test_is_beyond_is_strict(self, make_record, base_time):
        key = keyset_key(make_record(base_time, suffix=1))

        assert not is_beyond(key, key, PageDirection.OLDER)
        assert not is_beyond(key, key, PageDirection.NEWER)

    def test_in_memory_store_satisfies_protocol(self):
        assert isinstance(InMemoryMessageStore(), MessageStore)


# =============================================================================
# Page Size
# =============================================================================


class TestPageSize:
    @pytest.mark.parametrize("size", [1, 50, 100])
    def test_accepts_sizes_in_range(self, size):
        assert validate_page_size(size, 100) == size

    @pytest.mark.parametrize("size", [0, -1, 101, True, 2.0, "5", None])
    def test_rejects_sizes_out_of_range_or_not_int(self, size):
        with pytest.raises(InvalidPageSizeError) as exc_info:
            validate_page_size(size, 100)

        assert exc_info.value.error_code == "INVALID_PAGE_SIZE"
        assert exc_info.value.details == {"min_page_size": 1, "max_page_size": 100}

    @pytest.mark.parametrize("raw", [None, ""])
    def test_parse_uses_default_when_absent(self, raw):
        assert parse_page_size(raw, default=20, max_page_size=100) == 20

    def test_parse_reads_integer_text(self):
        assert parse_page_size("35", default=20, max_page_size=100) == 35

    @pytest.mark.parametrize("raw", ["abc", "1.5", "0", "101", "-3"])
    def test_parse_rejects_bad_text(self, raw):
        with pytest.raises(InvalidPageSizeError):
            parse_page_size(raw, default=20, max_page_size=100)

    def test_paginator_rejects_page_size_above_configured_max(
        self, paginator_factory, make_record, base_time
    ):
        paginator = paginator_factory([make_record(base_time)], max_page_size=10)

        with pytest.raises(InvalidPageSizeError):
            paginator.paginate(PageRequest(page_size=11))

    def test_paginator_rejects_zero_page_size(self, paginator_factory):
        with pytest.raises(InvalidPageSizeError):
            paginator_factory([]).paginate(PageRequest(page_size=0))


# =============================================================================
# PageRequest
# =============================================================================


class TestPageRequest:
    def test_defaults_to_older(self):
        assert PageRequest(page_size=5).direction is PageDirection.OLDER

    def test_accepts_direction_text(self):
        assert PageRequest(page_size=5, direction="newer").direction is PageDirection.NEWER

    def test_rejects_unknown_direction(self):
        with pytest.raises(ValidationError) as exc_info:
            PageRequest(page_size=5, direction="sideways")

        assert exc_info.value.error_code == "INVALID_DIRECTION"


# =============================================================================
# Paging
# =============================================================================


class TestKeysetPaginator:
    def test_tied_timestamps_scenario(self, paginator_factory, codec, make_record, base_time):
        """
        A(t=10, id=1), B(t=10, id=2), C(t=9, id=3) at page size 2.

        First page is [B, A] with a cursor at A; the second page is [C]
        with no cursor.
        """
        t10 = base_time + timedelta(seconds=10)
        t9 = base_time + timedelta(seconds=9)
        a = make_record(t10, suffix=1)
        b = make_record(t10, suffix=2)
        c = make_record(t9, suffix=3)
        paginator = paginator_factory([a, c, b])

        first = paginator.paginate(PageRequest(page_size=2))

        assert first.items == [b, a]
        assert first.has_more is True
        assert codec.decode(first.next_cursor) == MessageCursorPayload.from_message(a)

        second = paginator.paginate(PageRequest(page_size=2, cursor=first.next_cursor))

        assert second.items == [c]
        assert second.has_more is False
        assert second.next_cursor is None

    def test_exact_fit_has_no_next_cursor(self, paginator_factory, make_record, base_time):
        records = [make_record(base_time + timedelta(seconds=i)) for i in range(3)]

        page = paginator_factory(records).paginate(PageRequest(page_size=3))

        assert len(page.items) == 3
        assert page.has_more is False
        assert page.next_cursor is None

    def test_empty_store_returns_empty_page(self, paginator_factory):
        page = paginator_factory([]).paginate(PageRequest(page_size=5))

        assert page.items == []
        assert page.has_more is False
        assert page.next_cursor is None

    def test_page_size_one_visits_every_record_once_in_order(
        self, paginator_factory, make_record, base_time
    ):
        # Heavy timestamp collisions: 4 records per instant
        records = [
            make_record(base_time + timedelta(milliseconds=i // 4), suffix=100 + i)
            for i in range(12)
        ]

        pages = walk(paginator_factory(records), page_size=1)
        visited = [item for page in pages for item in page]

        assert all(len(page) == 1 for page in pages)
        assert len(visited) == len(records)
        assert len({r.id for r in visited}) == len(records)
        keys = [keyset_key(r) for r in visited]
        assert keys == sorted(keys, reverse=True)
        assert all(a > b for a, b in zip(keys, keys[1:]))

    @pytest.mark.parametrize("page_size", [2, 3, 5, 7])
    def test_chunking_does_not_change_the_sequence(
        self, paginator_factory, make_record, base_time, page_size
    ):
        records = [
            make_record(base_time + timedelta(milliseconds=i // 3), suffix=i)
            for i in range(10)
        ]
        paginator = paginator_factory(records)

        one_by_one = [r for page in walk(paginator, 1) for r in page]
        chunked = [r for page in walk(paginator, page_size) for r in page]

        assert chunked == one_by_one

    def test_inserts_newer_than_cursor_do_not_disturb_next_page(
        self, codec, sink, make_record, base_time
    ):
        records = [make_record(base_time + timedelta(seconds=i)) for i in range(6)]
        store = InMemoryMessageStore(records)
        paginator = KeysetPaginator(store, codec=codec, diagnostics=sink)

        first = paginator.paginate(PageRequest(page_size=2))
        # New messages arrive after the first page was served
        store.add(make_record(base_time + timedelta(seconds=100)))
        store.add(make_record(base_time + timedelta(seconds=101)))
        rest = []
        cursor = first.next_cursor
        while cursor:
            page = paginator.paginate(PageRequest(page_size=2, cursor=cursor))
            rest.extend(page.items)
            cursor = page.next_cursor

        seen = first.items + rest
        assert [r.id for r in seen] == [r.id for r in reversed(records)]

    def test_newer_direction_picks_up_appended_records(
        self, codec, sink, make_record, base_time
    ):
        records = [make_record(base_time + timedelta(seconds=i)) for i in range(3)]
        store = InMemoryMessageStore(records)
        paginator = KeysetPaginator(store, codec=codec, diagnostics=sink)
        newest_cursor = codec.encode(MessageCursorPayload.from_message(records[-1]))

        late = [make_record(base_time + timedelta(seconds=10 + i)) for i in range(3)]
        for record in late:
            store.add(record)

        page = paginator.paginate(
            PageRequest(page_size=2, cursor=newest_cursor, direction=PageDirection.NEWER)
        )

        assert page.items == late[:2]
        assert page.has_more is True
        follow = paginator.paginate(
            PageRequest(
                page_size=2, cursor=page.next_cursor, direction=PageDirection.NEWER
            )
        )
        assert follow.items == late[2:]
        assert follow.next_cursor is None

    def test_newer_walk_is_ascending(self, paginator_factory, make_record, base_time):
        records = [
            make_record(base_time + timedelta(milliseconds=i // 2), suffix=i)
            for i in range(6)
        ]

        pages = walk(paginator_factory(records), 4, direction=PageDirection.NEWER)
        visited = [r for page in pages for r in page]

        assert visited == sorted(records, key=keyset_key)

    def test_deleted_anchor_still_positions_next_page(
        self, codec, sink, make_record, base_time
    ):
        records = [make_record(base_time + timedelta(seconds=i)) for i in range(5)]
        store = InMemoryMessageStore(records)
        paginator = KeysetPaginator(store, codec=codec, diagnostics=sink)

        first = paginator.paginate(PageRequest(page_size=2))
        anchor = first.items[-1]
        store.remove(anchor)

        second = paginator.paginate(PageRequest(page_size=2, cursor=first.next_cursor))

        assert second.items == [records[2], records[1]]

    def test_cursor_past_the_end_returns_empty_page(
        self, paginator_factory, codec, make_record, base_time
    ):
        records = [make_record(base_time + timedelta(seconds=i)) for i in range(1, 4)]
        before_everything = codec.encode(
            MessageCursorPayload(created_at=base_time, id="0" * 24)
        )

        page = paginator_factory(records).paginate(
            PageRequest(page_size=5, cursor=before_everything)
        )

        assert page.items == []
        assert page.has_more is False
        assert page.next_cursor is None

    def test_invalid_cursor_is_raised(self, paginator_factory):
        with pytest.raises(InvalidCursorError):
            paginator_factory([]).paginate(PageRequest(page_size=5, cursor="garbage"))


# =============================================================================
# Diagnostics
# =============================================================================


class TestPaginatorDiagnostics:
    def test_records_served_page(self, paginator_factory, sink, make_record, base_time):
        records = [make_record(base_time + timedelta(seconds=i)) for i in range(3)]

        paginator_factory(records).paginate(PageRequest(page_size=2))

        assert sink.events == [
            (
                "message_page_served",
                logging.INFO,
                {"count": 2, "direction": "older", "first_page": True, "has_more": True},
            )
        ]

    def test_records_rejected_cursor_without_token_content(self, paginator_factory, sink):
        with pytest.raises(InvalidCursorError):
            paginator_factory([]).paginate(PageRequest(page_size=5, cursor="secret-ish"))

        assert sink.events == [
            ("message_cursor_rejected", logging.WARNING, {"length": len("secret-ish")})
        ]

    def test_null_sink_is_accepted(self, codec, make_record, base_time):
        paginator = KeysetPaginator(
            InMemoryMessageStore([make_record(base_time)]),
            codec=codec,
            diagnostics=NullDiagnosticSink(),
        )

        assert len(paginator.paginate(PageRequest(page_size=1)).items) == 1
