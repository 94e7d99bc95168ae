"""
Helper functions for common infrastructure operations.

This module provides domain-agnostic utility functions for:
- Object identifier generation (24-character hex primary keys)
- Object identifier validation
- Millisecond timestamp normalization

These utilities are pure infrastructure - they have no knowledge
of domain concepts like chats, messages, or partners.

Usage:
    from core.helpers import generate_object_id, is_object_id

    pk = generate_object_id()      # "6650b0c2a1f3e9d4c2b10001"
    is_object_id(pk)               # True
    is_object_id("not-an-id")      # False

Identifier Layout:
    Identifiers are 12 bytes rendered as 24 lowercase hex characters:
    - 4 bytes: seconds since the Unix epoch (big-endian)
    - 5 bytes: random value chosen once per process
    - 3 bytes: incrementing counter, seeded randomly

    Identifiers generated later sort after identifiers generated earlier
    in the same process, and string comparison matches byte comparison.
"""

from __future__ import annotations

import itertools
import os
import re
import secrets
import threading
import time
from datetime import datetime, timezone

OBJECT_ID_LENGTH = 24

_OBJECT_ID_RE = re.compile(r"^[0-9a-f]{24}$")

_process_random = secrets.token_bytes(5)
_process_pid = os.getpid()
_counter = itertools.count(secrets.randbelow(0xFFFFFF))
_counter_lock = threading.Lock()


def generate_object_id() -> str:
    """
    Generate a new 24-character hexadecimal object identifier.

    Returns:
        Lowercase hex string of length 24

    Example:
        message_id = generate_object_id()
    """
    global _process_random, _process_pid

    # Forked workers must not share the random segment with their parent
    if os.getpid() != _process_pid:
        _process_random = secrets.token_bytes(5)
        _process_pid = os.getpid()

    with _counter_lock:
        count = next(_counter) & 0xFFFFFF

    raw = (
        int(time.time()).to_bytes(4, "big")
        + _process_random
        + count.to_bytes(3, "big")
    )
    return raw.hex()


def is_object_id(value: object) -> bool:
    """
    Check if a value is a well-formed object identifier.

    Only the canonical form is accepted: exactly 24 lowercase hex characters.
    Upper-case hex is rejected because identifiers are compared as strings.

    Args:
        value: Value to validate

    Returns:
        True if value is a canonical object identifier

    Example:
        is_object_id("507f1f77bcf86cd799439011")  # True
        is_object_id("507F1F77BCF86CD799439011")  # False
    """
    return isinstance(value, str) and bool(_OBJECT_ID_RE.fullmatch(value))


def truncate_to_millis(value: datetime) -> datetime:
    """
    Drop sub-millisecond precision from a datetime.

    Args:
        value: Datetime to normalize

    Returns:
        Datetime with microseconds rounded down to a whole millisecond
    """
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def now_millis() -> datetime:
    """
    Return the current UTC time truncated to whole milliseconds.

    Used as a field default where stored timestamps must round-trip
    through millisecond-precision text without drift.
    """
    return truncate_to_millis(datetime.now(timezone.utc))
