"""
Opaque cursor tokens for message history pagination.

A cursor marks the position of the last message a client has seen as the
pair (created_at, id). The pair is serialized to JSON, base64 encoded and
signed with Django's signing framework, producing a URL-safe token:

    eyJjcmVhdGVkQXQiOiIyMDI0LTAxLTAxVDAwOjAwOjAwLjAwMFoiLCJpZCI6Ii4uLiJ9:Xq3...

Clients pass the token back verbatim (?cursor=<token>). They can read the
base64 segment but cannot produce a token the server accepts, because any
edit invalidates the signature.

Token Payload:
    {"createdAt": "2024-01-01T00:00:00.000Z", "id": "507f1f77bcf86cd799439011"}

    createdAt: UTC timestamp, millisecond precision, trailing "Z". A value is
        canonical only if formatting its parsed instant yields the same text.
    id: 24 lowercase hex characters (the message primary key).

Nothing else is embedded in the token.

Usage:
    from chat.cursors import MessageCursorPayload, decode_message_cursor, encode_message_cursor

    token = encode_message_cursor(MessageCursorPayload.from_message(last_message))
    payload = decode_message_cursor(token)  # raises InvalidCursorError
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from django.core import signing

from core.helpers import is_object_id

from chat.constants import PAGINATION_CONFIG
from chat.exceptions import InvalidCursorError

if TYPE_CHECKING:
    from typing import Any

# Longer tokens are rejected before any decoding work
MAX_TOKEN_LENGTH = 512

_CANONICAL_TIMESTAMP_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$"
)
_PAYLOAD_KEYS = frozenset({"createdAt", "id"})


# =============================================================================
# Canonical Timestamps
# =============================================================================


def format_timestamp(value: datetime) -> str:
    """
    Render an aware datetime in canonical cursor form.

    Args:
        value: Timezone-aware datetime

    Returns:
        "YYYY-MM-DDTHH:MM:SS.mmmZ" in UTC

    Raises:
        ValueError: If value is naive
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("Cursor timestamps must be timezone-aware")
    value = value.astimezone(timezone.utc)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond // 1000:03d}Z"
    )


def parse_timestamp(text: str) -> datetime:
    """
    Parse a canonical cursor timestamp.

    Only text that format_timestamp() would produce is accepted, so a
    parsed value always formats back to the identical string.

    Args:
        text: Canonical timestamp string

    Returns:
        Aware UTC datetime with millisecond precision

    Raises:
        ValueError: If text is not canonical
    """
    if not isinstance(text, str) or not _CANONICAL_TIMESTAMP_RE.fullmatch(text):
        raise ValueError("Timestamp is not in canonical form")

    parsed = datetime.strptime(text, "%Y-%m-%dT%H:%M:%S.%fZ").replace(
        tzinfo=timezone.utc
    )
    if format_timestamp(parsed) != text:
        raise ValueError("Timestamp does not round-trip")
    return parsed


# =============================================================================
# Payload
# =============================================================================


@dataclass(frozen=True)
class MessageCursorPayload:
    """
    Decoded form of a message history cursor.

    Attributes:
        created_at: Creation time of the anchor message (aware, UTC,
            whole milliseconds)
        id: Primary key of the anchor message

    The anchor message may since have been deleted; the payload still
    positions the next page because only the stored values are compared.
    """

    created_at: datetime
    id: str

    def __post_init__(self):
        if not isinstance(self.created_at, datetime):
            raise ValueError("created_at must be a datetime")
        # Normalizes to UTC and rejects naive or sub-millisecond values
        canonical = parse_timestamp(format_timestamp(self.created_at))
        if canonical != self.created_at:
            raise ValueError("created_at must have millisecond precision")
        if not is_object_id(self.id):
            raise ValueError("id must be 24 lowercase hex characters")
        object.__setattr__(self, "created_at", canonical)

    @classmethod
    def from_message(cls, message: Any) -> MessageCursorPayload:
        """Build the cursor that positions the page after message."""
        return cls(created_at=message.created_at, id=message.id)

    @classmethod
    def from_dict(cls, data: Any) -> MessageCursorPayload:
        """
        Build a payload from its JSON object form.

        Raises:
            ValueError: If data is not an object with exactly the two
                expected keys, or a field is malformed
        """
        if not isinstance(data, dict) or set(data) != _PAYLOAD_KEYS:
            raise ValueError("Cursor payload has the wrong shape")
        if not isinstance(data["id"], str):
            raise ValueError("Cursor id must be a string")
        return cls(created_at=parse_timestamp(data["createdAt"]), id=data["id"])

    def to_dict(self) -> dict[str, str]:
        """Return the JSON object form embedded in tokens."""
        return {"createdAt": format_timestamp(self.created_at), "id": self.id}

    @property
    def key(self) -> tuple[datetime, str]:
        """The (created_at, id) pair the keyset comparison uses."""
        return (self.created_at, self.id)


# =============================================================================
# Codec
# =============================================================================


class MessageCursorCodec:
    """
    Signs and verifies message cursor tokens.

    Pure and stateless apart from the signing key; one instance can serve
    any number of concurrent requests.

    Args:
        key: Signing key (defaults to settings.SECRET_KEY)
        salt: Signature namespace (defaults to PAGINATION_CONFIG.CURSOR_SALT)

    Example:
        codec = MessageCursorCodec(key="test-key")
        token = codec.encode(payload)
        assert codec.decode(token) == payload
    """

    def __init__(self, key: str | None = None, salt: str | None = None):
        self.key = key
        self.salt = salt or PAGINATION_CONFIG.CURSOR_SALT

    def _signer(self) -> signing.Signer:
        return signing.Signer(key=self.key, salt=self.salt)

    def encode(self, payload: MessageCursorPayload) -> str:
        """
        Encode a payload as an opaque, URL-safe token.

        Args:
            payload: Cursor payload derived from a fetched message

        Returns:
            Signed token string
        """
        return self._signer().sign_object(payload.to_dict())

    def decode(self, token: str) -> MessageCursorPayload:
        """
        Decode and verify a client-supplied token.

        Args:
            token: Token previously returned by encode()

        Returns:
            The reconstructed payload

        Raises:
            InvalidCursorError: For any malformed, tampered or non-canonical
                token. The error never carries parsing detail.
        """
        if not isinstance(token, str) or not token or len(token) > MAX_TOKEN_LENGTH:
            raise InvalidCursorError()
        try:
            data = self._signer().unsign_object(token)
            return MessageCursorPayload.from_dict(data)
        except (signing.BadSignature, ValueError, TypeError, UnicodeError):
            # Collapse every cause into one opaque error
            raise InvalidCursorError() from None


def encode_message_cursor(payload: MessageCursorPayload, key: str | None = None) -> str:
    """Encode a payload with the default codec."""
    return MessageCursorCodec(key=key).encode(payload)


def decode_message_cursor(token: str, key: str | None = None) -> MessageCursorPayload:
    """Decode a token with the default codec (raises InvalidCursorError)."""
    return MessageCursorCodec(key=key).decode(token)
