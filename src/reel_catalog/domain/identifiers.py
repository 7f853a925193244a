"""Record identifiers.

Ids are 128-bit values rendered as 32 lowercase hex characters. The top 48
bits hold the creation time in milliseconds and ids minted by one process are
strictly increasing, so ascending id order follows insertion order.
"""

from __future__ import annotations

import os
import re
import threading
import time
import uuid

from reel_catalog.domain.errors import InvalidIdError

_HEX_ID = re.compile(r"[0-9a-fA-F]{32}")

_lock = threading.Lock()
_last_value = 0


def new_record_id() -> uuid.UUID:
    global _last_value

    timestamp_ms = time.time_ns() // 1_000_000
    value = (timestamp_ms & 0xFFFF_FFFF_FFFF) << 80 | int.from_bytes(os.urandom(10), "big")

    # Version 7 / RFC 4122 variant bits
    value = (value & ~(0xF << 76)) | (0x7 << 76)
    value = (value & ~(0x3 << 62)) | (0x2 << 62)

    with _lock:
        if value <= _last_value:
            value = _last_value + 1
        _last_value = value

    return uuid.UUID(int=value)


def to_hex(record_id: uuid.UUID) -> str:
    return record_id.hex


def parse_record_id(value: str) -> uuid.UUID:
    """
    Parse the external hex form of an id.

    Raises:
        InvalidIdError: If value is not exactly 32 hex characters
    """
    if not isinstance(value, str) or not _HEX_ID.fullmatch(value):
        raise InvalidIdError(str(value))

    return uuid.UUID(hex=value)
