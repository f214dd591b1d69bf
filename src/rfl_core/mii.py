"""Mii record model: validity, display name and single-record checks."""
from __future__ import annotations

from .errors import FormatError
from .protocol import MII_LEN, NAME_OFFSET, NAME_UNITS


def empty_record() -> bytes:
    return bytes(MII_LEN)


def is_mii(record: bytes | None) -> bool:
    """True if `record` is a 74-byte block with at least one non-zero byte."""
    if not record or len(record) != MII_LEN:
        return False
    return any(record)


def mii_name(record: bytes | None) -> str:
    """Decode the UTF-16BE name at offset 2, stopping at the first null unit.

    Returns "" for an empty slot.
    """
    if not is_mii(record):
        return ""
    raw = record[NAME_OFFSET : NAME_OFFSET + NAME_UNITS * 2]
    units = 0
    while units < NAME_UNITS and raw[units * 2 : units * 2 + 2] != b"\x00\x00":
        units += 1
    return raw[: units * 2].decode("utf-16-be", "replace")


def check_record(data: bytes) -> FormatError | None:
    """Validate a raw `.mii` import buffer (no header, exactly 74 bytes)."""
    if len(data) != MII_LEN:
        return FormatError("E_SIZE_MISMATCH", {"expected": MII_LEN, "got": len(data)})
    return None


def record_hex(record: bytes) -> str:
    return record.hex().upper()
