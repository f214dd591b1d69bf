"""CRC-16/XMODEM checksum used by the database image."""
from __future__ import annotations

POLY = 0x1021


def _table_entry(index: int) -> int:
    crc = index << 8
    for _ in range(8):
        crc = ((crc << 1) ^ POLY) if crc & 0x8000 else (crc << 1)
    return crc & 0xFFFF


TABLE: tuple[int, ...] = tuple(_table_entry(i) for i in range(256))


def crc16_xmodem(data: bytes, crc: int = 0x0000) -> int:
    """Compute CRC-16/XMODEM (poly 0x1021, init 0, no reflection, no xor-out).

    `crc` lets callers continue a running checksum across chunks.
    """
    table = TABLE
    for byte in data:
        crc = ((crc << 8) & 0xFF00) ^ table[((crc >> 8) & 0xFF) ^ byte]
    return crc


def crc16_xmodem_bytes(data: bytes) -> bytes:
    """Return the checksum as it is stored on disk: two bytes, big endian."""
    return crc16_xmodem(data).to_bytes(2, "big")
