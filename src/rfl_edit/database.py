from __future__ import annotations

from typing import Iterator, Sequence
from warnings import warn

from rfl_core.crc import crc16_xmodem_bytes
from rfl_core.errors import ContractError, FormatError
from rfl_core.ids import canonicalize
from rfl_core.mii import check_record, empty_record, is_mii, mii_name
from rfl_core.protocol import (
    AUX_OFFSET,
    AUX_STATIC,
    AUX_STATIC_PAD,
    CHECKSUM_LEN,
    CHECKSUM_OFFSET,
    DATABASE_LEN,
    FILE_HEADER_LEN,
    MAGIC_DATABASE,
    MII_LEN,
    MII_SLOTS,
    PARADE_ENTRIES,
    PARADE_ENTRY,
    PARADE_HEADER,
    PARADE_TABLE_PAD,
    RECORDS_OFFSET,
    RESERVED_LEN,
    RESERVED_OFFSET,
)

# Everything between the records and the checksum, as the console lays it out
# for a database with an empty Mii Parade.
CANONICAL_AUX = (
    AUX_STATIC
    + bytes(AUX_STATIC_PAD)
    + PARADE_HEADER
    + PARADE_ENTRY * PARADE_ENTRIES
    + bytes(PARADE_TABLE_PAD)
)
assert len(CANONICAL_AUX) == CHECKSUM_OFFSET - AUX_OFFSET

_RESERVED_TAIL_OFFSET = RESERVED_OFFSET - AUX_OFFSET


def build_database(records: Sequence[bytes]) -> bytes:
    """Lay out a full database image from 100 records.

    Auxiliary regions are always regenerated in their canonical form and the
    CRC16/XMODEM of bytes [0, CHECKSUM_OFFSET) is written after them.
    """
    if len(records) != MII_SLOTS:
        raise ContractError("E_RECORD_COUNT", f"got {len(records)}")
    for slot, record in enumerate(records):
        if len(record) != MII_LEN:
            raise ContractError("E_RECORD_SIZE", f"slot {slot} holds {len(record)} bytes")

    buf = bytearray(DATABASE_LEN)
    buf[:FILE_HEADER_LEN] = MAGIC_DATABASE
    buf[RECORDS_OFFSET:AUX_OFFSET] = b"".join(bytes(r) for r in records)
    buf[AUX_OFFSET:CHECKSUM_OFFSET] = CANONICAL_AUX
    buf[CHECKSUM_OFFSET:RESERVED_OFFSET] = crc16_xmodem_bytes(memoryview(buf)[:CHECKSUM_OFFSET])
    return bytes(buf)


def parse_database(data: bytes) -> Database | FormatError:
    """Split a database image into its 100 records.

    Only the total length and the header magic are checked. The stored
    checksum and the auxiliary regions are kept as an opaque tail; use
    `rfl_verify` for stricter checks.
    """
    if len(data) != DATABASE_LEN:
        return FormatError("E_SIZE_MISMATCH", {"expected": DATABASE_LEN, "got": len(data)})

    magic = bytes(data[:FILE_HEADER_LEN])
    if magic != MAGIC_DATABASE:
        return FormatError("E_BAD_MAGIC", {"found": magic.hex().upper()})

    records = [
        bytes(data[off : off + MII_LEN])
        for off in range(RECORDS_OFFSET, AUX_OFFSET, MII_LEN)
    ]
    db = Database(records, tail=bytes(data[AUX_OFFSET:]))
    if db.has_foreign_parade:
        warn("Database carries Mii Parade data; it will be reset to the canonical layout on save")
    return db


class Database:
    """100 Mii slots plus the opaque remainder of the image they came from."""

    def __init__(self, records: Sequence[bytes], tail: bytes | None = None):
        if len(records) != MII_SLOTS:
            raise ContractError("E_RECORD_COUNT", f"got {len(records)}")
        self.records: list[bytes] = []
        for slot, record in enumerate(records):
            if len(record) != MII_LEN:
                raise ContractError("E_RECORD_SIZE", f"slot {slot} holds {len(record)} bytes")
            self.records.append(bytes(record))
        if tail is None:
            tail = CANONICAL_AUX + bytes(CHECKSUM_LEN + RESERVED_LEN)
        self.tail = tail

    @classmethod
    def new(cls) -> Database:
        return cls([empty_record() for _ in range(MII_SLOTS)])

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.records)

    def __getitem__(self, slot: int) -> bytes:
        return self.records[self._check_slot(slot)]

    @staticmethod
    def _check_slot(slot: int) -> int:
        if not 0 <= slot < MII_SLOTS:
            raise IndexError(f"slot {slot} out of range 0..{MII_SLOTS - 1}")
        return slot

    @property
    def has_foreign_parade(self) -> bool:
        """True if the parsed tail differs from what `build_database` writes."""
        aux = self.tail[: len(CANONICAL_AUX)]
        reserved = self.tail[_RESERVED_TAIL_OFFSET:]
        return aux != CANONICAL_AUX or reserved != bytes(len(reserved))

    def valid_slots(self) -> list[tuple[int, bytes]]:
        return [(slot, rec) for slot, rec in enumerate(self.records) if is_mii(rec)]

    def find(self, name: str) -> list[int]:
        """Slots whose display name contains `name` (canonicalized)."""
        needle = canonicalize(name)
        return [
            slot
            for slot, rec in self.valid_slots()
            if needle in canonicalize(mii_name(rec))
        ]

    def clear(self, slot: int) -> None:
        self.records[self._check_slot(slot)] = empty_record()

    def swap(self, a: int, b: int) -> None:
        self._check_slot(a)
        self._check_slot(b)
        if a == b:
            return
        self.records[a], self.records[b] = self.records[b], self.records[a]

    def import_record(self, slot: int, data: bytes) -> FormatError | None:
        self._check_slot(slot)
        err = check_record(data)
        if err is not None:
            return err
        self.records[slot] = bytes(data)
        return None

    def export_record(self, slot: int) -> bytes:
        return self.records[self._check_slot(slot)]

    def clean(self, selected: int | None = None) -> int | None:
        """Move every valid record to the front, keeping their order.

        Returns the new index of `selected` if it held a Mii, else None.
        """
        new_selected = None
        if selected is not None and is_mii(self[selected]):
            new_selected = sum(1 for rec in self.records[:selected] if is_mii(rec))

        valid = [rec for rec in self.records if is_mii(rec)]
        self.records = valid + [empty_record() for _ in range(MII_SLOTS - len(valid))]
        return new_selected

    def to_bytes(self) -> bytes:
        return build_database(self.records)
