from __future__ import annotations
from rfl_core.crc import TABLE, crc16_xmodem, crc16_xmodem_bytes
from rfl_core.protocol import CHECKSUM_OFFSET
from rfl_edit.database import Database

def test_crc_empty_is_zero():
    assert crc16_xmodem(b"") == 0x0000
    assert crc16_xmodem_bytes(b"") == b"\x00\x00"

def test_crc_xmodem_check_value():
    assert crc16_xmodem(b"123456789") == 0x31C3
    assert crc16_xmodem_bytes(b"123456789") == b"\x31\xc3"

def test_crc_table_matches_reference_entries():
    assert len(TABLE) == 256
    assert TABLE[0] == 0x0000
    assert TABLE[1] == 0x1021
    assert TABLE[0x80] == 0x9188
    assert TABLE[255] == 0x1EF0

def test_crc_can_continue_across_chunks():
    data = bytes(range(256)) * 3
    assert crc16_xmodem(data[100:], crc16_xmodem(data[:100])) == crc16_xmodem(data)

def test_crc_of_empty_database_prefix_is_pinned():
    image = Database.new().to_bytes()
    assert crc16_xmodem(image[:CHECKSUM_OFFSET]) == 0x9AFF
    assert image[CHECKSUM_OFFSET:CHECKSUM_OFFSET + 2] == b"\x9a\xff"

def test_crc_changes_with_record_contents():
    db = Database.new()
    db.import_record(0, b"\x01" + bytes(73))
    image = db.to_bytes()
    assert image[CHECKSUM_OFFSET:CHECKSUM_OFFSET + 2] == b"\xff\x01"
