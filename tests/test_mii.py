from __future__ import annotations
from rfl_core.mii import check_record, empty_record, is_mii, mii_name, record_hex

def named(name: str, rest: bytes = b"") -> bytes:
    raw = name.encode("utf-16-be")
    rec = b"\x40\x00" + raw + bytes(20 - len(raw)) + rest
    return rec + bytes(74 - len(rec))

def test_is_mii_requires_74_nonzero_bytes():
    assert not is_mii(empty_record())
    assert not is_mii(None)
    assert not is_mii(b"")
    assert not is_mii(b"\x01" * 73)
    assert not is_mii(b"\x01" * 75)
    assert is_mii(bytes(73) + b"\x01")
    assert is_mii(b"\x01" + bytes(73))

def test_mii_name_stops_at_null_unit():
    assert mii_name(named("A")) == "A"
    assert mii_name(named("Zoë")) == "Zoë"

def test_mii_name_uses_all_ten_units_without_terminator():
    assert mii_name(named("ABCDEFGHIJ")) == "ABCDEFGHIJ"

def test_mii_name_empty_cases():
    assert mii_name(empty_record()) == ""
    # valid record whose name field is all zero
    assert mii_name(b"\x40\x00" + bytes(72)) == ""
    assert mii_name(b"\x01" * 10) == ""

def test_mii_name_tolerates_lone_surrogate():
    rec = b"\x00\x01" + b"\xd8\x00" + b"\x00\x41" + bytes(68)
    assert len(rec) == 74
    name = mii_name(rec)
    assert name == "\ufffdA"

def test_mii_name_high_byte_zero_is_not_terminator():
    # 0x0041 has a zero high byte but is a full code unit
    rec = b"\x00\x01" + b"\x00\x41\x01\x00" + bytes(68)
    assert len(rec) == 74
    assert mii_name(rec) == "AĀ"

def test_check_record():
    assert check_record(bytes(74)) is None
    err = check_record(bytes(73))
    assert err.code == "E_SIZE_MISMATCH"
    assert err.detail == {"expected": 74, "got": 73}
    assert "73" in str(err)

def test_record_hex_is_uppercase():
    assert record_hex(b"\xab\x01") == "AB01"
