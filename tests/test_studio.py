from __future__ import annotations
from urllib.parse import parse_qs, urlparse

import pytest

from rfl_core.mii import empty_record
from rfl_edit.studio import (
    FIELDS,
    MAKEUP,
    WRINKLES,
    encode_studio,
    render_url,
    studio_code,
    studio_data,
    studio_fields,
    studio_url,
)

# Reference conversion produced by the original web editor.
GOLDEN_RECORD = bytes.fromhex(
    "400a004d00690069000000000000000000000000000040200000000000000000"
    "abd0f51a3f6489aed3f81d42678cb1d6fb20456a8fb4"
) + bytes(20)
GOLDEN_STUDIO = bytes.fromhex(
    "02002003080706340a1803040d04070e1a02000500050112010f0004007a4001011a1e03130e16160b010a070611"
)
GOLDEN_CODE = "000910373b3a44498495949ea1b3bec0d5d6dbe2eef5f7fdf6fef8ff02097a41474d5e474b5f58554a4850616d726a"

MINIMAL_RECORD = bytes(73) + b"\x01"
MINIMAL_STUDIO = bytes.fromhex(
    "08000003080000000000030800000000000000000000000800000008000000000000000313000000000000000000"
)
MINIMAL_CODE = "000f161d25343b424950575b5a61686f767d848b9299a0a7b6bdc4cbcad1d8dfe6edf4fbfff3fa01080f161d242b32"

def with_word(offset: int, value: int, size: int = 2) -> bytes:
    rec = bytearray(74)
    rec[73] = 1  # keep the record valid
    rec[offset:offset + size] = value.to_bytes(size, "big")
    return bytes(rec)

def field(name: str):
    return next(f for f in FIELDS if f.name == name)

def test_every_destination_written_once():
    dests = [f.dest for f in FIELDS]
    assert sorted(dests) == list(range(46))

def test_golden_conversion():
    assert len(GOLDEN_RECORD) == 74
    assert studio_data(GOLDEN_RECORD) == GOLDEN_STUDIO
    assert studio_code(GOLDEN_RECORD) == GOLDEN_CODE

def test_minimal_record_defaults():
    assert studio_data(MINIMAL_RECORD) == MINIMAL_STUDIO
    assert studio_code(MINIMAL_RECORD) == MINIMAL_CODE

def test_empty_slot_has_no_studio_data():
    assert studio_data(empty_record()) is None
    assert studio_code(empty_record()) is None
    assert studio_fields(empty_record()) is None
    assert studio_url(empty_record()) is None
    assert studio_data(b"\x01" * 10) is None

def test_conversion_is_pure():
    assert studio_data(GOLDEN_RECORD) == studio_data(GOLDEN_RECORD)
    assert studio_code(GOLDEN_RECORD) == studio_code(GOLDEN_RECORD)

def test_y_scales_are_constant():
    for rec in (MINIMAL_RECORD, GOLDEN_RECORD, b"\xff" * 74):
        data = studio_data(rec)
        assert data[0x0A] == 3
        assert data[0x03] == 3
        assert data[0x23] == 3

def test_color_zero_means_slot_8():
    data = studio_data(MINIMAL_RECORD)
    assert data[0x1B] == 8  # hair
    assert data[0x0B] == 8  # eyebrow
    assert data[0x00] == 8  # beard
    assert data[0x17] == 8  # glasses

    assert studio_data(with_word(0x22, 3 << 6))[0x1B] == 3
    assert studio_data(with_word(0x24, 5 << 13, 4))[0x0B] == 5
    assert studio_data(with_word(0x32, 7 << 9))[0x00] == 7

@pytest.mark.parametrize("raw,expected", [(0, 8), (1, 14), (5, 18), (6, 0), (7, 0)])
def test_glasses_color_remap(raw, expected):
    assert studio_data(with_word(0x30, raw << 9))[0x17] == expected

@pytest.mark.parametrize("code", range(16))
def test_facial_feature_tables(code):
    fields = studio_fields(with_word(0x20, code << 6))
    expected_makeup = MAKEUP[code] if code < 12 else 0
    expected_wrinkles = WRINKLES[code] if code < 12 else 0
    assert fields["makeup"] == expected_makeup
    assert fields["wrinkles"] == expected_wrinkles

def test_offsets_for_eye_and_mouth_color():
    assert studio_data(with_word(0x28, 0 << 13, 4))[0x04] == 8
    assert studio_data(with_word(0x28, 7 << 13, 4))[0x04] == 15
    assert studio_data(with_word(0x2E, 0 << 9))[0x24] == 19
    assert studio_data(with_word(0x2E, 3 << 9))[0x24] == 22

def test_top_bits_of_wide_words():
    assert studio_fields(with_word(0x24, 0x1F << 27, 4))["eyebrow_style"] == 0x1F
    assert studio_fields(with_word(0x28, 0x3F << 26, 4))["eye_style"] == 0x3F
    assert studio_fields(with_word(0x22, 0x7F << 9))["hair_style"] == 0x7F
    assert studio_fields(with_word(0x34, 1 << 15))["mole_enabled"] == 1
    assert studio_fields(with_word(0x00, 1 << 14))["gender"] == 1

def test_height_and_build_copied_verbatim():
    rec = bytearray(MINIMAL_RECORD)
    rec[0x16] = 0x7F
    rec[0x17] = 0x11
    data = studio_data(bytes(rec))
    assert data[0x1E] == 0x7F
    assert data[0x02] == 0x11

def test_field_extract_masks_neighbours():
    f = field("nose_scale")
    assert f.extract(with_word(0x2C, 0xFFFF)) == 0xF
    assert f.extract(with_word(0x2C, 0xF0FF)) == 0x0

def test_studio_fields_match_studio_data():
    fields = studio_fields(GOLDEN_RECORD)
    data = studio_data(GOLDEN_RECORD)
    for f in FIELDS:
        assert data[f.dest] == fields[f.name]

def test_encode_all_zero_studio_record():
    code = encode_studio(bytes(46))
    assert len(code) == 94
    assert code.startswith("0007")
    assert code == "00" + "".join(f"{(7 * k) & 0xFF:02x}" for k in range(1, 47))

def test_encode_rejects_other_lengths():
    with pytest.raises(ValueError):
        encode_studio(bytes(45))
    with pytest.raises(ValueError):
        encode_studio(bytes(47))

def test_encode_is_lowercase_hex():
    code = encode_studio(b"\xff" * 46)
    assert code == code.lower()
    assert code[:4] == "0006"  # (7 + 0xff) & 0xff

def test_studio_url():
    url = studio_url(GOLDEN_RECORD)
    parsed = urlparse(url)
    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://studio.mii.nintendo.com/miis/image.png"
    assert parse_qs(parsed.query) == {"data": [GOLDEN_CODE], "type": ["face"], "width": ["512"]}

    url = studio_url(GOLDEN_RECORD, render_type="all_body", width=270, base_url="http://localhost/img.png")
    assert url == f"http://localhost/img.png?data={GOLDEN_CODE}&type=all_body&width=270"

def test_render_url_matches_studio_url():
    assert render_url(GOLDEN_CODE) == studio_url(GOLDEN_RECORD)
    assert render_url("00 07", render_type="face", width=96, base_url="http://x/i.png") == "http://x/i.png?data=00+07&type=face&width=96"
