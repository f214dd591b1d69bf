"""Studio format transcoding.

A Mii record packs its appearance into big-endian 16 and 32-bit words. The
Studio renderer expects the same attributes one per byte, in a different
order, with a few value remaps, and obfuscated by a rolling add/xor cipher
before they go into the `data=` query parameter.

The conversion is lossy: the name, ids, birthday and creator fields are not
carried over, and the facial feature code collapses into makeup/wrinkles.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from urllib.parse import urlencode

from rfl_core.mii import is_mii
from rfl_core.protocol import (
    DEFAULT_RENDER_TYPE,
    DEFAULT_RENDER_WIDTH,
    STUDIO_IMAGE_URL,
    STUDIO_LEN,
)

# Facial feature code (0..11) -> Studio makeup / wrinkles values.
MAKEUP = (0, 1, 6, 9, 0, 0, 0, 0, 0, 10, 0, 0)
WRINKLES = (0, 0, 0, 0, 5, 2, 3, 7, 8, 0, 9, 11)

Y_SCALE = 3


def _lookup(table: tuple[int, ...]) -> Callable[[int], int]:
    return lambda v: table[v] if v < len(table) else 0


def _zero_is_8(v: int) -> int:
    return 8 if v == 0 else v


def _offset(n: int) -> Callable[[int], int]:
    return lambda v: v + n


def _glasses_color(v: int) -> int:
    if v == 0:
        return 8
    if v < 6:
        return v + 13
    return 0


@dataclass(frozen=True)
class Field:
    name: str
    dest: int
    src: int | None = None  # byte offset of the source word, None for constants
    size: int = 2  # source word size in bytes
    shift: int = 0
    mask: int = 0
    remap: Callable[[int], int] | None = None
    const: int = 0

    def extract(self, record: bytes) -> int:
        if self.src is None:
            return self.const
        word = int.from_bytes(record[self.src : self.src + self.size], "big")
        value = (word >> self.shift) & self.mask
        if self.remap is not None:
            value = self.remap(value)
        return value


FIELDS: tuple[Field, ...] = (
    # Gender and favorite color
    Field("gender", 0x16, 0x00, 2, 14, 0x1),
    Field("favorite_color", 0x15, 0x00, 2, 1, 0xF),
    # Body
    Field("height", 0x1E, 0x16, 1, 0, 0xFF),
    Field("build", 0x02, 0x17, 1, 0, 0xFF),
    # Face
    Field("face_shape", 0x13, 0x20, 2, 13, 0x7),
    Field("skin_color", 0x11, 0x20, 2, 10, 0x7),
    Field("makeup", 0x12, 0x20, 2, 6, 0xF, _lookup(MAKEUP)),
    Field("wrinkles", 0x14, 0x20, 2, 6, 0xF, _lookup(WRINKLES)),
    # Hair
    Field("hair_style", 0x1D, 0x22, 2, 9, 0x7F),
    Field("hair_color", 0x1B, 0x22, 2, 6, 0x7, _zero_is_8),
    Field("hair_flip", 0x1C, 0x22, 2, 5, 0x1),
    # Eyebrows
    Field("eyebrow_style", 0x0E, 0x24, 4, 27, 0x1F),
    Field("eyebrow_rotation", 0x0C, 0x24, 4, 22, 0xF),
    Field("eyebrow_color", 0x0B, 0x24, 4, 13, 0x7, _zero_is_8),
    Field("eyebrow_scale", 0x0D, 0x24, 4, 9, 0xF),
    Field("eyebrow_y_scale", 0x0A, const=Y_SCALE),
    Field("eyebrow_y", 0x10, 0x24, 4, 4, 0x1F),
    Field("eyebrow_x_spacing", 0x0F, 0x24, 4, 0, 0xF),
    # Eyes
    Field("eye_style", 0x07, 0x28, 4, 26, 0x3F),
    Field("eye_rotation", 0x05, 0x28, 4, 21, 0x7),
    Field("eye_y", 0x09, 0x28, 4, 16, 0x1F),
    Field("eye_color", 0x04, 0x28, 4, 13, 0x7, _offset(8)),
    Field("eye_scale", 0x06, 0x28, 4, 9, 0x7),
    Field("eye_y_scale", 0x03, const=Y_SCALE),
    Field("eye_x_spacing", 0x08, 0x28, 4, 5, 0xF),
    # Nose
    Field("nose_style", 0x2C, 0x2C, 2, 12, 0xF),
    Field("nose_scale", 0x2B, 0x2C, 2, 8, 0xF),
    Field("nose_y", 0x2D, 0x2C, 2, 3, 0x1F),
    # Mouth
    Field("mouth_style", 0x26, 0x2E, 2, 11, 0x1F),
    Field("mouth_color", 0x24, 0x2E, 2, 9, 0x3, _offset(19)),
    Field("mouth_scale", 0x25, 0x2E, 2, 5, 0xF),
    Field("mouth_y_scale", 0x23, const=Y_SCALE),
    Field("mouth_y", 0x27, 0x2E, 2, 0, 0x1F),
    # Glasses
    Field("glasses_style", 0x19, 0x30, 2, 12, 0xF),
    Field("glasses_color", 0x17, 0x30, 2, 9, 0x7, _glasses_color),
    Field("glasses_scale", 0x18, 0x30, 2, 5, 0x7),
    Field("glasses_y", 0x1A, 0x30, 2, 0, 0x1F),
    # Facial hair
    Field("mustache_style", 0x29, 0x32, 2, 14, 0x3),
    Field("beard_style", 0x01, 0x32, 2, 12, 0x3),
    Field("beard_color", 0x00, 0x32, 2, 9, 0x7, _zero_is_8),
    Field("mustache_scale", 0x28, 0x32, 2, 5, 0xF),
    Field("mustache_y", 0x2A, 0x32, 2, 0, 0x1F),
    # Mole
    Field("mole_enabled", 0x20, 0x34, 2, 15, 0x1),
    Field("mole_scale", 0x1F, 0x34, 2, 11, 0xF),
    Field("mole_y", 0x22, 0x34, 2, 6, 0x1F),
    Field("mole_x", 0x21, 0x34, 2, 1, 0x1F),
)

assert sorted(f.dest for f in FIELDS) == list(range(STUDIO_LEN))


def studio_fields(record: bytes) -> dict[str, int] | None:
    """Studio attribute values keyed by field name, or None for an empty slot."""
    if not is_mii(record):
        return None
    return {f.name: f.extract(record) for f in FIELDS}


def studio_data(record: bytes) -> bytes | None:
    """Transcode a 74-byte record into the 46-byte Studio layout."""
    if not is_mii(record):
        return None
    out = bytearray(STUDIO_LEN)
    for f in FIELDS:
        out[f.dest] = f.extract(record) & 0xFF
    return bytes(out)


def encode_studio(data: bytes) -> str:
    """Obfuscate Studio data into the hex string the renderer expects.

    Output is a zero seed byte followed by each byte xored with the previous
    output byte plus 7, all as lowercase hex.
    """
    if len(data) != STUDIO_LEN:
        raise ValueError(f"Studio data must be {STUDIO_LEN} bytes, got {len(data)}")
    checksum = 0
    parts = [f"{checksum:02x}"]
    for b in data:
        checksum = (7 + (b ^ checksum)) & 0xFF
        parts.append(f"{checksum:02x}")
    return "".join(parts)


def studio_code(record: bytes) -> str | None:
    data = studio_data(record)
    if data is None:
        return None
    return encode_studio(data)


def render_url(
    code: str,
    render_type: str = DEFAULT_RENDER_TYPE,
    width: int = DEFAULT_RENDER_WIDTH,
    base_url: str = STUDIO_IMAGE_URL,
) -> str:
    """Render URL for an already encoded Studio code."""
    query = urlencode({"data": code, "type": render_type, "width": int(width)})
    return f"{base_url}?{query}"


def studio_url(
    record: bytes,
    render_type: str = DEFAULT_RENDER_TYPE,
    width: int = DEFAULT_RENDER_WIDTH,
    base_url: str = STUDIO_IMAGE_URL,
) -> str | None:
    """Render URL for a record's face, or None for an empty slot."""
    code = studio_code(record)
    if code is None:
        return None
    return render_url(code, render_type, width, base_url)
