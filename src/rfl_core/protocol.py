"""RFL database protocol constants.

Single source of truth for on-disk magic values and the database layout.
Keep this file stable. The editor, the verifier and the tools must agree on it.
"""

# File magics
MAGIC_DATABASE = b"RNOD"  # Database header
MAGIC_PARADE = b"RNHD"  # Mii Parade table header

# Database image: [Magic(4) | Records(100 x 74) | Aux | CRC(2) | Reserved]
DATABASE_LEN = 779968
FILE_HEADER_LEN = 4

MII_LEN = 74
MII_SLOTS = 100
RECORDS_OFFSET = FILE_HEADER_LEN
RECORDS_LEN = MII_LEN * MII_SLOTS  # 7400

# Auxiliary regions following the records
AUX_OFFSET = RECORDS_OFFSET + RECORDS_LEN  # 7404
AUX_STATIC = b"\x80"
AUX_STATIC_PAD = 19

PARADE_OFFSET = AUX_OFFSET + len(AUX_STATIC) + AUX_STATIC_PAD  # 7424
PARADE_HEADER = MAGIC_PARADE + b"\xff\xff\xff\xff"
PARADE_ENTRY = bytes(8) + b"\x7f\xff\x7f\xff"  # Mii ID (4) | System ID (4) | 7FFF 7FFF
PARADE_ENTRIES = 10000
PARADE_TABLE_OFFSET = PARADE_OFFSET + len(PARADE_HEADER)  # 7432
PARADE_TABLE_LEN = len(PARADE_ENTRY) * PARADE_ENTRIES  # 120000
PARADE_TABLE_PAD = 22

CHECKSUM_OFFSET = PARADE_TABLE_OFFSET + PARADE_TABLE_LEN + PARADE_TABLE_PAD  # 127454
CHECKSUM_LEN = 2
RESERVED_OFFSET = CHECKSUM_OFFSET + CHECKSUM_LEN  # 127456
RESERVED_LEN = DATABASE_LEN - RESERVED_OFFSET  # 652512

# Record fields
NAME_OFFSET = 2
NAME_UNITS = 10  # UTF-16BE code units
NAME_LEN = NAME_UNITS * 2

# Studio format
STUDIO_LEN = 46
STUDIO_IMAGE_URL = "https://studio.mii.nintendo.com/miis/image.png"
DEFAULT_RENDER_TYPE = "face"
DEFAULT_RENDER_WIDTH = 512
