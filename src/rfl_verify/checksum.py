from rfl_core.crc import crc16_xmodem
from rfl_core.protocol import CHECKSUM_LEN, CHECKSUM_OFFSET, MAGIC_PARADE, PARADE_OFFSET

def stored_checksum(image: bytes) -> int:
    return int.from_bytes(image[CHECKSUM_OFFSET:CHECKSUM_OFFSET + CHECKSUM_LEN], "big")

def compute_checksum(image: bytes) -> int:
    return crc16_xmodem(memoryview(image)[:CHECKSUM_OFFSET])

def has_parade_header(image: bytes) -> bool:
    return image[PARADE_OFFSET:PARADE_OFFSET + len(MAGIC_PARADE)] == MAGIC_PARADE
