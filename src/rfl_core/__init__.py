"""RFL Core - database layout, checksum and record model."""
from .crc import crc16_xmodem, crc16_xmodem_bytes
from .errors import ContractError, FormatError
from .ids import canonicalize, content_hash, mii_id
from .mii import check_record, empty_record, is_mii, mii_name, record_hex

__all__ = [
    "crc16_xmodem", "crc16_xmodem_bytes",
    "ContractError", "FormatError",
    "canonicalize", "content_hash", "mii_id",
    "check_record", "empty_record", "is_mii", "mii_name", "record_hex",
]
