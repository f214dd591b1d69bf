from rfl_core.errors import ERRORS as CORE_ERRORS

ERRORS = {
  **CORE_ERRORS,
  "E_LAYOUT_MISSING": "Database file missing",
  "E_CHECKSUM_MISMATCH": "Stored CRC16 does not match database contents",
  "E_PARADE_MAGIC": "Mii Parade header RNHD missing",
}
