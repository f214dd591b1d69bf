from pathlib import Path

from rfl_core.errors import FormatError
from rfl_core.mii import is_mii
from rfl_edit.database import parse_database
from .const import ERRORS
from .checksum import compute_checksum, has_parade_header, stored_checksum

def _fail(code: str, **detail) -> dict:
    errors = [{"code": code, "message": ERRORS[code], **detail}]
    return {"status": "FAIL", "error_count": len(errors), "errors": errors}

def verify_image(image: bytes) -> dict:
    # Structural checks first, shared with the editor's parser.
    result = parse_database(image)
    if isinstance(result, FormatError):
        return {"status": "FAIL", "error_count": 1, "errors": [result.as_dict()]}

    if not has_parade_header(image):
        return _fail("E_PARADE_MAGIC")

    stored = stored_checksum(image)
    computed = compute_checksum(image)
    if stored != computed:
        return _fail("E_CHECKSUM_MISMATCH", expected=f"{stored:04X}", computed=f"{computed:04X}")

    return {
        "status": "PASS",
        "error_count": 0,
        "errors": [],
        "miis": sum(1 for rec in result if is_mii(rec)),
        "checksum": f"{stored:04X}",
    }

def verify_database(path: Path) -> dict:
    path = Path(path)
    if not path.is_file():
        return _fail("E_LAYOUT_MISSING", path=str(path))
    return verify_image(path.read_bytes())
