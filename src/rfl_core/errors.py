"""Error catalogue and result types shared by the editor and the verifier."""
from __future__ import annotations

from dataclasses import dataclass, field

ERRORS = {
    "E_SIZE_MISMATCH": "Incorrect data size",
    "E_BAD_MAGIC": "Invalid file header, not a Mii database",
    "E_RECORD_COUNT": "Database must hold exactly 100 records",
    "E_RECORD_SIZE": "Mii record must be exactly 74 bytes",
}


@dataclass(frozen=True)
class FormatError:
    """A structural problem with input bytes, returned instead of raised."""

    code: str
    detail: dict = field(default_factory=dict)

    @property
    def message(self) -> str:
        return ERRORS[self.code]

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, **self.detail}

    def __str__(self) -> str:
        if not self.detail:
            return self.message
        extra = ", ".join(f"{k}={v}" for k, v in self.detail.items())
        return f"{self.message} ({extra})"


class ContractError(ValueError):
    """Raised when a caller breaks the database shape invariants."""

    def __init__(self, code: str, detail: str = ""):
        self.code = code
        msg = ERRORS[code]
        super().__init__(f"{msg}: {detail}" if detail else msg)
