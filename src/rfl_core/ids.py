"""RFL database tools - deterministic identity functions."""
from __future__ import annotations

import base64
import hashlib
import unicodedata


def canonicalize(text: str) -> str:
    """Canonicalize text for name matching: NFKC, casefold, whitespace normalize."""
    if not text:
        return ""
    t = unicodedata.normalize("NFKC", text).casefold()
    return " ".join(t.split())


def _hash(b: bytes, prefix: str) -> str:
    """Compute truncated SHA-256 hash with base32 encoding."""
    h = hashlib.sha256(b).digest()[:15]
    return prefix + base64.b32encode(h).decode("ascii").lower().rstrip("=")


def mii_id(record: bytes) -> str:
    """Stable id of a record's content, independent of the slot it sits in."""
    return _hash(bytes(record), "m_")


def content_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()
