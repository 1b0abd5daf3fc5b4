"""
safe_base64.py - URL and filename safe base64 without padding.

Responsibilities:
- Encode raw bytes with the ``-``/``_`` alphabet and strip ``=`` padding
- Decode such text back, restoring the padding first
"""

from __future__ import annotations

import base64
import binascii

from .errors import FormatError


def encode(data: bytes) -> str:
    """Return ``data`` as unpadded url-safe base64 text."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def decode(text: str) -> bytes:
    """
    Reverse ``encode``. Missing padding is tolerated.
    Raises FormatError for anything that is not base64 after re-padding.
    """
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise FormatError(f"invalid safe base64 input: {e}") from e
