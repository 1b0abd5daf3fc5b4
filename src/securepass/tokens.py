"""
tokens.py - Printable one-time auth codes.

A code packs a message and its Poly1305 mac into one string:

    safe_base64(message) + "~" + safe_base64(mac)

"~" is outside the safe base64 alphabet, so the first "~" always splits the
two halves. The key returned alongside a code stays with the issuer.
"""

from __future__ import annotations

from typing import NamedTuple, Tuple

from . import onetimeauth, safe_base64
from .errors import FormatError

SEPARATOR = "~"


class OneTimeAuthCode(NamedTuple):
    code: str
    key: bytes  # secret


def generate_one_time_auth_code(message: bytes) -> OneTimeAuthCode:
    """Authenticate ``message`` and return the printable code plus its key."""
    ota = onetimeauth.generate_one_time_auth(message)
    code = safe_base64.encode(ota.message) + SEPARATOR + safe_base64.encode(ota.mac)
    return OneTimeAuthCode(code=code, key=ota.key)


def split_code(code: str) -> Tuple[bytes, bytes]:
    """Return (message, mac) decoded from ``code``. Raises FormatError if malformed."""
    message_part, sep, mac_part = code.partition(SEPARATOR)
    if not sep:
        raise FormatError("one-time auth code has no separator")
    return safe_base64.decode(message_part), safe_base64.decode(mac_part)


def verify_one_time_auth_code(code: str, key: bytes) -> bool:
    """Check a code produced by ``generate_one_time_auth_code`` against its key."""
    message, mac = split_code(code)
    return onetimeauth.verify_one_time_auth(mac, message, key)
