"""
onetimeauth.py - One-time message authentication (Poly1305).

Responsibilities:
- Generate a fresh random key per message and tag the message with it
- Verify a (mac, message, key) triple in constant time

Design notes:
- Poly1305 comes from the cryptography package; keys come from os.urandom.
- A key must authenticate exactly one message. generate_one_time_auth draws a
  new key on every call and the caller keeps it secret; the mac and message
  may be handed to whoever holds the token.
"""

from __future__ import annotations

import logging
import os
from typing import NamedTuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.poly1305 import Poly1305

logger = logging.getLogger(__name__)


MAC_BYTES = 16
KEY_BYTES = 32


class OneTimeAuth(NamedTuple):
    mac: bytes
    message: bytes
    key: bytes  # secret


def new_key() -> bytes:
    """Generate a new random one-time key."""
    return os.urandom(KEY_BYTES)


def generate_one_time_auth(message: bytes) -> OneTimeAuth:
    """Tag ``message`` with a freshly generated key and return (mac, message, key)."""
    key = new_key()
    mac = Poly1305.generate_tag(key, message)
    return OneTimeAuth(mac=mac, message=message, key=key)


def verify_one_time_auth(mac: bytes, message: bytes, key: bytes) -> bool:
    """Return True only if ``mac`` is the tag of ``message`` under ``key``."""
    if len(key) != KEY_BYTES or len(mac) != MAC_BYTES:
        logger.debug("rejecting one-time auth with key length %d, mac length %d", len(key), len(mac))
        return False
    try:
        Poly1305.verify_tag(key, message, mac)
    except InvalidSignature:
        return False
    return True
