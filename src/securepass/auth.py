"""
auth.py - Password hashing and verification using Argon2.

Responsibilities:
- Hash user passwords for storage under a HashingConfiguration
- Verify passwords at login time
- Tell the caller when a stored hash should be regenerated

We use Argon2id via argon2-cffi. The encoded hash string carries its own salt
and cost parameters, so a stored hash can be verified without any other
metadata. Hashes are handed out as fixed size buffers: the ASCII hash string,
a NUL terminator, then NUL padding up to HASH_BYTES.

Verification runs the cheap checks (lengths, algorithm tag) before the
expensive Argon2 call.
"""

from __future__ import annotations

import base64
import enum
import logging
from typing import Union

from argon2 import PasswordHasher, Type, extract_parameters
from argon2.exceptions import VerifyMismatchError
from argon2.low_level import ARGON2_VERSION

from .config import HashingConfiguration
from .errors import ValidationError

logger = logging.getLogger(__name__)


PASSWORD_BYTES_MIN = 1
PASSWORD_BYTES_MAX = 4294967295
HASH_BYTES = 128  # encoded hash + NUL terminator + padding
SALT_BYTES = 16
DIGEST_BYTES = 32
PARALLELISM = 1

# Tags of hashes we know how to verify. argon2i hashes verify but always need a rehash.
RECOGNIZED_PREFIXES = (b"$argon2id$", b"$argon2i$")

Password = Union[bytes, str]


class VerificationResult(enum.Enum):
    """Outcome of ``verify_hash``. Members compare by identity only."""

    INVALID_OR_UNRECOGNIZED = 0  # not a hash we produce or support
    INVALID = 1  # wrong password
    VALID = 2
    VALID_NEEDS_REHASH = 3  # right password, hash made under a different policy


def _hasher(config: HashingConfiguration) -> PasswordHasher:
    return PasswordHasher(
        time_cost=config.ops_cost,
        memory_cost=config.memory_cost_kib,
        parallelism=PARALLELISM,
        hash_len=DIGEST_BYTES,
        salt_len=SALT_BYTES,
        type=Type.ID,
    )


def check_password(password: Password) -> bytes:
    """Return the password as bytes, or raise ValidationError if its length is out of bounds."""
    if isinstance(password, str):
        password = password.encode("utf-8")
    if not PASSWORD_BYTES_MIN <= len(password) <= PASSWORD_BYTES_MAX:
        raise ValidationError(
            f"Length of password must be between {PASSWORD_BYTES_MIN} and {PASSWORD_BYTES_MAX} bytes"
        )
    return bytes(password)


def check_hash(hash: bytes) -> bytes:
    """Return the hash buffer, or raise ValidationError if it is not HASH_BYTES long."""
    if len(hash) != HASH_BYTES:
        raise ValidationError(f"Length of hash buffer must be {HASH_BYTES} bytes, got {len(hash)}")
    return bytes(hash)


def pad_hash(encoded: Union[str, bytes]) -> bytes:
    """Place an encoded hash string into a NUL padded HASH_BYTES buffer."""
    if isinstance(encoded, str):
        try:
            encoded = encoded.encode("ascii")
        except UnicodeEncodeError:
            raise ValidationError("Encoded hash must be ASCII") from None
    # at least one byte must remain for the terminator
    if len(encoded) >= HASH_BYTES:
        raise ValidationError(f"Encoded hash must be shorter than {HASH_BYTES} bytes")
    return encoded.ljust(HASH_BYTES, b"\0")


def encode_hash(hash: bytes) -> str:
    """Return the encoded hash string held in a padded buffer (padding dropped)."""
    return _terminated(check_hash(hash)).decode("ascii")


def _terminated(hash: bytes) -> bytes:
    end = hash.find(b"\0")
    return hash if end == -1 else hash[:end]


def hash_password(password: Password, config: HashingConfiguration) -> bytes:
    """Return a HASH_BYTES buffer holding the Argon2id hash of ``password``."""
    password = check_password(password)
    logger.debug("hashing password memory_cost=%d ops_cost=%d", config.memory_cost, config.ops_cost)
    return pad_hash(_hasher(config).hash(password))


def needs_rehash(encoded: str, config: HashingConfiguration) -> bool:
    """
    True when ``encoded`` was not produced under ``config``.

    Any format difference (type, version, lanes, lengths) needs a rehash. For
    cost parameters, a hash stronger on both axes than ``config`` is kept.
    """
    params = extract_parameters(encoded)
    if (
        params.type is not Type.ID
        or params.version != ARGON2_VERSION
        or params.parallelism != PARALLELISM
        or params.hash_len != DIGEST_BYTES
        or params.salt_len != SALT_BYTES
    ):
        return True
    if params.memory_cost == config.memory_cost_kib and params.time_cost == config.ops_cost:
        return False
    return not (params.memory_cost >= config.memory_cost_kib and params.time_cost >= config.ops_cost)


def _well_formed(encoded: str) -> bool:
    """True if the PHC fields parse and salt/digest are valid unpadded base64."""
    try:
        extract_parameters(encoded)
        for field in encoded.rsplit("$", 2)[1:]:
            base64.b64decode(field + "=" * (-len(field) % 4), validate=True)
    except ValueError:  # covers argon2 InvalidHashError and binascii.Error
        return False
    return True


def verify_hash(password: Password, hash: bytes, config: HashingConfiguration) -> VerificationResult:
    """Verify ``password`` against a stored hash buffer and apply the rehash policy of ``config``."""
    password = check_password(password)
    hash = check_hash(hash)

    encoded = _terminated(hash)
    if not encoded.startswith(RECOGNIZED_PREFIXES):
        return VerificationResult.INVALID_OR_UNRECOGNIZED
    try:
        text = encoded.decode("ascii")
    except UnicodeDecodeError:
        return VerificationResult.INVALID_OR_UNRECOGNIZED

    if not _well_formed(text):
        logger.debug("hash body could not be decoded")
        return VerificationResult.INVALID

    # anything other than a mismatch (e.g. memory allocation failure) propagates
    try:
        _hasher(config).verify(text, password)
    except VerifyMismatchError:
        logger.debug("password verification failed")
        return VerificationResult.INVALID

    if needs_rehash(text, config):
        logger.debug("hash verified but needs rehash")
        return VerificationResult.VALID_NEEDS_REHASH
    return VerificationResult.VALID
