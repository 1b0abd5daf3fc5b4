"""securepass - Argon2id password hashing and Poly1305 one-time auth codes."""

from .auth import (
    HASH_BYTES,
    PASSWORD_BYTES_MAX,
    PASSWORD_BYTES_MIN,
    SALT_BYTES,
    VerificationResult,
    hash_password,
    verify_hash,
)
from .config import PRESETS, HashingConfiguration, load_configuration
from .errors import ConfigurationError, FormatError, SecurePassError, ValidationError
from .onetimeauth import KEY_BYTES, MAC_BYTES, OneTimeAuth, generate_one_time_auth, verify_one_time_auth
from .safe_base64 import decode as from_safe_base64, encode as to_safe_base64
from .service import SecurePass
from .tokens import OneTimeAuthCode, generate_one_time_auth_code, verify_one_time_auth_code

__version__ = "1.0.0"
