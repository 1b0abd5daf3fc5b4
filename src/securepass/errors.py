"""
errors.py - Exception types raised by securepass.

Verification outcomes (invalid password, unrecognised hash, rehash needed) are
not errors; they are returned as ``auth.VerificationResult`` values.
"""

from __future__ import annotations


class SecurePassError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(SecurePassError):
    """A cost parameter is outside its allowed bounds."""


class ValidationError(SecurePassError):
    """A password or hash buffer has a length outside its contractual bounds."""


class FormatError(SecurePassError):
    """Safe-base64 text or a one-time auth code could not be decoded."""
