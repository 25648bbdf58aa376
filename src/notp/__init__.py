"""HOTP and TOTP one-time password generation and verification."""

from notp import hotp, totp
from notp.errors import BackendUnavailableError, ConfigurationError, NotpError
from notp.hotp import VerifyResult
from notp.options import Options

__all__ = [
    "BackendUnavailableError",
    "ConfigurationError",
    "NotpError",
    "Options",
    "VerifyResult",
    "hotp",
    "totp",
]

__version__ = "1.0.0"
