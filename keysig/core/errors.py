"""
Canonical signing error taxonomy.

Every backend maps its native failures onto these kinds so callers can branch
on the failure category without knowing which curve engine is in use.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of signing failure kinds."""
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_LENGTH = "invalid_length"
    INVALID_PUBLIC_KEY = "invalid_public_key"
    INVALID_PRIVATE_KEY = "invalid_private_key"
    OTHER = "other"


class CryptoError(Exception):
    """Base class for all taxonomy errors."""

    kind: ErrorKind = ErrorKind.OTHER
    default_message = "Cryptographic operation failed"

    def __init__(self, message: Optional[str] = None, backend: Optional[str] = None):
        """
        Initialize a CryptoError.

        Args:
            message: Human-readable description (defaults per kind)
            backend: Name of the backend that produced the failure, if any
        """
        self.message = message or self.default_message
        self.backend = backend
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r}, backend={self.backend!r})"

    def to_dict(self) -> dict:
        """Convert error to dictionary representation."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "backend": self.backend,
        }


class InvalidSignatureError(CryptoError):
    """Signature is malformed or does not verify."""
    kind = ErrorKind.INVALID_SIGNATURE
    default_message = "Invalid signature"


class InvalidLengthError(CryptoError):
    """Message or digest has the wrong length."""
    kind = ErrorKind.INVALID_LENGTH
    default_message = "Invalid length"


class InvalidPublicKeyError(CryptoError):
    """Public key encoding is malformed or not a valid point."""
    kind = ErrorKind.INVALID_PUBLIC_KEY
    default_message = "Invalid public key"


class InvalidPrivateKeyError(CryptoError):
    """Private key encoding is malformed or out of range."""
    kind = ErrorKind.INVALID_PRIVATE_KEY
    default_message = "Invalid private key"


class OtherCryptoError(CryptoError):
    """
    Backend-specific failure outside the primary kinds.

    The message is diagnostic only; match on the class or ``kind``.
    """
    kind = ErrorKind.OTHER


ERROR_CLASSES = {
    ErrorKind.INVALID_SIGNATURE: InvalidSignatureError,
    ErrorKind.INVALID_LENGTH: InvalidLengthError,
    ErrorKind.INVALID_PUBLIC_KEY: InvalidPublicKeyError,
    ErrorKind.INVALID_PRIVATE_KEY: InvalidPrivateKeyError,
    ErrorKind.OTHER: OtherCryptoError,
}


def error_for_kind(kind: ErrorKind, message: Optional[str] = None, backend: Optional[str] = None) -> CryptoError:
    """Instantiate the taxonomy error class for ``kind``."""
    return ERROR_CLASSES[kind](message, backend=backend)
