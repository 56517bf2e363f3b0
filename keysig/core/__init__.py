"""Backend-independent digest, error and capability types."""

from .digest import Digest, DIGEST_LENGTH
from .errors import (
    ErrorKind,
    CryptoError,
    InvalidSignatureError,
    InvalidLengthError,
    InvalidPublicKeyError,
    InvalidPrivateKeyError,
    OtherCryptoError,
    error_for_kind,
)
from .contracts import PrivateKey, PublicKey, Signature, FixedWidth, ensure_bytes, ensure_digest

__all__ = [
    "Digest",
    "DIGEST_LENGTH",
    "ErrorKind",
    "CryptoError",
    "InvalidSignatureError",
    "InvalidLengthError",
    "InvalidPublicKeyError",
    "InvalidPrivateKeyError",
    "OtherCryptoError",
    "error_for_kind",
    "PrivateKey",
    "PublicKey",
    "Signature",
    "FixedWidth",
    "ensure_bytes",
    "ensure_digest",
]
