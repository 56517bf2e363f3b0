"""keysig - backend-agnostic signing over fixed-width keys and digests."""

from .core import (
    Digest,
    DIGEST_LENGTH,
    ErrorKind,
    CryptoError,
    InvalidSignatureError,
    InvalidLengthError,
    InvalidPublicKeyError,
    InvalidPrivateKeyError,
    OtherCryptoError,
    PrivateKey,
    PublicKey,
    Signature,
)
from .backends import Backend, UnknownBackendError, available_backends, get_backend
from .config import Settings
from .signing import parse_private_key, parse_public_key, parse_signature, sign_digest, verify_signature

__version__ = "0.1.0"

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
    "PrivateKey",
    "PublicKey",
    "Signature",
    "Backend",
    "UnknownBackendError",
    "available_backends",
    "get_backend",
    "Settings",
    "parse_private_key",
    "parse_public_key",
    "parse_signature",
    "sign_digest",
    "verify_signature",
]
