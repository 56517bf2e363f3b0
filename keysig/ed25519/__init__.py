"""Ed25519 backend over PyNaCl."""

from .errors import BACKEND_NAME, Ed25519Error, Ed25519ErrorKind, to_crypto_error
from .keys import Ed25519PrivateKey, Ed25519PublicKey, Ed25519Signature

__all__ = [
    "BACKEND_NAME",
    "Ed25519Error",
    "Ed25519ErrorKind",
    "to_crypto_error",
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "Ed25519Signature",
]
