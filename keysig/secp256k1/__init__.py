"""secp256k1 ECDSA backend."""

from .errors import BACKEND_NAME, Secp256k1Error, Secp256k1ErrorKind, to_crypto_error
from .keys import Secp256k1PrivateKey, Secp256k1PublicKey, Secp256k1Signature
from .message import HashedMessage

__all__ = [
    "BACKEND_NAME",
    "Secp256k1Error",
    "Secp256k1ErrorKind",
    "to_crypto_error",
    "Secp256k1PrivateKey",
    "Secp256k1PublicKey",
    "Secp256k1Signature",
    "HashedMessage",
]
