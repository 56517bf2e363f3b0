"""secp256k1 engine errors and their mapping into the signing taxonomy."""

from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from ..core.errors import (
    CryptoError,
    InvalidSignatureError,
    InvalidLengthError,
    InvalidPublicKeyError,
    InvalidPrivateKeyError,
    OtherCryptoError,
)


BACKEND_NAME = "secp256k1"


class Secp256k1ErrorKind(Enum):
    """Native failure conditions reported by the secp256k1 engine."""
    INCORRECT_SIGNATURE = "incorrect signature"
    INVALID_MESSAGE = "invalid message"
    INVALID_PUBLIC_KEY = "invalid public key"
    INVALID_SIGNATURE = "invalid signature"
    INVALID_SECRET_KEY = "invalid secret key"
    INVALID_RECOVERY_ID = "invalid recovery id"
    INVALID_TWEAK = "bad tweak"
    NOT_ENOUGH_MEMORY = "not enough memory"


class Secp256k1Error(Exception):
    """Engine-level failure carrying a native error kind."""

    def __init__(self, kind: Secp256k1ErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"secp256k1: {kind.value}" + (f" ({detail})" if detail else ""))


def to_crypto_error(err: Secp256k1Error) -> CryptoError:
    """
    Map an engine error onto exactly one taxonomy error.

    Total over the native kinds: anything unrecognised becomes an
    OtherCryptoError that still names the original condition.
    """
    kind = err.kind
    if kind is Secp256k1ErrorKind.INCORRECT_SIGNATURE:
        return InvalidSignatureError(backend=BACKEND_NAME)
    if kind is Secp256k1ErrorKind.INVALID_MESSAGE:
        return InvalidLengthError(backend=BACKEND_NAME)
    if kind is Secp256k1ErrorKind.INVALID_PUBLIC_KEY:
        return InvalidPublicKeyError(backend=BACKEND_NAME)
    if kind is Secp256k1ErrorKind.INVALID_SIGNATURE:
        return InvalidSignatureError(backend=BACKEND_NAME)
    if kind is Secp256k1ErrorKind.INVALID_SECRET_KEY:
        return InvalidPrivateKeyError(backend=BACKEND_NAME)
    if kind is Secp256k1ErrorKind.INVALID_RECOVERY_ID:
        return InvalidSignatureError(backend=BACKEND_NAME)
    if kind is Secp256k1ErrorKind.INVALID_TWEAK:
        return OtherCryptoError("bad tweak", backend=BACKEND_NAME)
    if kind is Secp256k1ErrorKind.NOT_ENOUGH_MEMORY:
        return OtherCryptoError("not enough memory", backend=BACKEND_NAME)
    return OtherCryptoError(f"unrecognised engine error: {err}", backend=BACKEND_NAME)


@contextmanager
def mapped_errors() -> Iterator[None]:
    """Re-raise engine errors raised in the block as taxonomy errors."""
    try:
        yield
    except Secp256k1Error as e:
        raise to_crypto_error(e) from e
