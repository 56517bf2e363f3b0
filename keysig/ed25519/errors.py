"""Ed25519 (libsodium) errors and their mapping into the signing taxonomy."""

from contextlib import contextmanager
from enum import Enum
from typing import Iterator

import nacl.exceptions

from ..core.errors import CryptoError, ErrorKind, error_for_kind


BACKEND_NAME = "ed25519"


class Ed25519ErrorKind(Enum):
    """Failure conditions of the Ed25519 backend."""
    BAD_SIGNATURE = "bad signature"
    MALFORMED_SIGNATURE = "malformed signature"
    INVALID_SEED = "invalid seed"
    INVALID_VERIFY_KEY = "invalid verify key"
    INVALID_MESSAGE = "invalid message"
    LIBRARY_FAILURE = "libsodium failure"


class Ed25519Error(Exception):
    """Backend-level failure carrying a native error kind."""

    def __init__(self, kind: Ed25519ErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"ed25519: {kind.value}" + (f" ({detail})" if detail else ""))


_KIND_MAP = {
    Ed25519ErrorKind.BAD_SIGNATURE: ErrorKind.INVALID_SIGNATURE,
    Ed25519ErrorKind.MALFORMED_SIGNATURE: ErrorKind.INVALID_SIGNATURE,
    Ed25519ErrorKind.INVALID_SEED: ErrorKind.INVALID_PRIVATE_KEY,
    Ed25519ErrorKind.INVALID_VERIFY_KEY: ErrorKind.INVALID_PUBLIC_KEY,
    Ed25519ErrorKind.INVALID_MESSAGE: ErrorKind.INVALID_LENGTH,
}


def to_crypto_error(err: Ed25519Error) -> CryptoError:
    """Map a backend error onto exactly one taxonomy error."""
    kind = _KIND_MAP.get(err.kind)
    if kind is None:
        return error_for_kind(ErrorKind.OTHER, err.kind.value, backend=BACKEND_NAME)
    return error_for_kind(kind, backend=BACKEND_NAME)


@contextmanager
def native_errors(kind: Ed25519ErrorKind) -> Iterator[None]:
    """
    Classify PyNaCl exceptions raised in the block.

    A failed signature check is always BAD_SIGNATURE; any other PyNaCl
    failure is reported as ``kind``.
    """
    try:
        yield
    except nacl.exceptions.BadSignatureError as e:
        raise Ed25519Error(Ed25519ErrorKind.BAD_SIGNATURE) from e
    except nacl.exceptions.CryptoError as e:
        raise Ed25519Error(kind, str(e)) from e
    except MemoryError as e:
        raise Ed25519Error(Ed25519ErrorKind.LIBRARY_FAILURE, "out of memory") from e


@contextmanager
def mapped_errors() -> Iterator[None]:
    """Re-raise backend errors raised in the block as taxonomy errors."""
    try:
        yield
    except Ed25519Error as e:
        raise to_crypto_error(e) from e
