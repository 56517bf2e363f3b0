"""Byte-level signing helpers resolved through the configured backend."""

import logging
from typing import Optional

from .backends import Backend, get_backend
from .config import Settings
from .core.contracts import BytesLike, PrivateKey, PublicKey, Signature
from .core.digest import Digest
from .core.errors import InvalidSignatureError


logger = logging.getLogger(__name__)


def _resolve(backend: Optional[str]) -> Backend:
    if backend is None:
        return Settings.from_env().get_backend()
    return get_backend(backend)


def parse_private_key(data: BytesLike, backend: Optional[str] = None) -> PrivateKey:
    """
    Parse a raw private key.

    Args:
        data: Encoded private key
        backend: Backend name (defaults to the configured backend)

    Returns:
        PrivateKey of the selected backend
    """
    return _resolve(backend).private_key.from_bytes(data)


def parse_public_key(data: BytesLike, backend: Optional[str] = None) -> PublicKey:
    """Parse a raw public key with the selected backend."""
    return _resolve(backend).public_key.from_bytes(data)


def parse_signature(data: BytesLike, backend: Optional[str] = None) -> Signature:
    """Parse a raw signature with the selected backend."""
    return _resolve(backend).signature.from_bytes(data)


def sign_digest(private_key: PrivateKey, digest: Digest) -> bytes:
    """
    Sign a digest and return the encoded signature.

    Args:
        private_key: Key to sign with
        digest: Pre-hashed message

    Returns:
        Signature bytes of the key's backend width
    """
    return private_key.sign(digest).to_bytes()


def verify_signature(digest: Digest, signature: Signature, public_key: PublicKey) -> bool:
    """
    Check a signature as a predicate.

    Only a signature that fails to validate yields False; every other
    error propagates.
    """
    try:
        public_key.verify_signature(digest, signature)
    except InvalidSignatureError:
        logger.debug(f"Signature rejected for digest {digest.hex()}")
        return False
    return True
