"""Ed25519 implementations of the key and signature contracts."""

import logging

import nacl.bindings
import nacl.signing

from ..core.contracts import BytesLike, PrivateKey, PublicKey, Signature, ensure_bytes, ensure_digest
from ..core.digest import Digest
from ..core.errors import CryptoError
from .errors import BACKEND_NAME, Ed25519Error, Ed25519ErrorKind, mapped_errors, native_errors


logger = logging.getLogger(__name__)

SEED_SIZE = 32
VERIFY_KEY_SIZE = 32
SIGNATURE_SIZE = 64

# Order of the prime subgroup; canonical signatures have S < L
GROUP_ORDER = 2 ** 252 + 27742317777372353535851937790883648493


class Ed25519PrivateKey(PrivateKey["Ed25519PublicKey", "Ed25519Signature"]):
    """32-byte seed held by a PyNaCl SigningKey."""

    LENGTH = SEED_SIZE
    BACKEND = BACKEND_NAME

    __slots__ = ("_signing_key",)

    def __init__(self, signing_key: nacl.signing.SigningKey):
        self._signing_key = signing_key

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Ed25519PrivateKey":
        """
        Load a private key from its 32-byte seed.

        Raises:
            InvalidPrivateKeyError: if the seed has the wrong length
        """
        data = ensure_bytes(data)
        try:
            with mapped_errors():
                if len(data) != SEED_SIZE:
                    raise Ed25519Error(Ed25519ErrorKind.INVALID_SEED, f"expected {SEED_SIZE} bytes, got {len(data)}")
                with native_errors(Ed25519ErrorKind.INVALID_SEED):
                    signing_key = nacl.signing.SigningKey(data)
        except CryptoError:
            logger.debug(f"Rejected {len(data)}-byte ed25519 seed")
            raise
        return cls(signing_key)

    def sign(self, digest: Digest) -> "Ed25519Signature":
        message = ensure_digest(digest).to_bytes()
        with mapped_errors(), native_errors(Ed25519ErrorKind.INVALID_MESSAGE):
            signed = self._signing_key.sign(message)
        return Ed25519Signature(signed.signature)

    def public_key(self) -> "Ed25519PublicKey":
        return Ed25519PublicKey(self._signing_key.verify_key)

    def to_bytes(self) -> bytes:
        return bytes(self._signing_key)


class Ed25519PublicKey(PublicKey["Ed25519Signature"]):
    """32-byte point held by a PyNaCl VerifyKey."""

    LENGTH = VERIFY_KEY_SIZE
    BACKEND = BACKEND_NAME

    __slots__ = ("_verify_key",)

    def __init__(self, verify_key: nacl.signing.VerifyKey):
        self._verify_key = verify_key

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Ed25519PublicKey":
        """
        Parse an encoded point.

        Raises:
            InvalidPublicKeyError: wrong length, not on the curve or of small order
        """
        data = ensure_bytes(data)
        try:
            with mapped_errors():
                if len(data) != VERIFY_KEY_SIZE:
                    raise Ed25519Error(
                        Ed25519ErrorKind.INVALID_VERIFY_KEY,
                        f"expected {VERIFY_KEY_SIZE} bytes, got {len(data)}"
                    )
                with native_errors(Ed25519ErrorKind.INVALID_VERIFY_KEY):
                    # libsodium refuses to convert points outside the prime-order subgroup
                    nacl.bindings.crypto_sign_ed25519_pk_to_curve25519(data)
                    verify_key = nacl.signing.VerifyKey(data)
        except CryptoError:
            logger.debug(f"Rejected ed25519 public key {data.hex()}")
            raise
        return cls(verify_key)

    def verify_signature(self, digest: Digest, signature: "Ed25519Signature") -> None:
        _verify(digest, signature, self)

    def to_bytes(self) -> bytes:
        return bytes(self._verify_key)


class Ed25519Signature(Signature[Ed25519PublicKey]):
    """64-byte ``R || S`` signature."""

    LENGTH = SIGNATURE_SIZE
    BACKEND = BACKEND_NAME

    __slots__ = ("_signature",)

    def __init__(self, signature: bytes):
        self._signature = signature

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Ed25519Signature":
        """
        Parse a signature, rejecting non-canonical S values.

        Raises:
            InvalidSignatureError: wrong length or S >= L
        """
        data = ensure_bytes(data)
        try:
            with mapped_errors():
                if len(data) != SIGNATURE_SIZE:
                    raise Ed25519Error(
                        Ed25519ErrorKind.MALFORMED_SIGNATURE,
                        f"expected {SIGNATURE_SIZE} bytes, got {len(data)}"
                    )
                if int.from_bytes(data[32:], "little") >= GROUP_ORDER:
                    raise Ed25519Error(Ed25519ErrorKind.MALFORMED_SIGNATURE, "non-canonical S")
        except CryptoError:
            logger.debug(f"Rejected ed25519 signature {data.hex()}")
            raise
        return cls(data)

    def verify(self, digest: Digest, public_key: Ed25519PublicKey) -> None:
        _verify(digest, self, public_key)

    def to_bytes(self) -> bytes:
        return self._signature


def _verify(digest: Digest, signature: Ed25519Signature, public_key: Ed25519PublicKey) -> None:
    if not isinstance(signature, Ed25519Signature):
        raise TypeError(f"Expected Ed25519Signature, not {type(signature).__name__}")
    if not isinstance(public_key, Ed25519PublicKey):
        raise TypeError(f"Expected Ed25519PublicKey, not {type(public_key).__name__}")
    message = ensure_digest(digest).to_bytes()
    with mapped_errors(), native_errors(Ed25519ErrorKind.MALFORMED_SIGNATURE):
        public_key._verify_key.verify(message, signature._signature)
