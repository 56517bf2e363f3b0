"""secp256k1 implementations of the key and signature contracts."""

import logging

from cryptography.hazmat.primitives.asymmetric import ec

from ..core.contracts import BytesLike, PrivateKey, PublicKey, Signature, ensure_bytes, ensure_digest
from ..core.errors import CryptoError
from ..core.digest import Digest
from .engine import (
    RawSignature,
    SigningEngine,
    VerificationEngine,
    signing_only,
    verification_only,
)
from .errors import BACKEND_NAME, mapped_errors
from .message import HashedMessage


logger = logging.getLogger(__name__)


class Secp256k1PrivateKey(PrivateKey["Secp256k1PublicKey", "Secp256k1Signature"]):
    """32-byte secret scalar bound to a sign-only engine."""

    LENGTH = 32
    BACKEND = BACKEND_NAME

    __slots__ = ("_secret_bytes", "_secret_key", "_engine")

    def __init__(self, secret_bytes: bytes, secret_key: ec.EllipticCurvePrivateKey, engine: SigningEngine):
        self._secret_bytes = secret_bytes
        self._secret_key = secret_key
        self._engine = engine

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Secp256k1PrivateKey":
        """
        Parse a raw secret scalar.

        Raises:
            InvalidPrivateKeyError: wrong length or scalar outside [1, n-1]
        """
        data = ensure_bytes(data)
        engine = signing_only()
        try:
            with mapped_errors():
                secret_key = engine.parse_secret(data)
        except CryptoError:
            logger.debug(f"Rejected {len(data)}-byte secp256k1 private key")
            raise
        return cls(data, secret_key, engine)

    def sign(self, digest: Digest) -> "Secp256k1Signature":
        msg = HashedMessage(ensure_digest(digest))
        with mapped_errors():
            sig = self._engine.sign(msg, self._secret_key)
        return Secp256k1Signature(sig, verification_only())

    def public_key(self) -> "Secp256k1PublicKey":
        pub_key = self._engine.derive_public(self._secret_key)
        return Secp256k1PublicKey(pub_key, verification_only())

    def to_bytes(self) -> bytes:
        return self._secret_bytes


class Secp256k1PublicKey(PublicKey["Secp256k1Signature"]):
    """33-byte compressed point bound to a verify-only engine."""

    LENGTH = 33
    BACKEND = BACKEND_NAME

    __slots__ = ("_pub_key", "_engine")

    def __init__(self, pub_key: ec.EllipticCurvePublicKey, engine: VerificationEngine):
        self._pub_key = pub_key
        self._engine = engine

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Secp256k1PublicKey":
        """
        Parse a compressed SEC1 point.

        Raises:
            InvalidPublicKeyError: wrong length, bad prefix or point not on the curve
        """
        data = ensure_bytes(data)
        engine = verification_only()
        try:
            with mapped_errors():
                pub_key = engine.parse_public(data)
        except CryptoError:
            logger.debug(f"Rejected secp256k1 public key {data.hex()}")
            raise
        return cls(pub_key, engine)

    def verify_signature(self, digest: Digest, signature: "Secp256k1Signature") -> None:
        _verify(self._engine, digest, signature, self)

    def to_bytes(self) -> bytes:
        return self._engine.serialize_public(self._pub_key)


class Secp256k1Signature(Signature[Secp256k1PublicKey]):
    """64-byte compact ECDSA signature bound to a verify-only engine."""

    LENGTH = 64
    BACKEND = BACKEND_NAME

    __slots__ = ("_sig", "_engine")

    def __init__(self, sig: RawSignature, engine: VerificationEngine):
        self._sig = sig
        self._engine = engine

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Secp256k1Signature":
        """
        Parse a compact ``r || s`` signature.

        Raises:
            InvalidSignatureError: wrong length or a component >= the group order
        """
        data = ensure_bytes(data)
        engine = verification_only()
        try:
            with mapped_errors():
                sig = engine.parse_signature(data)
        except CryptoError:
            logger.debug(f"Rejected secp256k1 signature {data.hex()}")
            raise
        return cls(sig, engine)

    def verify(self, digest: Digest, public_key: Secp256k1PublicKey) -> None:
        _verify(self._engine, digest, self, public_key)

    def to_bytes(self) -> bytes:
        return self._engine.serialize_signature(self._sig)


def _verify(
    engine: VerificationEngine,
    digest: Digest,
    signature: Secp256k1Signature,
    public_key: Secp256k1PublicKey
) -> None:
    """Verification shared by both entry points so they cannot disagree."""
    if not isinstance(signature, Secp256k1Signature):
        raise TypeError(f"Expected Secp256k1Signature, not {type(signature).__name__}")
    if not isinstance(public_key, Secp256k1PublicKey):
        raise TypeError(f"Expected Secp256k1PublicKey, not {type(public_key).__name__}")
    msg = HashedMessage(ensure_digest(digest))
    with mapped_errors():
        engine.verify(msg, signature._sig, public_key._pub_key)
