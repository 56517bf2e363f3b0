"""
secp256k1 curve engine on top of ``cryptography``.

The engine is split into two capability handles. ``SigningEngine`` can parse
secrets, derive public keys and sign; ``VerificationEngine`` can parse public
keys and signatures, verify and serialize. Neither has the other's methods.

Behaviour mirrors libsecp256k1 so encodings interoperate bit for bit:
compact signatures are ``r || s`` with both components below the group
order, signing emits low-s signatures and verification rejects high-s ones.
"""

from contextlib import contextmanager
from typing import Iterator, NamedTuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
    encode_dss_signature,
)

from .errors import Secp256k1Error, Secp256k1ErrorKind
from .message import HashedMessage


CURVE = ec.SECP256K1()
CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
HALF_ORDER = CURVE_ORDER // 2

SECRET_KEY_SIZE = 32
PUBLIC_KEY_SIZE = 33
COMPACT_SIGNATURE_SIZE = 64
MESSAGE_SIZE = 32

# Prehashed only fixes the expected digest width (32 bytes); no hashing happens
_ECDSA_PREHASHED = ec.ECDSA(Prehashed(hashes.SHA256()))


class RawSignature(NamedTuple):
    """ECDSA signature components."""
    r: int
    s: int


@contextmanager
def _native_errors(kind: Secp256k1ErrorKind) -> Iterator[None]:
    """Classify library exceptions raised in the block as ``kind``."""
    try:
        yield
    except MemoryError as e:
        raise Secp256k1Error(Secp256k1ErrorKind.NOT_ENOUGH_MEMORY) from e
    except ValueError as e:
        raise Secp256k1Error(kind, str(e)) from e


def _message_bytes(msg: HashedMessage) -> bytes:
    data = msg.to_bytes()
    if len(data) != MESSAGE_SIZE:
        raise Secp256k1Error(Secp256k1ErrorKind.INVALID_MESSAGE, f"expected {MESSAGE_SIZE} bytes, got {len(data)}")
    return data


class SigningEngine:
    """Sign-only capability handle."""

    def parse_secret(self, data: bytes) -> ec.EllipticCurvePrivateKey:
        """Parse a 32-byte big-endian scalar in ``[1, n-1]``."""
        if len(data) != SECRET_KEY_SIZE:
            raise Secp256k1Error(
                Secp256k1ErrorKind.INVALID_SECRET_KEY,
                f"expected {SECRET_KEY_SIZE} bytes, got {len(data)}"
            )
        value = int.from_bytes(data, "big")
        if not 0 < value < CURVE_ORDER:
            raise Secp256k1Error(Secp256k1ErrorKind.INVALID_SECRET_KEY, "scalar out of range")
        with _native_errors(Secp256k1ErrorKind.INVALID_SECRET_KEY):
            return ec.derive_private_key(value, CURVE)

    def derive_public(self, secret: ec.EllipticCurvePrivateKey) -> ec.EllipticCurvePublicKey:
        return secret.public_key()

    def sign(self, msg: HashedMessage, secret: ec.EllipticCurvePrivateKey) -> RawSignature:
        """Sign a pre-hashed message, normalizing to low-s."""
        data = _message_bytes(msg)
        with _native_errors(Secp256k1ErrorKind.INVALID_MESSAGE):
            der = secret.sign(data, _ECDSA_PREHASHED)
        r, s = decode_dss_signature(der)
        if s > HALF_ORDER:
            s = CURVE_ORDER - s
        return RawSignature(r, s)


class VerificationEngine:
    """Verify-only capability handle."""

    def parse_public(self, data: bytes) -> ec.EllipticCurvePublicKey:
        """Parse a 33-byte compressed SEC1 point."""
        if len(data) != PUBLIC_KEY_SIZE:
            raise Secp256k1Error(
                Secp256k1ErrorKind.INVALID_PUBLIC_KEY,
                f"expected {PUBLIC_KEY_SIZE} bytes, got {len(data)}"
            )
        if data[0] not in (0x02, 0x03):
            raise Secp256k1Error(Secp256k1ErrorKind.INVALID_PUBLIC_KEY, "not a compressed point")
        with _native_errors(Secp256k1ErrorKind.INVALID_PUBLIC_KEY):
            return ec.EllipticCurvePublicKey.from_encoded_point(CURVE, data)

    def parse_signature(self, data: bytes) -> RawSignature:
        """Parse a 64-byte compact ``r || s`` signature."""
        if len(data) != COMPACT_SIGNATURE_SIZE:
            raise Secp256k1Error(
                Secp256k1ErrorKind.INVALID_SIGNATURE,
                f"expected {COMPACT_SIGNATURE_SIZE} bytes, got {len(data)}"
            )
        r = int.from_bytes(data[:32], "big")
        s = int.from_bytes(data[32:], "big")
        if r >= CURVE_ORDER or s >= CURVE_ORDER:
            raise Secp256k1Error(Secp256k1ErrorKind.INVALID_SIGNATURE, "component overflows group order")
        return RawSignature(r, s)

    def verify(self, msg: HashedMessage, sig: RawSignature, public: ec.EllipticCurvePublicKey) -> None:
        """Raise INCORRECT_SIGNATURE unless ``sig`` is valid for ``msg`` under ``public``."""
        data = _message_bytes(msg)
        if sig.r == 0 or sig.s == 0 or sig.s > HALF_ORDER:
            raise Secp256k1Error(Secp256k1ErrorKind.INCORRECT_SIGNATURE)
        try:
            public.verify(encode_dss_signature(sig.r, sig.s), data, _ECDSA_PREHASHED)
        except InvalidSignature as e:
            raise Secp256k1Error(Secp256k1ErrorKind.INCORRECT_SIGNATURE) from e
        except MemoryError as e:
            raise Secp256k1Error(Secp256k1ErrorKind.NOT_ENOUGH_MEMORY) from e

    def serialize_public(self, public: ec.EllipticCurvePublicKey) -> bytes:
        return public.public_bytes(
            serialization.Encoding.X962,
            serialization.PublicFormat.CompressedPoint
        )

    def serialize_signature(self, sig: RawSignature) -> bytes:
        return sig.r.to_bytes(32, "big") + sig.s.to_bytes(32, "big")


# Both handles are stateless, so one instance of each is shared process-wide
_SIGNING_ENGINE = SigningEngine()
_VERIFICATION_ENGINE = VerificationEngine()


def signing_only() -> SigningEngine:
    """Return the shared sign-only engine."""
    return _SIGNING_ENGINE


def verification_only() -> VerificationEngine:
    """Return the shared verify-only engine."""
    return _VERIFICATION_ENGINE
