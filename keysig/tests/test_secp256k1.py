"""Tests for the secp256k1 backend."""

import hashlib
import os

import pytest

from keysig import (
    Digest,
    ErrorKind,
    InvalidSignatureError,
    InvalidPublicKeyError,
    InvalidPrivateKeyError,
)
from keysig.secp256k1 import Secp256k1PrivateKey, Secp256k1PublicKey, Secp256k1Signature
from keysig.secp256k1.engine import (
    CURVE_ORDER,
    HALF_ORDER,
    SigningEngine,
    VerificationEngine,
    signing_only,
    verification_only,
)


SCALAR_ONE = (1).to_bytes(32, "big")
# Compressed encoding of the generator point G
GENERATOR = bytes.fromhex("0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")
FIELD_PRIME = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
ZERO_DIGEST = Digest(b"\x00" * 32)


def random_key() -> Secp256k1PrivateKey:
    while True:
        try:
            return Secp256k1PrivateKey.from_bytes(os.urandom(32))
        except InvalidPrivateKeyError:
            continue


def digest_of(data: bytes) -> Digest:
    return Digest(hashlib.sha256(data).digest())


def test_scalar_one_derives_generator():
    """Test the private key 1 maps to the generator point."""
    key = Secp256k1PrivateKey.from_bytes(SCALAR_ONE)
    assert key.public_key().to_bytes() == GENERATOR


def test_sign_and_verify_with_scalar_one():
    """Test the scalar-one example: sign the zero digest and verify."""
    key = Secp256k1PrivateKey.from_bytes(SCALAR_ONE)
    public_key = key.public_key()

    signature = key.sign(ZERO_DIGEST)
    public_key.verify_signature(ZERO_DIGEST, signature)
    signature.verify(ZERO_DIGEST, public_key)


def test_bit_flips_invalidate_signature():
    """Test flipping any single signature bit makes verification fail."""
    key = Secp256k1PrivateKey.from_bytes(b"\x01" * 32)
    public_key = key.public_key()
    encoded = key.sign(ZERO_DIGEST).to_bytes()

    for bit in range(len(encoded) * 8):
        tampered = bytearray(encoded)
        tampered[bit // 8] ^= 1 << (bit % 8)
        with pytest.raises(InvalidSignatureError):
            signature = Secp256k1Signature.from_bytes(bytes(tampered))
            public_key.verify_signature(ZERO_DIGEST, signature)


def test_private_key_round_trip():
    """Test private key bytes survive parse and export."""
    key = random_key()
    raw = key.to_bytes()
    assert len(raw) == 32
    assert Secp256k1PrivateKey.from_bytes(raw).to_bytes() == raw
    assert Secp256k1PrivateKey.from_bytes(raw) == key


def test_public_key_round_trip():
    """Test compressed public keys survive parse and export."""
    public_key = random_key().public_key()
    raw = public_key.to_bytes()
    assert len(raw) == 33
    assert raw[0] in (0x02, 0x03)
    assert Secp256k1PublicKey.from_bytes(raw) == public_key
    assert bytes(Secp256k1PublicKey.from_bytes(raw)) == raw


def test_signature_round_trip():
    """Test compact signatures survive parse and export."""
    signature = random_key().sign(digest_of(b"round trip"))
    raw = signature.to_bytes()
    assert len(raw) == 64
    assert Secp256k1Signature.from_bytes(raw).to_bytes() == raw
    assert Secp256k1Signature.from_bytes(raw) == signature


def test_signatures_are_low_s():
    """Test signing always yields a normalized low-s signature."""
    key = random_key()
    for i in range(20):
        raw = key.sign(digest_of(str(i).encode())).to_bytes()
        assert int.from_bytes(raw[32:], "big") <= HALF_ORDER


def test_high_s_signature_rejected():
    """Test the malleated high-s twin of a valid signature does not verify."""
    key = random_key()
    digest = digest_of(b"malleability")
    raw = key.sign(digest).to_bytes()
    s = int.from_bytes(raw[32:], "big")
    twin = Secp256k1Signature.from_bytes(raw[:32] + (CURVE_ORDER - s).to_bytes(32, "big"))

    with pytest.raises(InvalidSignatureError):
        key.public_key().verify_signature(digest, twin)


def test_public_key_derivation_is_deterministic():
    """Test deriving the public key twice gives identical bytes."""
    key = random_key()
    assert key.public_key().to_bytes() == key.public_key().to_bytes()


def test_wrong_digest_fails():
    """Test a signature does not verify over a different digest."""
    key = random_key()
    signature = key.sign(digest_of(b"original"))

    with pytest.raises(InvalidSignatureError) as exc_info:
        key.public_key().verify_signature(digest_of(b"tampered"), signature)
    assert exc_info.value.kind is ErrorKind.INVALID_SIGNATURE


def test_wrong_public_key_fails():
    """Test a signature does not verify under an unrelated key."""
    digest = digest_of(b"message")
    signature = random_key().sign(digest)
    other = random_key().public_key()

    with pytest.raises(InvalidSignatureError):
        other.verify_signature(digest, signature)
    with pytest.raises(InvalidSignatureError):
        signature.verify(digest, other)


def outcome(call):
    try:
        call()
    except InvalidSignatureError:
        return "invalid"
    return "valid"


def test_verify_entry_points_agree():
    """Test PublicKey.verify_signature and Signature.verify agree."""
    keys = [random_key() for _ in range(3)]
    digests = [digest_of(b"a"), digest_of(b"b")]
    signatures = [key.sign(digest) for key in keys for digest in digests]

    for key in keys:
        public_key = key.public_key()
        for digest in digests:
            for signature in signatures:
                from_key = outcome(lambda: public_key.verify_signature(digest, signature))
                from_sig = outcome(lambda: signature.verify(digest, public_key))
                assert from_key == from_sig


@pytest.mark.parametrize("size", [0, 1, 31, 33, 64])
def test_private_key_wrong_length(size):
    """Test private keys of the wrong width are rejected."""
    with pytest.raises(InvalidPrivateKeyError):
        Secp256k1PrivateKey.from_bytes(b"\x01" * size)


@pytest.mark.parametrize("value", [0, CURVE_ORDER, CURVE_ORDER + 1, 2 ** 256 - 1])
def test_private_key_out_of_range(value):
    """Test scalars outside [1, n-1] are rejected."""
    with pytest.raises(InvalidPrivateKeyError) as exc_info:
        Secp256k1PrivateKey.from_bytes(value.to_bytes(32, "big"))
    assert exc_info.value.backend == "secp256k1"


def test_private_key_upper_bound_accepted():
    """Test n-1 is a valid secret."""
    key = Secp256k1PrivateKey.from_bytes((CURVE_ORDER - 1).to_bytes(32, "big"))
    # (n-1)G = -G shares x with G and has the opposite parity
    assert key.public_key().to_bytes() == b"\x03" + GENERATOR[1:]


@pytest.mark.parametrize("size", [0, 32, 34, 65])
def test_public_key_wrong_length(size):
    """Test public keys of the wrong width are rejected."""
    with pytest.raises(InvalidPublicKeyError):
        Secp256k1PublicKey.from_bytes(b"\x02" * size)


def test_public_key_uncompressed_rejected():
    """Test a valid 65-byte uncompressed point is not accepted."""
    with pytest.raises(InvalidPublicKeyError):
        Secp256k1PublicKey.from_bytes(b"\x04" + b"\x00" * 64)


@pytest.mark.parametrize("prefix", [0x00, 0x04, 0x05, 0xFF])
def test_public_key_bad_prefix(prefix):
    """Test compressed encodings need a 0x02/0x03 parity byte."""
    with pytest.raises(InvalidPublicKeyError):
        Secp256k1PublicKey.from_bytes(bytes([prefix]) + GENERATOR[1:])


def test_public_key_x_outside_field():
    """Test an x-coordinate outside the field is rejected."""
    with pytest.raises(InvalidPublicKeyError):
        Secp256k1PublicKey.from_bytes(b"\x02" + FIELD_PRIME.to_bytes(32, "big"))


# x**3 + 7 is a quadratic non-residue mod p for these x, so no point exists
@pytest.mark.parametrize("x", [0, 5])
@pytest.mark.parametrize("prefix", [0x02, 0x03])
def test_public_key_not_on_curve(prefix, x):
    """Test a field element with no matching curve point is rejected."""
    with pytest.raises(InvalidPublicKeyError):
        Secp256k1PublicKey.from_bytes(bytes([prefix]) + x.to_bytes(32, "big"))


@pytest.mark.parametrize("size", [0, 32, 63, 65, 72])
def test_signature_wrong_length(size):
    """Test signatures of the wrong width are rejected."""
    with pytest.raises(InvalidSignatureError):
        Secp256k1Signature.from_bytes(b"\x01" * size)


def test_signature_component_overflow():
    """Test r or s at or above the group order is rejected at parse time."""
    order = CURVE_ORDER.to_bytes(32, "big")
    one = (1).to_bytes(32, "big")
    with pytest.raises(InvalidSignatureError):
        Secp256k1Signature.from_bytes(order + one)
    with pytest.raises(InvalidSignatureError):
        Secp256k1Signature.from_bytes(one + order)


def test_zero_signature_does_not_verify():
    """Test an all-zero compact signature parses but never verifies."""
    signature = Secp256k1Signature.from_bytes(b"\x00" * 64)
    public_key = Secp256k1PrivateKey.from_bytes(SCALAR_ONE).public_key()
    with pytest.raises(InvalidSignatureError):
        public_key.verify_signature(ZERO_DIGEST, signature)


def test_accepts_bytes_like_input():
    """Test parse accepts bytearray and memoryview."""
    assert Secp256k1PublicKey.from_bytes(bytearray(GENERATOR)).to_bytes() == GENERATOR
    assert Secp256k1PublicKey.from_bytes(memoryview(GENERATOR)).to_bytes() == GENERATOR


def test_sign_requires_digest():
    """Test raw bytes are not accepted in place of a Digest."""
    key = random_key()
    with pytest.raises(TypeError):
        key.sign(b"\x00" * 32)


def test_capability_handles_are_separate():
    """Test engines expose only their own capability."""
    assert isinstance(signing_only(), SigningEngine)
    assert isinstance(verification_only(), VerificationEngine)
    assert not hasattr(signing_only(), "verify")
    assert not hasattr(verification_only(), "sign")
    assert not hasattr(Secp256k1PrivateKey, "verify_signature")
    assert not hasattr(Secp256k1PublicKey, "sign")


def test_private_key_repr_hides_secret():
    """Test the secret never appears in repr."""
    key = Secp256k1PrivateKey.from_bytes(b"\x42" * 32)
    assert "42" * 32 not in repr(key)


def test_instances_have_no_attribute_dict():
    """Test key and signature objects are fully slotted."""
    key = Secp256k1PrivateKey.from_bytes(SCALAR_ONE)
    for obj in (key, key.public_key(), key.sign(ZERO_DIGEST)):
        assert not hasattr(obj, "__dict__")
        with pytest.raises(AttributeError):
            obj.extra = 1
