"""
Capability contracts for keys and signatures.

Each concrete class fixes its serialized width in ``LENGTH`` and links to its
counterparts through the generic parameters:

    PrivateKey[PublicKeyT, SignatureT] --derives--> PublicKeyT
                                       --signs----> SignatureT
    PublicKey[SignatureT]              --verifies-> SignatureT
    Signature[PublicKeyT]              --verifies-> against PublicKeyT

``from_bytes`` is the single construction boundary where the width and the
value are checked; everything downstream may assume a valid object.
"""

import hmac
from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar, Union

from .digest import Digest


BytesLike = Union[bytes, bytearray, memoryview]

PublicKeyT = TypeVar("PublicKeyT", bound="PublicKey")
SignatureT = TypeVar("SignatureT", bound="Signature")
FixedWidthT = TypeVar("FixedWidthT", bound="FixedWidth")


def ensure_bytes(data: BytesLike) -> bytes:
    """Copy bytes-like input into immutable bytes."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes, not {type(data).__name__}")
    return bytes(data)


def ensure_digest(digest: Digest) -> Digest:
    """Reject anything that is not a Digest before it reaches an engine."""
    if not isinstance(digest, Digest):
        raise TypeError(f"Expected Digest, not {type(digest).__name__}")
    return digest


class FixedWidth(ABC):
    """Value with a fixed-length byte encoding."""

    __slots__ = ()

    LENGTH: ClassVar[int]
    BACKEND: ClassVar[str]

    @classmethod
    @abstractmethod
    def from_bytes(cls: type[FixedWidthT], data: BytesLike) -> FixedWidthT:
        """Parse ``LENGTH`` bytes, raising a taxonomy error when invalid."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Export the ``LENGTH``-byte encoding."""

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash((type(self), self.to_bytes()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_bytes().hex()})"


class PrivateKey(FixedWidth, Generic[PublicKeyT, SignatureT]):
    """Signing capability. Can never verify."""

    __slots__ = ()

    @abstractmethod
    def sign(self, digest: Digest) -> SignatureT:
        """Sign a digest. Total for a valid key and digest."""

    @abstractmethod
    def public_key(self) -> PublicKeyT:
        """Derive the matching public key. Deterministic."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return hmac.compare_digest(self.to_bytes(), other.to_bytes())

    # Secret material stays out of hash tables
    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<secret>)"


class PublicKey(FixedWidth, Generic[SignatureT]):
    """Verification capability. Can never sign."""

    __slots__ = ()

    @abstractmethod
    def verify_signature(self, digest: Digest, signature: SignatureT) -> None:
        """
        Verify ``signature`` over ``digest``.

        Raises:
            InvalidSignatureError: if the signature does not validate
        """


class Signature(FixedWidth, Generic[PublicKeyT]):
    """Signature value bound to a verification capability."""

    __slots__ = ()

    @abstractmethod
    def verify(self, digest: Digest, public_key: PublicKeyT) -> None:
        """
        Verify this signature over ``digest`` with ``public_key``.

        Behaves exactly like ``public_key.verify_signature(digest, self)``.

        Raises:
            InvalidSignatureError: if the signature does not validate
        """
