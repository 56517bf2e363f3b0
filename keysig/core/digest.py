"""Fixed-length digest consumed by sign and verify operations."""

from dataclasses import dataclass

from .errors import InvalidLengthError


DIGEST_LENGTH = 32


@dataclass(frozen=True)
class Digest:
    """
    A message already reduced to a 32-byte hash.

    Never raw input: whoever builds a Digest is responsible for hashing.
    """
    value: bytes

    LENGTH = DIGEST_LENGTH

    def __post_init__(self):
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError(f"Digest value must be bytes, not {type(self.value).__name__}")
        if len(self.value) != DIGEST_LENGTH:
            raise InvalidLengthError(
                f"Digest must be {DIGEST_LENGTH} bytes, got {len(self.value)}"
            )
        # Copy mutable input so the digest cannot change under us
        object.__setattr__(self, "value", bytes(self.value))

    @classmethod
    def fromhex(cls, text: str) -> "Digest":
        """Build a digest from its hex encoding."""
        return cls(bytes.fromhex(text))

    def to_bytes(self) -> bytes:
        return self.value

    def hex(self) -> str:
        return self.value.hex()

    def __bytes__(self) -> bytes:
        return self.value
