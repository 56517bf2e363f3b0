"""Bridge from a Digest to the engine's pre-hashed message."""

from ..core.digest import Digest


class HashedMessage:
    """
    A Digest presented to the engine as an already-hashed message.

    The engine signs these bytes directly, without another hash pass.
    """

    __slots__ = ("_digest",)

    def __init__(self, digest: Digest):
        self._digest = digest

    def to_bytes(self) -> bytes:
        return self._digest.to_bytes()
