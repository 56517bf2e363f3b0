"""Registry of available signing backends."""

from dataclasses import dataclass
from typing import Dict, List

from .core.contracts import PrivateKey, PublicKey, Signature
from .ed25519 import Ed25519PrivateKey, Ed25519PublicKey, Ed25519Signature
from .secp256k1 import Secp256k1PrivateKey, Secp256k1PublicKey, Secp256k1Signature


class UnknownBackendError(ValueError):
    """Requested backend name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown signing backend {name!r}; available: {', '.join(available_backends())}")


@dataclass(frozen=True)
class Backend:
    """The three capability classes of one curve engine."""
    name: str
    private_key: type[PrivateKey]
    public_key: type[PublicKey]
    signature: type[Signature]

    @property
    def lengths(self) -> tuple[int, int, int]:
        """Serialized widths of (private key, public key, signature)."""
        return (self.private_key.LENGTH, self.public_key.LENGTH, self.signature.LENGTH)


SECP256K1 = Backend("secp256k1", Secp256k1PrivateKey, Secp256k1PublicKey, Secp256k1Signature)
ED25519 = Backend("ed25519", Ed25519PrivateKey, Ed25519PublicKey, Ed25519Signature)

_BACKENDS: Dict[str, Backend] = {
    SECP256K1.name: SECP256K1,
    ED25519.name: ED25519,
}


def available_backends() -> List[str]:
    return sorted(_BACKENDS)


def get_backend(name: str) -> Backend:
    """
    Look up a backend by name.

    Raises:
        UnknownBackendError: if no backend is registered under ``name``
    """
    try:
        return _BACKENDS[name.lower()]
    except KeyError:
        raise UnknownBackendError(name) from None
