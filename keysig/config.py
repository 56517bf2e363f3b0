"""Configuration for choosing a signing backend."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .backends import Backend, available_backends, get_backend


ENV_BACKEND = "KEYSIG_BACKEND"
DEFAULT_BACKEND = "secp256k1"


class Settings(BaseModel):
    """Signing settings."""
    backend: str = Field(DEFAULT_BACKEND, description="Name of the signing backend")

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in available_backends():
            raise ValueError(f"unknown backend {value!r}, expected one of {available_backends()}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Settings with ``backend`` taken from KEYSIG_BACKEND when set
        """
        environ = os.environ if environ is None else environ
        value = environ.get(ENV_BACKEND)
        if value:
            return cls(backend=value)
        return cls()

    def get_backend(self) -> Backend:
        return get_backend(self.backend)
