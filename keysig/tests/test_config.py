"""Tests for settings and the backend registry."""

import pytest
from pydantic import ValidationError

from keysig import Settings, UnknownBackendError, available_backends, get_backend
from keysig.secp256k1 import Secp256k1PrivateKey


def test_default_settings():
    """Test secp256k1 is the default backend."""
    settings = Settings()
    assert settings.backend == "secp256k1"
    assert settings.get_backend().private_key is Secp256k1PrivateKey


def test_settings_from_env():
    """Test KEYSIG_BACKEND selects the backend."""
    assert Settings.from_env({"KEYSIG_BACKEND": "ed25519"}).backend == "ed25519"
    assert Settings.from_env({"KEYSIG_BACKEND": " ED25519 "}).backend == "ed25519"
    assert Settings.from_env({}).backend == "secp256k1"


def test_settings_from_process_env(monkeypatch):
    """Test os.environ is read when no mapping is passed."""
    monkeypatch.setenv("KEYSIG_BACKEND", "ed25519")
    assert Settings.from_env().backend == "ed25519"


def test_settings_reject_unknown_backend():
    """Test unknown backends fail validation."""
    with pytest.raises(ValidationError):
        Settings(backend="rsa")
    with pytest.raises(ValidationError):
        Settings.from_env({"KEYSIG_BACKEND": "p256"})


def test_registry():
    """Test backend lookup and declared widths."""
    assert available_backends() == ["ed25519", "secp256k1"]
    assert get_backend("secp256k1").lengths == (32, 33, 64)
    assert get_backend("ed25519").lengths == (32, 32, 64)

    with pytest.raises(UnknownBackendError):
        get_backend("dilithium")
