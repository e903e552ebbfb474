"""
Shared fixtures for the engine tests.
"""

import os

import pytest

from quantum_resistant_vpn.config import SettingsStore, configure_settings
from quantum_resistant_vpn.crypto import DeterministicRandomSource, registry

ALL_ALGORITHMS = [
    "aes256gcm",
    "chacha20poly1305",
    "kyber768",
    "kyber1024",
    "hybrid-kyber768-aes256gcm",
]


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    """Point HOME and the process-wide settings store at a temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in list(os.environ):
        if name.startswith("QRVPN_"):
            monkeypatch.delenv(name)
    configure_settings(tmp_path / "settings.yaml")
    yield


@pytest.fixture
def settings(tmp_path) -> SettingsStore:
    return SettingsStore(tmp_path / "config" / "vpn.yaml")


@pytest.fixture
def rng() -> DeterministicRandomSource:
    return DeterministicRandomSource(b"quantum-resistant-vpn-tests")


@pytest.fixture(params=ALL_ALGORITHMS)
def suite(request):
    return registry.resolve(request.param)


def _flip_byte(data: bytes, index: int) -> bytes:
    mutated = bytearray(data)
    mutated[index] ^= 0x01
    return bytes(mutated)


@pytest.fixture
def flip_byte():
    """Return a helper XORing one byte of a buffer with 0x01."""
    return _flip_byte
