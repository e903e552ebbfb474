"""
Base classes for cryptographic algorithms and the key material they use.
"""

import abc
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AlgorithmDescriptor:
    """Registry entry describing one selectable algorithm."""

    name: str
    description: str
    post_quantum: bool


class CryptoAlgorithm(abc.ABC):
    """Abstract base class for all cryptographic primitives."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Get the internal name of the algorithm."""
        pass

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """Get a description of the algorithm."""
        pass


def _secret_buffer(data: Optional[bytes]) -> Optional[bytearray]:
    if data is None:
        return None
    return bytearray(data)


class KeyMaterial:
    """Keys owned by a single suite operation.

    Holds a KEM key pair, a symmetric key, or both (hybrid suites). Secret
    parts live in mutable buffers so they can be zero-filled by `wipe()`.
    Copies handed to the underlying libraries are outside our control.
    """

    def __init__(self, symmetric_key: Optional[bytes] = None,
                 public_key: Optional[bytes] = None,
                 private_key: Optional[bytes] = None):
        self.public_key = public_key
        self._symmetric_key = _secret_buffer(symmetric_key)
        self._private_key = _secret_buffer(private_key)
        self.wiped = False

    @property
    def symmetric_key(self) -> bytes:
        return self._require(self._symmetric_key, "symmetric key")

    @property
    def private_key(self) -> bytes:
        return self._require(self._private_key, "private key")

    def _require(self, buffer: Optional[bytearray], label: str) -> bytes:
        if self.wiped:
            raise ValueError("Key material has already been wiped")
        if buffer is None:
            raise ValueError(f"Key material has no {label}")
        return bytes(buffer)

    def wipe(self) -> None:
        """Overwrite the secret buffers with zeroes."""
        for buffer in (self._symmetric_key, self._private_key):
            if buffer is not None:
                wipe_buffer(buffer)
        self.wiped = True

    def __enter__(self) -> "KeyMaterial":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.wipe()


def wipe_buffer(buffer: bytearray) -> None:
    """Zero-fill a mutable buffer in place."""
    for i in range(len(buffer)):
        buffer[i] = 0
