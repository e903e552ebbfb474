"""
Randomness providers injected into the cipher suites.
"""

import abc
import hashlib
import logging
import os
import threading

logger = logging.getLogger(__name__)


class RandomSource(abc.ABC):
    """Source of random bytes for keys and nonces."""

    @abc.abstractmethod
    def random_bytes(self, length: int) -> bytes:
        """Return `length` random bytes.

        Args:
            length: Number of bytes to produce

        Returns:
            The random bytes
        """
        pass


class SystemRandomSource(RandomSource):
    """Operating system CSPRNG. Safe to share between threads."""

    def random_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"Length must be non-negative, got {length}")
        return os.urandom(length)


class DeterministicRandomSource(RandomSource):
    """Reproducible byte stream expanded from a seed with SHAKE-256.

    Each call consumes one block index, so two sources built from the same
    seed return identical sequences. Meant for tests and reproducible
    benchmarks; never use it to protect real data.
    """

    def __init__(self, seed: bytes):
        if not seed:
            raise ValueError("Seed must not be empty")
        self._seed = bytes(seed)
        self._counter = 0
        self._lock = threading.Lock()
        logger.debug(f"Deterministic random source created ({len(seed)} byte seed)")

    def random_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"Length must be non-negative, got {length}")
        with self._lock:
            counter = self._counter
            self._counter += 1
        block = self._seed + counter.to_bytes(8, byteorder="big")
        return hashlib.shake_256(block).digest(length)


_default_source = SystemRandomSource()


def default_random_source() -> RandomSource:
    """Get the process-wide system random source."""
    return _default_source
