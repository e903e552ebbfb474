"""
Timing of the key generation, encryption and decryption phases.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator

logger = logging.getLogger(__name__)

KEY_GEN = "key_gen"
ENCRYPT = "encrypt"
DECRYPT = "decrypt"

PHASES = (KEY_GEN, ENCRYPT, DECRYPT)


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one algorithm self-test.

    Durations are in seconds. A phase that never ran reports 0.0.
    """

    algorithm: str
    encrypted: bytes
    decryption_successful: bool
    key_gen_time: float
    encrypt_time: float
    decrypt_time: float


class PerformanceRecorder:
    """Collects one duration per phase.

    Only the code inside a `measure()` block is timed, so callers keep
    serialization and parsing outside the block.
    """

    def __init__(self):
        self.durations: Dict[str, float] = {}

    @contextmanager
    def measure(self, phase: str) -> Iterator[None]:
        if phase not in PHASES:
            raise ValueError(f"Unknown phase: {phase}")
        start = time.perf_counter()
        try:
            yield
        finally:
            # recorded even when the phase raises
            self.durations[phase] = time.perf_counter() - start

    def duration(self, phase: str) -> float:
        return self.durations.get(phase, 0.0)

    def result(self, algorithm: str, encrypted: bytes, decryption_successful: bool) -> OperationResult:
        result = OperationResult(
            algorithm=algorithm,
            encrypted=encrypted,
            decryption_successful=decryption_successful,
            key_gen_time=self.duration(KEY_GEN),
            encrypt_time=self.duration(ENCRYPT),
            decrypt_time=self.duration(DECRYPT),
        )
        logger.debug(f"Performance for {algorithm} - KeyGen: {result.key_gen_time:.6f}s, "
                     f"Encrypt: {result.encrypt_time:.6f}s, Decrypt: {result.decrypt_time:.6f}s")
        return result
