"""
Exceptions raised by the cryptographic engine.

Errors fall into two classes. Structural errors (unknown algorithm names,
buffers too short to hold a fixed-size field) abort the operation. Soft
errors (authentication or decapsulation failures) are reported inside the
self-test result instead of propagating.
"""


class CryptoEngineError(Exception):
    """Base class for all engine errors."""


class UnsupportedAlgorithmError(CryptoEngineError):
    """Raised when an algorithm name does not resolve to a registered suite."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"unsupported algorithm: {algorithm}")


class InvalidAlgorithmError(CryptoEngineError):
    """Raised when a default algorithm is not in the requested category."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"invalid algorithm: {algorithm}")


class FramingError(CryptoEngineError, ValueError):
    """A serialized buffer is shorter than a structurally required field."""

    def __init__(self, field: str, expected: int, available: int):
        self.field = field
        self.expected = expected
        self.available = available
        super().__init__(
            f"ciphertext too short for {field}: need {expected} bytes, "
            f"{available} remaining"
        )


class DecryptionError(CryptoEngineError):
    """Authentication or decapsulation failed. Never carries plaintext."""
