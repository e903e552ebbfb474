"""
Cryptographic engine for classic, post-quantum and hybrid encryption.

This package provides AEAD and ML-KEM primitives, the cipher suites composing
them into serialized ciphertexts, and the registry used to select and
benchmark them by name.
"""

from .algorithm_base import AlgorithmDescriptor, CryptoAlgorithm, KeyMaterial
from .errors import (
    CryptoEngineError, DecryptionError, FramingError,
    InvalidAlgorithmError, UnsupportedAlgorithmError
)
from .hybrid import HybridSuite
from .key_exchange import KeyExchangeAlgorithm, MLKEMKeyExchange
from .performance import OperationResult, PerformanceRecorder
from .random_source import DeterministicRandomSource, RandomSource, SystemRandomSource
from .registry import (
    AlgorithmRegistry, SuiteFamily, SuiteVariant, registry,
    get_default_algorithm, list_classic_algorithms, list_post_quantum_algorithms,
    set_default_algorithm, test_algorithm
)
from .suites import CipherSuite, KemSuite, SymmetricSuite
from .symmetric import SymmetricAlgorithm, AES256GCM, ChaCha20Poly1305
from .wire_format import AeadFrame, HybridFrame, KemFrame, WireLayout

__all__ = [
    'AlgorithmDescriptor', 'CryptoAlgorithm', 'KeyMaterial',
    'CryptoEngineError', 'DecryptionError', 'FramingError',
    'InvalidAlgorithmError', 'UnsupportedAlgorithmError',
    'KeyExchangeAlgorithm', 'MLKEMKeyExchange',
    'SymmetricAlgorithm', 'AES256GCM', 'ChaCha20Poly1305',
    'CipherSuite', 'SymmetricSuite', 'KemSuite', 'HybridSuite',
    'AeadFrame', 'KemFrame', 'HybridFrame', 'WireLayout',
    'OperationResult', 'PerformanceRecorder',
    'RandomSource', 'SystemRandomSource', 'DeterministicRandomSource',
    'AlgorithmRegistry', 'SuiteFamily', 'SuiteVariant', 'registry',
    'list_classic_algorithms', 'list_post_quantum_algorithms', 'test_algorithm',
    'set_default_algorithm', 'get_default_algorithm'
]
