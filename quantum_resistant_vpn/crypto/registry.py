"""
Registry of selectable algorithms.

Each algorithm is a tagged variant: a descriptor, the suite family it belongs
to and a factory building the suite executor. Adding an algorithm means
registering one more variant.
"""

import enum
import functools
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .algorithm_base import AlgorithmDescriptor
from .errors import InvalidAlgorithmError, UnsupportedAlgorithmError
from .hybrid import HybridSuite
from .key_exchange import MLKEMKeyExchange
from .performance import OperationResult
from .random_source import RandomSource, default_random_source
from .suites import CipherSuite, KemSuite, SymmetricSuite
from .symmetric import AES256GCM, ChaCha20Poly1305
from .wire_format import WireLayout
from ..config.settings import SettingsStore, get_settings

logger = logging.getLogger(__name__)

DEFAULT_CLASSIC_KEY = "crypto.default_classic"
DEFAULT_POST_QUANTUM_KEY = "crypto.default_post_quantum"

FALLBACK_CLASSIC = "aes256gcm"
FALLBACK_POST_QUANTUM = "kyber768"


class SuiteFamily(enum.Enum):
    AEAD = "aead"
    KEM = "kem"
    HYBRID = "hybrid"


SuiteFactory = Callable[[str, RandomSource], CipherSuite]


@dataclass(frozen=True)
class SuiteVariant:
    descriptor: AlgorithmDescriptor
    family: SuiteFamily
    factory: SuiteFactory

    @property
    def name(self) -> str:
        return self.descriptor.name

    def build(self, random_source: RandomSource) -> CipherSuite:
        return self.factory(self.name, random_source)


class AlgorithmRegistry:
    """Maps algorithm names to suite variants."""

    def __init__(self):
        self._variants: Dict[str, SuiteVariant] = {}

    def register(self, variant: SuiteVariant) -> SuiteVariant:
        if variant.name in self._variants:
            raise ValueError(f"Algorithm already registered: {variant.name}")
        self._variants[variant.name] = variant
        logger.debug(f"Registered {variant.family.value} algorithm {variant.name}")
        return variant

    def variant(self, name: str) -> SuiteVariant:
        try:
            return self._variants[name]
        except KeyError:
            logger.error(f"Unsupported algorithm: {name}")
            raise UnsupportedAlgorithmError(name) from None

    def list_classic_algorithms(self) -> List[AlgorithmDescriptor]:
        logger.debug("Listing available classic encryption algorithms")
        return [v.descriptor for v in self._variants.values() if not v.descriptor.post_quantum]

    def list_post_quantum_algorithms(self) -> List[AlgorithmDescriptor]:
        logger.debug("Listing available post-quantum encryption algorithms")
        return [v.descriptor for v in self._variants.values() if v.descriptor.post_quantum]

    def resolve(self, name: str, random_source: Optional[RandomSource] = None) -> CipherSuite:
        """Build the suite executor for `name`.

        Raises:
            UnsupportedAlgorithmError: If no variant is registered under `name`
        """
        variant = self.variant(name)
        return variant.build(random_source or default_random_source())

    def layout(self, name: str) -> WireLayout:
        """Get the fixed field sizes (K, N, S, T) of an algorithm's ciphertexts."""
        return self.resolve(name).layout

    def test_algorithm(self, name: str, data: bytes,
                       random_source: Optional[RandomSource] = None) -> OperationResult:
        """Run the keygen / encrypt / decrypt self-test for one algorithm.

        Args:
            name: Registered algorithm name
            data: Plaintext to encrypt
            random_source: Optional randomness for keys and nonces

        Returns:
            The result with ciphertext, success flag and phase timings

        Raises:
            UnsupportedAlgorithmError: If the name is unknown
        """
        logger.info(f"Testing encryption algorithm: {name}")
        suite = self.resolve(name, random_source)
        result = suite.run(data)
        logger.info(f"Algorithm '{name}' test completed (decryption: {result.decryption_successful})")
        return result

    def set_default_algorithm(self, name: str, post_quantum: bool,
                              settings: Optional[SettingsStore] = None) -> None:
        """Persist the default algorithm of one category.

        Raises:
            InvalidAlgorithmError: If `name` is not in the requested category
            OSError: If the settings file cannot be written
        """
        logger.info(f"Setting default encryption algorithm to {name} (post-quantum: {post_quantum})")
        candidates = self.list_post_quantum_algorithms() if post_quantum else self.list_classic_algorithms()
        if not any(algo.name == name for algo in candidates):
            raise InvalidAlgorithmError(name)

        settings = settings or get_settings()
        settings.set(DEFAULT_POST_QUANTUM_KEY if post_quantum else DEFAULT_CLASSIC_KEY, name)
        settings.save()

    def get_default_algorithm(self, post_quantum: bool,
                              settings: Optional[SettingsStore] = None) -> str:
        settings = settings or get_settings()
        if post_quantum:
            return settings.get_string(DEFAULT_POST_QUANTUM_KEY) or FALLBACK_POST_QUANTUM
        return settings.get_string(DEFAULT_CLASSIC_KEY) or FALLBACK_CLASSIC


@functools.lru_cache(maxsize=None)
def _ml_kem(security_level: int) -> MLKEMKeyExchange:
    return MLKEMKeyExchange(security_level)


def _aead_variant(name: str, description: str, cipher_cls) -> SuiteVariant:
    return SuiteVariant(
        AlgorithmDescriptor(name, description, post_quantum=False),
        SuiteFamily.AEAD,
        lambda suite_name, rng: SymmetricSuite(suite_name, cipher_cls(rng)),
    )


def _kem_variant(name: str, description: str, security_level: int) -> SuiteVariant:
    return SuiteVariant(
        AlgorithmDescriptor(name, description, post_quantum=True),
        SuiteFamily.KEM,
        lambda suite_name, rng: KemSuite(suite_name, _ml_kem(security_level), rng),
    )


def _hybrid_variant(name: str, description: str, security_level: int) -> SuiteVariant:
    return SuiteVariant(
        AlgorithmDescriptor(name, description, post_quantum=True),
        SuiteFamily.HYBRID,
        lambda suite_name, rng: HybridSuite(suite_name, _ml_kem(security_level),
                                            AES256GCM(rng), rng),
    )


def build_default_registry() -> AlgorithmRegistry:
    registry = AlgorithmRegistry()
    registry.register(_aead_variant(
        "aes256gcm", "AES-256 in GCM mode - Strong symmetric encryption", AES256GCM))
    registry.register(_aead_variant(
        "chacha20poly1305", "ChaCha20-Poly1305 - Fast and secure symmetric encryption",
        ChaCha20Poly1305))
    registry.register(_kem_variant(
        "kyber768", "Kyber-768 - NIST selected post-quantum key encapsulation mechanism", 3))
    registry.register(_kem_variant(
        "kyber1024", "Kyber-1024 - Higher security level post-quantum key encapsulation mechanism", 5))
    registry.register(_hybrid_variant(
        "hybrid-kyber768-aes256gcm",
        "Hybrid Kyber-768 + AES-256-GCM - Post-quantum security with classical fallback", 3))
    return registry


registry = build_default_registry()


def list_classic_algorithms() -> List[AlgorithmDescriptor]:
    return registry.list_classic_algorithms()


def list_post_quantum_algorithms() -> List[AlgorithmDescriptor]:
    return registry.list_post_quantum_algorithms()


def test_algorithm(name: str, data: bytes,
                   random_source: Optional[RandomSource] = None) -> OperationResult:
    return registry.test_algorithm(name, data, random_source)


def set_default_algorithm(name: str, post_quantum: bool,
                          settings: Optional[SettingsStore] = None) -> None:
    registry.set_default_algorithm(name, post_quantum, settings)


def get_default_algorithm(post_quantum: bool, settings: Optional[SettingsStore] = None) -> str:
    return registry.get_default_algorithm(post_quantum, settings)
