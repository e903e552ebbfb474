"""
Post-quantum key encapsulation mechanisms.
"""

import abc
import logging
from typing import Tuple

# Import OQS (Open Quantum Safe)
import oqs  # type: ignore

from .algorithm_base import CryptoAlgorithm
from .errors import DecryptionError

logger = logging.getLogger(__name__)


class KeyExchangeAlgorithm(CryptoAlgorithm):
    """Abstract base class for key encapsulation mechanisms."""

    @property
    @abc.abstractmethod
    def ciphertext_size(self) -> int:
        """Get the fixed KEM ciphertext size in bytes."""
        pass

    @property
    @abc.abstractmethod
    def shared_secret_size(self) -> int:
        """Get the shared secret size in bytes."""
        pass

    @abc.abstractmethod
    def generate_keypair(self) -> Tuple[bytes, bytes]:
        """Generate a new keypair.

        Returns:
            Tuple of (public_key, private_key)
        """
        pass

    @abc.abstractmethod
    def encapsulate(self, public_key: bytes) -> Tuple[bytes, bytes]:
        """Encapsulate a shared secret using the recipient's public key.

        Args:
            public_key: The recipient's public key

        Returns:
            Tuple of (ciphertext, shared_secret)
        """
        pass

    @abc.abstractmethod
    def decapsulate(self, private_key: bytes, ciphertext: bytes) -> bytes:
        """Decapsulate a shared secret using the recipient's private key.

        Args:
            private_key: The recipient's private key
            ciphertext: The KEM ciphertext from the sender

        Returns:
            The shared secret

        Raises:
            DecryptionError: If the mechanism rejects the ciphertext
        """
        pass


class MLKEMKeyExchange(KeyExchangeAlgorithm):
    """ML-KEM (previously CRYSTALS-Kyber) key encapsulation.

    ML-KEM is a post-quantum KEM based on the hardness of the
    learning-with-errors problem over module lattices. Randomness for key
    generation and encapsulation comes from liboqs itself.
    """

    ML_KEM_VARIANTS = {
        1: "ML-KEM-512",
        3: "ML-KEM-768",
        5: "ML-KEM-1024"
    }

    # Older liboqs builds only ship the round 3 names
    KYBER_VARIANTS = {
        1: "Kyber512",
        3: "Kyber768",
        5: "Kyber1024"
    }

    def __init__(self, security_level: int = 3):
        """Initialize ML-KEM with the specified security level.

        Args:
            security_level: Security level (1, 3, or 5)
        """
        if security_level not in self.ML_KEM_VARIANTS:
            raise ValueError(f"Invalid security level: {security_level}. Must be 1, 3, or 5.")

        self.security_level = security_level

        enabled_kems = oqs.get_enabled_kem_mechanisms()
        if self.ML_KEM_VARIANTS[security_level] in enabled_kems:
            self.variant = self.ML_KEM_VARIANTS[security_level]
        elif self.KYBER_VARIANTS[security_level] in enabled_kems:
            self.variant = self.KYBER_VARIANTS[security_level]
        else:
            raise ValueError(f"No ML-KEM or Kyber variant found for security level {security_level}")

        with oqs.KeyEncapsulation(self.variant) as kem:
            self.details = dict(kem.details)

        logger.info(f"Initialized ML-KEM variant {self.variant} (security level {security_level})")

    @property
    def name(self) -> str:
        return f"ML-KEM (Level {self.security_level})"

    @property
    def description(self) -> str:
        return ("ML-KEM is a module-lattice-based key encapsulation mechanism. "
                "It is one of the NIST post-quantum cryptography standards.")

    @property
    def ciphertext_size(self) -> int:
        return int(self.details["length_ciphertext"])

    @property
    def shared_secret_size(self) -> int:
        return int(self.details["length_shared_secret"])

    def generate_keypair(self) -> Tuple[bytes, bytes]:
        try:
            with oqs.KeyEncapsulation(self.variant) as kem:
                public_key = kem.generate_keypair()
                private_key = kem.export_secret_key()
        except Exception as e:
            logger.error(f"Error generating {self.variant} keypair: {e}")
            raise

        logger.debug(f"Generated {self.variant} keypair: public key {len(public_key)} bytes, "
                     f"private key {len(private_key)} bytes")

        return public_key, private_key

    def encapsulate(self, public_key: bytes) -> Tuple[bytes, bytes]:
        try:
            with oqs.KeyEncapsulation(self.variant) as kem:
                ciphertext, shared_secret = kem.encap_secret(public_key)
        except Exception as e:
            logger.error(f"Error during {self.variant} encapsulation: {e}")
            raise

        logger.debug(f"{self.variant} encapsulation: ciphertext {len(ciphertext)} bytes, "
                     f"shared secret {len(shared_secret)} bytes")

        return ciphertext, shared_secret

    def decapsulate(self, private_key: bytes, ciphertext: bytes) -> bytes:
        try:
            with oqs.KeyEncapsulation(self.variant, private_key) as kem:
                shared_secret = kem.decap_secret(ciphertext)
        except RuntimeError as e:
            logger.warning(f"{self.variant} decapsulation failed: {e}")
            raise DecryptionError(f"{self.variant}: decapsulation failed") from e

        logger.debug(f"{self.variant} decapsulation: shared secret {len(shared_secret)} bytes")

        return shared_secret
