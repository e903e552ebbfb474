"""
Symmetric authenticated encryption algorithms.
"""

import abc
import logging
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305 as ChaCha20Poly1305Cipher

from .algorithm_base import CryptoAlgorithm
from .errors import DecryptionError
from .random_source import RandomSource, default_random_source
from .wire_format import AeadFrame, WireLayout

logger = logging.getLogger(__name__)


class SymmetricAlgorithm(CryptoAlgorithm):
    """Abstract base class for AEAD algorithms with a fixed key size.

    Ciphertexts are framed as nonce + ciphertext + tag. The nonce is drawn
    from the injected random source on every call.
    """

    def __init__(self, random_source: Optional[RandomSource] = None):
        self.random_source = random_source or default_random_source()

    @property
    def key_size(self) -> int:
        """Get the key size in bytes."""
        return 32

    @property
    def nonce_size(self) -> int:
        """Get the nonce size in bytes."""
        return 12

    @property
    def tag_size(self) -> int:
        """Get the authentication tag size in bytes."""
        return 16

    @property
    def layout(self) -> WireLayout:
        return WireLayout(nonce_size=self.nonce_size, key_size=self.key_size,
                          tag_size=self.tag_size)

    @abc.abstractmethod
    def _cipher(self, key: bytes):
        """Build the underlying AEAD object for `key`."""
        pass

    def _check_key(self, key: bytes) -> None:
        if len(key) != self.key_size:
            raise ValueError(f"Key must be {self.key_size} bytes, got {len(key)}")

    def generate_key(self) -> bytes:
        """Generate a new random key.

        Returns:
            A new key of `key_size` bytes
        """
        key = self.random_source.random_bytes(self.key_size)
        logger.debug(f"Generated new {self.name} key ({self.key_size} bytes)")
        return key

    def seal(self, key: bytes, plaintext: bytes) -> AeadFrame:
        """Encrypt and authenticate `plaintext` under a fresh nonce.

        Args:
            key: The encryption key
            plaintext: The data to encrypt

        Returns:
            The nonce and the ciphertext (including tag)
        """
        self._check_key(key)
        nonce = self.random_source.random_bytes(self.nonce_size)
        ciphertext = self._cipher(key).encrypt(nonce, plaintext, None)

        logger.debug(f"{self.name} encryption: {len(plaintext)} bytes plaintext -> "
                     f"{len(ciphertext)} bytes ciphertext (plus {len(nonce)} bytes nonce)")

        return AeadFrame(nonce, ciphertext)

    def open(self, key: bytes, frame: AeadFrame) -> bytes:
        """Authenticate and decrypt a sealed frame.

        Args:
            key: The encryption key
            frame: Nonce and ciphertext (including tag)

        Returns:
            The decrypted data

        Raises:
            DecryptionError: If the tag does not verify
        """
        self._check_key(key)
        try:
            plaintext = self._cipher(key).decrypt(frame.nonce, frame.ciphertext, None)
        except InvalidTag as e:
            logger.warning(f"{self.name} decryption failed: authentication tag mismatch")
            raise DecryptionError(f"{self.name}: authentication failed") from e

        logger.debug(f"{self.name} decryption: {len(frame.ciphertext)} bytes ciphertext -> "
                     f"{len(plaintext)} bytes plaintext")

        return plaintext

    def encrypt(self, key: bytes, plaintext: bytes) -> bytes:
        """Encrypt data and return nonce + ciphertext + tag."""
        return self.seal(key, plaintext).to_bytes()

    def decrypt(self, key: bytes, ciphertext: bytes) -> bytes:
        """Decrypt nonce + ciphertext + tag.

        Raises:
            FramingError: If the buffer is shorter than the nonce
            DecryptionError: If authentication fails
        """
        return self.open(key, AeadFrame.parse(ciphertext, self.nonce_size))


class AES256GCM(SymmetricAlgorithm):
    """AES-256 in GCM mode for authenticated encryption."""

    @property
    def name(self) -> str:
        return "AES-256-GCM"

    @property
    def description(self) -> str:
        return ("AES-256 in Galois/Counter Mode (GCM) providing both encryption and "
                "authentication. It is widely used and standardized.")

    def _cipher(self, key: bytes) -> AESGCM:
        return AESGCM(key)


class ChaCha20Poly1305(SymmetricAlgorithm):
    """ChaCha20-Poly1305 for authenticated encryption."""

    @property
    def name(self) -> str:
        return "ChaCha20-Poly1305"

    @property
    def description(self) -> str:
        return ("ChaCha20-Poly1305 is a modern authenticated encryption algorithm "
                "that combines the ChaCha20 stream cipher with the Poly1305 authenticator.")

    def _cipher(self, key: bytes) -> ChaCha20Poly1305Cipher:
        return ChaCha20Poly1305Cipher(key)
