"""
Cipher suite executors.

A suite owns the primitives of one registered algorithm and knows how to
generate key material, seal a plaintext into a frame, parse a serialized
frame and open it again. `CipherSuite.run` chains these steps into the timed
self-test reported by the registry.
"""

import abc
import hmac
import logging
from typing import Any, Optional

from .algorithm_base import KeyMaterial
from .errors import DecryptionError
from .key_exchange import KeyExchangeAlgorithm
from .performance import DECRYPT, ENCRYPT, KEY_GEN, OperationResult, PerformanceRecorder
from .random_source import RandomSource, default_random_source
from .symmetric import AES256GCM, SymmetricAlgorithm
from .wire_format import AeadFrame, KemFrame, WireLayout

logger = logging.getLogger(__name__)


class CipherSuite(abc.ABC):
    """Abstract base class for the executors behind each algorithm name."""

    def __init__(self, name: str, random_source: Optional[RandomSource] = None):
        self.name = name
        self.random_source = random_source or default_random_source()

    @property
    @abc.abstractmethod
    def layout(self) -> WireLayout:
        """Get the fixed field sizes of this suite's ciphertexts."""
        pass

    @abc.abstractmethod
    def generate_key_material(self) -> KeyMaterial:
        pass

    @abc.abstractmethod
    def seal(self, material: KeyMaterial, plaintext: bytes) -> Any:
        """Encrypt `plaintext` into this suite's frame type."""
        pass

    @abc.abstractmethod
    def parse(self, data: bytes) -> Any:
        """Split a serialized ciphertext into its frame fields.

        Raises:
            FramingError: If a fixed-size field is truncated
        """
        pass

    @abc.abstractmethod
    def open(self, material: KeyMaterial, frame: Any) -> bytes:
        """Decrypt a frame.

        Raises:
            DecryptionError: If authentication or decapsulation fails
        """
        pass

    def encrypt(self, material: KeyMaterial, plaintext: bytes) -> bytes:
        return self.seal(material, plaintext).to_bytes()

    def decrypt(self, material: KeyMaterial, data: bytes) -> bytes:
        return self.open(material, self.parse(data))

    def run(self, data: bytes, recorder: Optional[PerformanceRecorder] = None) -> OperationResult:
        """Generate keys, encrypt `data` and verify it decrypts again.

        Soft failures (authentication, decapsulation, plaintext mismatch) are
        reported through `decryption_successful`. Framing errors propagate.

        Args:
            data: The plaintext to test with
            recorder: Optional recorder receiving the phase timings

        Returns:
            The self-test result
        """
        recorder = recorder or PerformanceRecorder()

        with recorder.measure(KEY_GEN):
            material = self.generate_key_material()

        with material:
            with recorder.measure(ENCRYPT):
                frame = self.seal(material, data)
            encrypted = frame.to_bytes()

            parsed = self.parse(encrypted)
            try:
                with recorder.measure(DECRYPT):
                    plaintext = self.open(material, parsed)
            except DecryptionError as e:
                logger.warning(f"{self.name} self-test decryption failed: {e}")
                return recorder.result(self.name, encrypted, False)

        successful = hmac.compare_digest(plaintext, data)
        if not successful:
            logger.warning(f"{self.name} self-test produced a mismatching plaintext")
        return recorder.result(self.name, encrypted, successful)


class SymmetricSuite(CipherSuite):
    """Fixed-key AEAD suite: nonce | ciphertext+tag."""

    def __init__(self, name: str, cipher: SymmetricAlgorithm):
        super().__init__(name, cipher.random_source)
        self.cipher = cipher

    @property
    def layout(self) -> WireLayout:
        return self.cipher.layout

    def generate_key_material(self) -> KeyMaterial:
        return KeyMaterial(symmetric_key=self.cipher.generate_key())

    def seal(self, material: KeyMaterial, plaintext: bytes) -> AeadFrame:
        return self.cipher.seal(material.symmetric_key, plaintext)

    def parse(self, data: bytes) -> AeadFrame:
        return AeadFrame.parse(data, self.cipher.nonce_size)

    def open(self, material: KeyMaterial, frame: AeadFrame) -> bytes:
        return self.cipher.open(material.symmetric_key, frame)


class KemSuite(CipherSuite):
    """KEM suite: the encapsulated shared secret is the AES-256-GCM key.

    Serialized as kem_ct | nonce | ciphertext+tag.
    """

    def __init__(self, name: str, kem: KeyExchangeAlgorithm,
                 random_source: Optional[RandomSource] = None):
        super().__init__(name, random_source)
        self.kem = kem
        self.cipher = AES256GCM(self.random_source)
        if kem.shared_secret_size != self.cipher.key_size:
            raise ValueError(f"{kem.name} shared secret is {kem.shared_secret_size} bytes, "
                             f"{self.cipher.name} needs {self.cipher.key_size}")

    @property
    def layout(self) -> WireLayout:
        return WireLayout(nonce_size=self.cipher.nonce_size, key_size=self.cipher.key_size,
                          tag_size=self.cipher.tag_size,
                          kem_ciphertext_size=self.kem.ciphertext_size)

    def generate_key_material(self) -> KeyMaterial:
        public_key, private_key = self.kem.generate_keypair()
        return KeyMaterial(public_key=public_key, private_key=private_key)

    def seal(self, material: KeyMaterial, plaintext: bytes) -> KemFrame:
        kem_ciphertext, shared_secret = self.kem.encapsulate(material.public_key)
        payload = self.cipher.seal(shared_secret, plaintext)
        return KemFrame(kem_ciphertext, payload)

    def parse(self, data: bytes) -> KemFrame:
        return KemFrame.parse(data, self.layout)

    def open(self, material: KeyMaterial, frame: KemFrame) -> bytes:
        shared_secret = self.kem.decapsulate(material.private_key, frame.kem_ciphertext)
        return self.cipher.open(shared_secret, frame.payload)
