"""
Hybrid KEM + AEAD suite.

The payload key mixes the KEM shared secret with an independently generated
symmetric key, and the symmetric key travels wrapped under the shared secret:

    kem_ct | key_nonce | wrapped_key+tag | data_nonce | data_ct+tag

The payload key is the first `key_size` bytes of shared_secret + symmetric_key.
With a 32-byte shared secret this is the shared secret itself. The step is a
plain concatenate-and-truncate, not a reviewed KDF, and is kept as is because
changing it changes every ciphertext.
"""

import logging
from typing import Optional

from .algorithm_base import KeyMaterial, wipe_buffer
from .key_exchange import KeyExchangeAlgorithm
from .random_source import RandomSource
from .suites import CipherSuite
from .symmetric import AES256GCM, SymmetricAlgorithm
from .wire_format import HybridFrame, WireLayout

logger = logging.getLogger(__name__)


def combine_keys(shared_secret: bytes, symmetric_key: bytes, key_size: int) -> bytes:
    """Derive the payload key from both secrets.

    Args:
        shared_secret: Secret from KEM encapsulation/decapsulation
        symmetric_key: Independently generated symmetric key
        key_size: AEAD key size in bytes

    Returns:
        The first `key_size` bytes of shared_secret + symmetric_key
    """
    hybrid_key = bytearray(shared_secret)
    hybrid_key.extend(symmetric_key)
    try:
        return bytes(hybrid_key[:key_size])
    finally:
        wipe_buffer(hybrid_key)


class HybridSuite(CipherSuite):
    """Combines an ML-KEM shared secret with an AEAD key for defense in depth."""

    def __init__(self, name: str, kem: KeyExchangeAlgorithm,
                 cipher: Optional[SymmetricAlgorithm] = None,
                 random_source: Optional[RandomSource] = None):
        super().__init__(name, random_source)
        self.kem = kem
        self.cipher = cipher or AES256GCM(self.random_source)
        if kem.shared_secret_size != self.cipher.key_size:
            raise ValueError(f"{kem.name} shared secret is {kem.shared_secret_size} bytes, "
                             f"{self.cipher.name} needs {self.cipher.key_size}")

    @property
    def layout(self) -> WireLayout:
        return WireLayout(nonce_size=self.cipher.nonce_size, key_size=self.cipher.key_size,
                          tag_size=self.cipher.tag_size,
                          kem_ciphertext_size=self.kem.ciphertext_size, wraps_key=True)

    def generate_key_material(self) -> KeyMaterial:
        public_key, private_key = self.kem.generate_keypair()
        symmetric_key = self.cipher.generate_key()
        return KeyMaterial(symmetric_key=symmetric_key, public_key=public_key,
                           private_key=private_key)

    def seal(self, material: KeyMaterial, plaintext: bytes) -> HybridFrame:
        kem_ciphertext, shared_secret = self.kem.encapsulate(material.public_key)
        symmetric_key = material.symmetric_key

        payload_key = combine_keys(shared_secret, symmetric_key, self.cipher.key_size)
        payload = self.cipher.seal(payload_key, plaintext)
        wrapped_key = self.cipher.seal(shared_secret, symmetric_key)

        logger.debug(f"{self.name}: {len(kem_ciphertext)} bytes KEM ciphertext, "
                     f"{len(wrapped_key.ciphertext)} bytes wrapped key, "
                     f"{len(payload.ciphertext)} bytes payload")

        return HybridFrame(kem_ciphertext, wrapped_key, payload)

    def parse(self, data: bytes) -> HybridFrame:
        return HybridFrame.parse(data, self.layout)

    def open(self, material: KeyMaterial, frame: HybridFrame) -> bytes:
        shared_secret = self.kem.decapsulate(material.private_key, frame.kem_ciphertext)

        symmetric_key = bytearray(self.cipher.open(shared_secret, frame.wrapped_key))
        try:
            payload_key = combine_keys(shared_secret, bytes(symmetric_key), self.cipher.key_size)
        finally:
            wipe_buffer(symmetric_key)

        return self.cipher.open(payload_key, frame.payload)
