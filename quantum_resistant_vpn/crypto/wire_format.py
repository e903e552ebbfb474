"""
Byte layouts of serialized ciphertexts.

Every layout is a plain concatenation of fields in a fixed order. All fields
except the trailing payload have a fixed size per algorithm, so a buffer is
parsed by slicing those fields off the front:

    Classic AEAD:  nonce(N) | ciphertext+tag
    KEM-only:      kem_ct(K) | nonce(N) | ciphertext+tag
    Hybrid:        kem_ct(K) | key_nonce(N) | wrapped_key+tag(S+T) | data_nonce(N) | data_ct+tag
"""

import logging
from dataclasses import dataclass

from .errors import FramingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WireLayout:
    """Fixed field sizes of one algorithm's serialized ciphertext.

    Attributes:
        nonce_size: AEAD nonce size (N)
        key_size: AEAD key size (S)
        tag_size: AEAD authentication tag size (T)
        kem_ciphertext_size: KEM ciphertext size (K), 0 for classic AEADs
        wraps_key: Whether a wrapped symmetric key sits between the KEM
            ciphertext and the payload (hybrid suites)
    """

    nonce_size: int
    key_size: int
    tag_size: int
    kem_ciphertext_size: int = 0
    wraps_key: bool = False

    @property
    def wrapped_key_size(self) -> int:
        return self.key_size + self.tag_size

    @property
    def header_size(self) -> int:
        """Size of every field in front of the payload ciphertext."""
        size = self.kem_ciphertext_size + self.nonce_size
        if self.wraps_key:
            size += self.nonce_size + self.wrapped_key_size
        return size

    @property
    def minimum_length(self) -> int:
        """Shortest buffer that survives framing (empty payload ciphertext)."""
        return self.header_size

    def ciphertext_length(self, plaintext_length: int) -> int:
        """Exact serialized length for a plaintext of the given length."""
        return self.header_size + plaintext_length + self.tag_size


class FrameReader:
    """Cursor that slices fixed-size fields off the front of a buffer."""

    def __init__(self, data: bytes):
        self._data = bytes(data)
        self._offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def take(self, size: int, field: str) -> bytes:
        """Slice the next `size` bytes.

        Raises:
            FramingError: If fewer than `size` bytes remain
        """
        if self.remaining < size:
            logger.error(f"Framing error: {field} needs {size} bytes, {self.remaining} remaining")
            raise FramingError(field, size, self.remaining)
        chunk = self._data[self._offset:self._offset + size]
        self._offset += size
        return chunk

    def rest(self) -> bytes:
        chunk = self._data[self._offset:]
        self._offset = len(self._data)
        return chunk


@dataclass(frozen=True)
class AeadFrame:
    """nonce | ciphertext+tag"""

    nonce: bytes
    ciphertext: bytes

    def to_bytes(self) -> bytes:
        return self.nonce + self.ciphertext

    @classmethod
    def read(cls, reader: FrameReader, nonce_size: int, field: str = "nonce") -> "AeadFrame":
        nonce = reader.take(nonce_size, field)
        return cls(nonce, reader.rest())

    @classmethod
    def parse(cls, data: bytes, nonce_size: int) -> "AeadFrame":
        return cls.read(FrameReader(data), nonce_size)


@dataclass(frozen=True)
class KemFrame:
    """kem_ct | nonce | ciphertext+tag"""

    kem_ciphertext: bytes
    payload: AeadFrame

    def to_bytes(self) -> bytes:
        return self.kem_ciphertext + self.payload.to_bytes()

    @classmethod
    def parse(cls, data: bytes, layout: WireLayout) -> "KemFrame":
        reader = FrameReader(data)
        kem_ciphertext = reader.take(layout.kem_ciphertext_size, "KEM ciphertext")
        payload = AeadFrame.read(reader, layout.nonce_size)
        return cls(kem_ciphertext, payload)


@dataclass(frozen=True)
class HybridFrame:
    """kem_ct | key_nonce | wrapped_key+tag | data_nonce | data_ct+tag"""

    kem_ciphertext: bytes
    wrapped_key: AeadFrame
    payload: AeadFrame

    def to_bytes(self) -> bytes:
        return self.kem_ciphertext + self.wrapped_key.to_bytes() + self.payload.to_bytes()

    @classmethod
    def parse(cls, data: bytes, layout: WireLayout) -> "HybridFrame":
        reader = FrameReader(data)
        kem_ciphertext = reader.take(layout.kem_ciphertext_size, "KEM ciphertext")
        key_nonce = reader.take(layout.nonce_size, "key nonce")
        wrapped_key = reader.take(layout.wrapped_key_size, "wrapped key")
        payload = AeadFrame.read(reader, layout.nonce_size, "data nonce")
        return cls(kem_ciphertext, AeadFrame(key_nonce, wrapped_key), payload)
