"""
Tests for ciphertext framing.
"""

import pytest

from quantum_resistant_vpn.crypto.errors import FramingError
from quantum_resistant_vpn.crypto.wire_format import (
    AeadFrame, FrameReader, HybridFrame, KemFrame, WireLayout
)

AEAD = WireLayout(nonce_size=12, key_size=32, tag_size=16)
KEM = WireLayout(nonce_size=12, key_size=32, tag_size=16, kem_ciphertext_size=1088)
HYBRID = WireLayout(nonce_size=12, key_size=32, tag_size=16, kem_ciphertext_size=1088, wraps_key=True)


def test_layout_sizes():
    assert AEAD.header_size == 12
    assert KEM.header_size == 1088 + 12
    assert HYBRID.wrapped_key_size == 48
    assert HYBRID.header_size == 1088 + 12 + 48 + 12
    assert AEAD.ciphertext_length(0) == 28
    assert KEM.ciphertext_length(100) == 1088 + 12 + 100 + 16
    assert HYBRID.ciphertext_length(100) == 1088 + 12 + 48 + 12 + 100 + 16


def test_hybrid_layout_is_longest():
    for length in (0, 1, 1024):
        assert HYBRID.ciphertext_length(length) > KEM.ciphertext_length(length)
        assert KEM.ciphertext_length(length) > AEAD.ciphertext_length(length)


def test_frame_reader_slices_in_order():
    reader = FrameReader(b"abcdefgh")
    assert reader.take(3, "first") == b"abc"
    assert reader.take(2, "second") == b"de"
    assert reader.remaining == 3
    assert reader.rest() == b"fgh"
    assert reader.remaining == 0


def test_frame_reader_short_buffer():
    reader = FrameReader(b"abc")
    with pytest.raises(FramingError) as excinfo:
        reader.take(4, "nonce")
    assert excinfo.value.field == "nonce"
    assert excinfo.value.expected == 4
    assert excinfo.value.available == 3


def test_aead_frame_parse():
    frame = AeadFrame.parse(bytes(range(20)), 12)
    assert frame.nonce == bytes(range(12))
    assert frame.ciphertext == bytes(range(12, 20))
    assert frame.to_bytes() == bytes(range(20))


def test_aead_frame_exact_nonce_leaves_empty_ciphertext():
    frame = AeadFrame.parse(b"n" * 12, 12)
    assert frame.ciphertext == b""


def test_aead_frame_shorter_than_nonce():
    with pytest.raises(FramingError):
        AeadFrame.parse(b"n" * 11, 12)


def test_kem_frame_fields():
    data = b"K" * 1088 + b"N" * 12 + b"payload"
    frame = KemFrame.parse(data, KEM)
    assert frame.kem_ciphertext == b"K" * 1088
    assert frame.payload.nonce == b"N" * 12
    assert frame.payload.ciphertext == b"payload"
    assert frame.to_bytes() == data


def test_hybrid_frame_fields():
    data = b"K" * 1088 + b"n" * 12 + b"W" * 48 + b"N" * 12 + b"payload"
    frame = HybridFrame.parse(data, HYBRID)
    assert frame.kem_ciphertext == b"K" * 1088
    assert frame.wrapped_key.nonce == b"n" * 12
    assert frame.wrapped_key.ciphertext == b"W" * 48
    assert frame.payload.nonce == b"N" * 12
    assert frame.payload.ciphertext == b"payload"
    assert frame.to_bytes() == data


@pytest.mark.parametrize("length, field", [
    (0, "KEM ciphertext"),
    (1087, "KEM ciphertext"),
    (1088 + 11, "key nonce"),
    (1088 + 12 + 47, "wrapped key"),
    (1088 + 12 + 48 + 11, "data nonce"),
])
def test_hybrid_frame_truncation_names_field(length, field):
    with pytest.raises(FramingError) as excinfo:
        HybridFrame.parse(b"\x00" * length, HYBRID)
    assert excinfo.value.field == field


def test_framing_error_is_value_error():
    with pytest.raises(ValueError):
        KemFrame.parse(b"\x00" * 10, KEM)
