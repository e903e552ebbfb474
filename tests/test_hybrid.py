"""
Tests for the hybrid ML-KEM + AES-256-GCM suite.
"""

import pytest

from quantum_resistant_vpn.crypto import (
    AES256GCM, DecryptionError, FramingError, HybridSuite, registry
)
from quantum_resistant_vpn.crypto.hybrid import combine_keys

NAME = "hybrid-kyber768-aes256gcm"


@pytest.fixture
def hybrid() -> HybridSuite:
    return registry.resolve(NAME)


def test_combine_keys_takes_prefix_of_concatenation():
    secret = bytes(range(32))
    key = bytes(range(100, 132))
    assert combine_keys(secret, key, 32) == secret
    assert combine_keys(secret[:16], key, 32) == secret[:16] + key[:16]


def test_layout(hybrid):
    layout = hybrid.layout
    assert layout.wraps_key
    assert layout.kem_ciphertext_size == 1088
    assert layout.wrapped_key_size == 32 + 16
    assert layout.header_size == 1088 + 12 + 48 + 12


@pytest.mark.parametrize("plaintext", [b"", b"x", b"hybrid" * 400])
def test_roundtrip(hybrid, plaintext):
    with hybrid.generate_key_material() as material:
        ciphertext = hybrid.encrypt(material, plaintext)
        assert len(ciphertext) == hybrid.layout.ciphertext_length(len(plaintext))
        assert hybrid.decrypt(material, ciphertext) == plaintext


def test_wrapped_key_unwraps_to_symmetric_key(hybrid):
    with hybrid.generate_key_material() as material:
        frame = hybrid.seal(material, b"payload")
        shared_secret = hybrid.kem.decapsulate(material.private_key, frame.kem_ciphertext)
        assert hybrid.cipher.open(shared_secret, frame.wrapped_key) == material.symmetric_key
        # the payload key is the shared secret while it fills the whole AES key
        assert hybrid.cipher.open(shared_secret, frame.payload) == b"payload"


def test_decrypt_does_not_need_symmetric_key(hybrid):
    with hybrid.generate_key_material() as material:
        ciphertext = hybrid.encrypt(material, b"payload")
        receiver = type(material)(public_key=material.public_key, private_key=material.private_key)
        assert hybrid.decrypt(receiver, ciphertext) == b"payload"


def test_longer_than_constituent_schemes():
    data = b"This is a test message for hybrid Kyber-768 + AES-256-GCM encryption"
    hybrid = registry.test_algorithm(NAME, data)
    aes = registry.test_algorithm("aes256gcm", data)
    kyber = registry.test_algorithm("kyber768", data)
    assert hybrid.decryption_successful
    assert len(hybrid.encrypted) > len(aes.encrypted)
    assert len(hybrid.encrypted) > len(kyber.encrypted)


def _region_offsets(layout):
    kem = layout.kem_ciphertext_size
    key_nonce = kem
    wrapped = key_nonce + layout.nonce_size
    data_nonce = wrapped + layout.wrapped_key_size
    data = data_nonce + layout.nonce_size
    return {
        "kem ciphertext start": 0,
        "kem ciphertext end": kem - 1,
        "key nonce": key_nonce,
        "wrapped key": wrapped + 5,
        "wrapped key tag": data_nonce - 1,
        "data nonce": data_nonce,
        "data ciphertext": data,
    }


REGIONS = [
    "kem ciphertext start", "kem ciphertext end", "key nonce", "wrapped key",
    "wrapped key tag", "data nonce", "data ciphertext",
]


@pytest.mark.parametrize("region", REGIONS)
def test_tampering_each_region_is_soft_failure(hybrid, region, flip_byte):
    offset = _region_offsets(hybrid.layout)[region]
    with hybrid.generate_key_material() as material:
        ciphertext = hybrid.encrypt(material, b"tamper me")
        with pytest.raises(DecryptionError):
            hybrid.decrypt(material, flip_byte(ciphertext, offset))


def test_tampering_reported_by_self_test(hybrid, monkeypatch, flip_byte):
    original_parse = hybrid.parse

    def tampered_parse(data):
        return original_parse(flip_byte(data, hybrid.layout.kem_ciphertext_size + 20))

    monkeypatch.setattr(hybrid, "parse", tampered_parse)
    result = hybrid.run(b"payload")
    assert not result.decryption_successful


@pytest.mark.parametrize("cut", [1, 12, 48, 60, 100])
def test_truncation_inside_header_is_framing_error(hybrid, cut):
    with hybrid.generate_key_material() as material:
        ciphertext = hybrid.encrypt(material, b"payload")
        truncated = ciphertext[:hybrid.layout.header_size - cut]
        with pytest.raises(FramingError):
            hybrid.decrypt(material, truncated)


def test_truncation_into_payload_is_soft_failure(hybrid):
    with hybrid.generate_key_material() as material:
        ciphertext = hybrid.encrypt(material, b"payload")
        with pytest.raises(DecryptionError):
            hybrid.decrypt(material, ciphertext[:-1])


def test_explicit_cipher_keeps_layout(hybrid):
    suite = HybridSuite("custom", hybrid.kem, AES256GCM())
    assert suite.layout == hybrid.layout
