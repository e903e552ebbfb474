"""
Tests for algorithm listing, selection, self-tests and default preferences.
"""

import pytest
import yaml

from quantum_resistant_vpn.crypto import (
    AlgorithmDescriptor, AlgorithmRegistry, DeterministicRandomSource, InvalidAlgorithmError,
    SuiteFamily, SuiteVariant, SymmetricSuite, UnsupportedAlgorithmError, AES256GCM,
    get_default_algorithm, list_classic_algorithms, list_post_quantum_algorithms,
    registry, set_default_algorithm, test_algorithm as run_algorithm_test
)

ALL_ALGORITHMS = [algo.name for algo in list_classic_algorithms() + list_post_quantum_algorithms()]


def test_list_classic_algorithms():
    algorithms = list_classic_algorithms()
    names = [algo.name for algo in algorithms]
    assert names == ["aes256gcm", "chacha20poly1305"]
    assert not any(algo.post_quantum for algo in algorithms)


def test_list_post_quantum_algorithms():
    algorithms = list_post_quantum_algorithms()
    names = [algo.name for algo in algorithms]
    assert names == ["kyber768", "kyber1024", "hybrid-kyber768-aes256gcm"]
    assert all(algo.post_quantum for algo in algorithms)
    assert all(algo.description for algo in algorithms)


def test_descriptors_are_immutable():
    algo = list_classic_algorithms()[0]
    with pytest.raises(AttributeError):
        algo.name = "other"


@pytest.mark.parametrize("name", ALL_ALGORITHMS)
@pytest.mark.parametrize("data", [b"", b"x", b"This is a test message for encryption" * 40])
def test_algorithm_roundtrip(name, data):
    result = run_algorithm_test(name, data)
    assert result.algorithm == name
    assert result.decryption_successful
    assert len(result.encrypted) == registry.layout(name).ciphertext_length(len(data))


@pytest.mark.parametrize("name", ALL_ALGORITHMS)
def test_algorithm_durations(name):
    result = run_algorithm_test(name, b"This is a test message for encryption")
    assert result.key_gen_time >= 0
    assert result.encrypt_time > 0
    assert result.decrypt_time > 0


def test_unsupported_algorithm():
    with pytest.raises(UnsupportedAlgorithmError) as excinfo:
        run_algorithm_test("unsupported-algorithm", b"This is a test message")
    assert excinfo.value.algorithm == "unsupported-algorithm"
    assert "unsupported algorithm" in str(excinfo.value)


def test_unsupported_algorithm_layout():
    with pytest.raises(UnsupportedAlgorithmError):
        registry.layout("rot13")


@pytest.mark.parametrize("name", ["aes256gcm", "chacha20poly1305"])
def test_seeded_classic_output_is_reproducible(name):
    first = run_algorithm_test(name, b"payload", DeterministicRandomSource(b"seed"))
    second = run_algorithm_test(name, b"payload", DeterministicRandomSource(b"seed"))
    assert first.encrypted == second.encrypted


@pytest.mark.parametrize("name", ["aes256gcm", "chacha20poly1305"])
def test_classic_nonces_differ_between_runs(name):
    nonces = {run_algorithm_test(name, b"x").encrypted[:12] for _ in range(20)}
    assert len(nonces) == 20


@pytest.mark.parametrize("name, family", [
    ("aes256gcm", SuiteFamily.AEAD),
    ("chacha20poly1305", SuiteFamily.AEAD),
    ("kyber768", SuiteFamily.KEM),
    ("kyber1024", SuiteFamily.KEM),
    ("hybrid-kyber768-aes256gcm", SuiteFamily.HYBRID),
])
def test_variant_families(name, family):
    assert registry.variant(name).family is family


def test_register_new_variant():
    custom = AlgorithmRegistry()
    custom.register(SuiteVariant(
        AlgorithmDescriptor("aes-custom", "Custom AES suite", post_quantum=False),
        SuiteFamily.AEAD,
        lambda name, rng: SymmetricSuite(name, AES256GCM(rng)),
    ))
    assert [a.name for a in custom.list_classic_algorithms()] == ["aes-custom"]
    assert custom.list_post_quantum_algorithms() == []
    assert custom.test_algorithm("aes-custom", b"data").decryption_successful
    with pytest.raises(UnsupportedAlgorithmError):
        custom.resolve("aes256gcm")


def test_register_duplicate_rejected():
    variant = registry.variant("aes256gcm")
    custom = AlgorithmRegistry()
    custom.register(variant)
    with pytest.raises(ValueError):
        custom.register(variant)


def test_default_algorithm_fallbacks(settings):
    assert get_default_algorithm(False, settings) == "aes256gcm"
    assert get_default_algorithm(True, settings) == "kyber768"


def test_set_default_algorithm_persists(settings):
    set_default_algorithm("chacha20poly1305", False, settings)
    set_default_algorithm("hybrid-kyber768-aes256gcm", True, settings)

    assert get_default_algorithm(False, settings) == "chacha20poly1305"
    assert get_default_algorithm(True, settings) == "hybrid-kyber768-aes256gcm"

    stored = yaml.safe_load(settings.config_file.read_text())
    assert stored == {"crypto": {
        "default_classic": "chacha20poly1305",
        "default_post_quantum": "hybrid-kyber768-aes256gcm",
    }}


@pytest.mark.parametrize("name, post_quantum", [
    ("kyber768", False),
    ("aes256gcm", True),
    ("unknown", False),
    ("unknown", True),
])
def test_set_default_rejects_wrong_category(settings, name, post_quantum):
    with pytest.raises(InvalidAlgorithmError):
        set_default_algorithm(name, post_quantum, settings)
    assert not settings.config_file.exists()


def test_default_uses_process_settings():
    set_default_algorithm("kyber1024", True)
    assert get_default_algorithm(True) == "kyber1024"
    assert get_default_algorithm(False) == "aes256gcm"


def test_default_from_environment(settings, monkeypatch):
    monkeypatch.setenv("QRVPN_CRYPTO_DEFAULT_CLASSIC", "chacha20poly1305")
    assert get_default_algorithm(False, settings) == "chacha20poly1305"
