"""
Comprehensive tests across all cipher engines.
"""
import pytest

from cipherlab.core.exceptions import EngineNotFoundError, UnsupportedAlgorithmError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.digest import digest, digest_text
from cipherlab.services.engines.base import CipherMode, CipherRequest, with_options
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.preprocessing.normalizer import NormalizationMode, TextNormalizer, letters_only


class TestCipherRegistry:
    """Test the cipher registry."""

    def test_all_ciphers_registered(self):
        """Verify all expected ciphers are registered."""
        registered = EngineRegistry.list_registered()

        for cipher_type in CipherType:
            assert cipher_type in registered, f"{cipher_type} not registered"

    def test_get_engines_by_family(self):
        """Test getting engines by cipher family."""
        registry = EngineRegistry()

        substitution = registry.get_engines_by_family(CipherFamily.SUBSTITUTION)
        transposition = registry.get_engines_by_family(CipherFamily.TRANSPOSITION)

        assert len(substitution) == 5  # Caesar, Monoalphabetic, Playfair, Vigenere, XOR pad
        assert len(transposition) == 2  # RailFence, Columnar

    def test_engine_instances_are_reused(self):
        registry = EngineRegistry()
        assert registry.get_engine(CipherType.CAESAR) is registry.get_engine(CipherType.CAESAR)

    def test_require_engine_raises_for_unknown(self):
        with pytest.raises(EngineNotFoundError):
            EngineRegistry().require_engine("enigma")


class TestRoundTrips:
    """decode(encode(text)) gives back the normalized text for every cipher."""

    PLAINTEXT = "Attack at dawn"

    CASES = [
        (CipherType.CAESAR, 3, "Attack at dawn"),
        (CipherType.MONOALPHABETIC, "QWERTYUIOPASDFGHJKLZXCVBNM", "ATTACK AT DAWN"),
        (CipherType.PLAYFAIR, "MONARCHY", "ATTACKATDAWN"),
        (CipherType.VIGENERE, "LEMON", "ATTACKATDAWN"),
        (CipherType.XOR_PAD, "a very long one-time pad", "Attack at dawn"),
        (CipherType.RAIL_FENCE, 3, "Attack at dawn"),
        (CipherType.COLUMNAR, "25431", "ATTACK AT DAWN"),
    ]

    @pytest.fixture
    def registry(self):
        return EngineRegistry()

    @pytest.mark.parametrize("cipher_type,key,expected", CASES)
    def test_roundtrip(self, registry, cipher_type, key, expected):
        engine = registry.get_engine(cipher_type)

        encoded = engine.apply(CipherRequest(self.PLAINTEXT, key, CipherMode.ENCODE))
        decoded = engine.apply(CipherRequest(encoded.text, key, CipherMode.DECODE))

        assert decoded.text == expected
        assert encoded.explanation
        assert decoded.explanation

    @pytest.mark.parametrize("cipher_type", list(CipherType))
    def test_random_key_is_valid(self, registry, cipher_type):
        engine = registry.get_engine(cipher_type)
        key = engine.generate_random_key()

        assert engine.validate_key(key)

    def test_request_is_immutable(self):
        request = CipherRequest("HELLO", 3)
        with pytest.raises(AttributeError):
            request.text = "BYE"


class TestWithOptions:
    """Request options are folded into the key."""

    def test_no_options_keeps_key(self):
        assert with_options("LEMON", {}) == "LEMON"

    def test_plain_key_is_wrapped(self):
        assert with_options("241", {"strict": True}) == {"strict": True, "key": "241"}

    def test_dict_key_wins_over_options(self):
        merged = with_options({"key": "21", "strict": False}, {"strict": True})
        assert merged == {"key": "21", "strict": False}


class TestTextNormalizer:
    """Test suite for text normalization."""

    @pytest.fixture
    def normalizer(self):
        return TextNormalizer()

    def test_strict_mode(self, normalizer):
        assert normalizer.normalize("Hello, World! 123") == "HELLOWORLD"

    def test_strict_mode_folds_compatibility_forms(self, normalizer):
        assert normalizer.normalize("ｆｉ ligature ﬁ") == "FILIGATUREFI"

    def test_uppercase_mode_keeps_everything(self, normalizer):
        assert normalizer.normalize("a b!", NormalizationMode.UPPERCASE) == "A B!"

    def test_letters_only(self):
        assert letters_only("Ｆｕｌｌ width") == "FULLWIDTH"


class TestDigest:
    """Test suite for the SHA digest collaborator."""

    def test_sha256(self):
        assert digest_text("SHA-256", "abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_sha1(self):
        assert digest("SHA-1", b"abc") == "a9993e364706816aba3e25717850c26c9cd0d89d"

    def test_digest_lengths(self):
        assert len(digest_text("SHA-384", "")) == 96
        assert len(digest_text("SHA-512", "")) == 128

    def test_unsupported_algorithm(self):
        with pytest.raises(UnsupportedAlgorithmError):
            digest("MD5", b"abc")
