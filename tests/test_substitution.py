"""Tests for the substitution cipher engines."""

import string

import pytest

from cipherlab.core.exceptions import InvalidKeyError, KeyLengthMismatchError, UnrepresentableOutputError
from cipherlab.services.engines.base import CipherMode
from cipherlab.services.engines.substitution import monoalphabetic, playfair, vigenere, xor_pad
from cipherlab.services.engines.substitution.monoalphabetic import MonoalphabeticEngine
from cipherlab.services.engines.substitution.playfair import PlayfairEngine
from cipherlab.services.engines.substitution.vigenere import VigenereEngine
from cipherlab.services.engines.substitution.xor_pad import XorPadEngine

QWERTY_KEY = "QWERTYUIOPASDFGHJKLZXCVBNM"


class TestMonoalphabetic:
    """Test suite for monoalphabetic substitution."""

    @pytest.fixture
    def engine(self):
        return MonoalphabeticEngine()

    def test_encode_known_example(self):
        assert monoalphabetic.encode("HELLO WORLD", QWERTY_KEY) == "ITSSG VGKSR"

    def test_decode_known_example(self):
        assert monoalphabetic.decode("ITSSG VGKSR", QWERTY_KEY) == "HELLO WORLD"

    def test_input_is_uppercased(self):
        assert monoalphabetic.encode("hello, world!", QWERTY_KEY) == "ITSSG, VGKSR!"

    def test_random_keys_are_bijections(self, engine):
        """Every random key maps the alphabet onto itself without collisions."""
        for _ in range(20):
            key = engine.generate_random_key()
            encoded = monoalphabetic.encode(string.ascii_uppercase, key)

            assert len(set(encoded)) == 26
            assert monoalphabetic.decode(encoded, key) == string.ascii_uppercase

    def test_engine_roundtrip(self, engine):
        plaintext = "Meet me at the usual place, 10pm."
        key = engine.generate_random_key()

        encrypted = engine.encrypt(plaintext, key)

        assert engine.decrypt(encrypted, key) == plaintext.upper()

    def test_lowercase_key_accepted(self, engine):
        assert engine.encrypt("HELLO", QWERTY_KEY.lower()) == "ITSSG"

    @pytest.mark.parametrize(
        "key",
        [
            QWERTY_KEY[:25],
            QWERTY_KEY + "A",
            "A" + QWERTY_KEY[1:],  # duplicate A
            "1" + QWERTY_KEY[1:],
            "",
        ],
    )
    def test_invalid_keys_rejected(self, engine, key):
        assert engine.validate_key(key) is False
        with pytest.raises(InvalidKeyError):
            engine.encrypt("HELLO", key)


class TestPlayfair:
    """Test suite for the Playfair cipher."""

    @pytest.fixture
    def engine(self):
        return PlayfairEngine()

    def test_matrix_from_keyword(self):
        matrix = playfair.build_matrix("MONARCHY")

        assert matrix == [
            ["M", "O", "N", "A", "R"],
            ["C", "H", "Y", "B", "D"],
            ["E", "F", "G", "I", "K"],
            ["L", "P", "Q", "S", "T"],
            ["U", "V", "W", "X", "Z"],
        ]

    def test_matrix_has_25_unique_letters_without_j(self):
        matrix = playfair.build_matrix("jumping jackdaws 42")
        letters = [c for row in matrix for c in row]

        assert len(letters) == 25
        assert len(set(letters)) == 25
        assert "J" not in letters
        assert letters[:4] == ["U", "M", "P", "I"]

    def test_classical_example_with_separated_doubles(self):
        """The well-known 'playfair example' vector, splitting the EE in TREE."""
        ciphertext = playfair.encode(
            "Hide the gold in the tree stump", "playfair example", separate_doubles=True
        )

        assert ciphertext == "BMODZBXDNABEKUDMUIXMMOUVIF"
        assert playfair.decode(ciphertext, "playfair example") == "HIDETHEGOLDINTHETREXESTUMP"

    def test_digraphs_without_separation(self):
        assert playfair.make_digraphs("BALLOON") == [("B", "A"), ("L", "L"), ("O", "O"), ("N", "X")]

    def test_digraphs_with_separation(self):
        assert playfair.make_digraphs("BALLOON", separate_doubles=True) == [
            ("B", "A"), ("L", "X"), ("L", "O"), ("O", "N"),
        ]

    def test_doubled_letters_roundtrip_without_separation(self):
        """Identical letters share a row, so they still decode."""
        ciphertext = playfair.encode("BALLOONS", "KEYWORD")
        assert playfair.decode(ciphertext, "KEYWORD") == "BALLOONS"

    def test_odd_length_padding_is_trimmed(self):
        ciphertext = playfair.encode("HELLO", "KEYWORD")

        assert len(ciphertext) == 6
        assert playfair.decode(ciphertext, "KEYWORD") == "HELLO"

    def test_trailing_x_in_plaintext_is_lost(self):
        """Decoding trims every trailing X, including real ones."""
        ciphertext = playfair.encode("FOX", "KEYWORD")
        assert playfair.decode(ciphertext, "KEYWORD") == "FO"

    def test_j_folds_into_i(self):
        ciphertext = playfair.encode("JAM", "KEYWORD")
        assert playfair.decode(ciphertext, "KEYWORD") == "IAM"

    def test_engine_roundtrip(self, engine):
        encrypted = engine.encrypt("Hello World", "KEYWORD")
        assert engine.decrypt(encrypted, "KEYWORD") == "HELLOWORLD"

    def test_engine_separate_doubles_option(self, engine):
        key = {"key": "playfair example", "separate_doubles": True}
        assert engine.encrypt("Hide the gold in the tree stump", key) == "BMODZBXDNABEKUDMUIXMMOUVIF"

    def test_empty_keyword_rejected(self, engine):
        with pytest.raises(InvalidKeyError):
            engine.encrypt("HELLO", "   ")

    def test_visualize_returns_matrix(self, engine):
        data = engine.visualize("HELLO", engine.encrypt("HELLO", "MONARCHY"), "MONARCHY", CipherMode.ENCODE)

        assert data["matrix"][0] == ["M", "O", "N", "A", "R"]
        assert data["digraphs"] == ["HE", "LL", "OX"]


class TestVigenere:
    """Test suite for the keyword-repeating additive cipher."""

    @pytest.fixture
    def engine(self):
        return VigenereEngine()

    def test_textbook_example(self):
        assert vigenere.encode("ATTACKATDAWN", "LEMON") == "LXFOPVEFRNHR"

    def test_decode_textbook_example(self):
        assert vigenere.decode("LXFOPVEFRNHR", "LEMON") == "ATTACKATDAWN"

    def test_text_and_key_are_normalized(self):
        assert vigenere.encode("attack at dawn!", "lemon 42") == "LXFOPVEFRNHR"

    def test_running_key(self):
        assert vigenere.running_key("ab", 5) == "ABABA"
        assert vigenere.running_key("LEMON", 3) == "LEM"

    def test_engine_roundtrip(self, engine):
        plaintext = "Divert troops to east ridge"
        encrypted = engine.encrypt(plaintext, "WHITE")

        assert engine.decrypt(encrypted, "WHITE") == "DIVERTTROOPSTOEASTRIDGE"

    def test_key_without_letters_rejected(self, engine):
        assert engine.validate_key("1234") is False
        with pytest.raises(InvalidKeyError):
            engine.encrypt("HELLO", "1234")


class TestXorPad:
    """Test suite for the XOR one-time pad."""

    @pytest.fixture
    def engine(self):
        return XorPadEngine()

    def test_xor_is_an_involution(self):
        text = "Attack at Dawn!"
        key = "SuperSecretPad!"

        assert xor_pad.xor(xor_pad.xor(text, key), key) == text

    def test_encode_and_decode_are_the_same(self):
        assert xor_pad.encode("HELLO", "XMCKL") == xor_pad.decode("HELLO", "XMCKL")

    def test_identical_characters_give_zero(self):
        assert xor_pad.xor("AB", "AB") == "\x00\x00"

    def test_longer_key_is_truncated(self):
        assert xor_pad.xor("AB", "ABC") == "\x00\x00"

    def test_short_key_strict_raises(self):
        with pytest.raises(KeyLengthMismatchError) as exc_info:
            xor_pad.xor("HELLO", "KEY")

        assert exc_info.value.details == {"text_length": 5, "key_length": 3}

    def test_short_key_repeat_policy_cycles(self):
        assert xor_pad.xor("AAAA", "A ", policy="repeat") == "\x00a\x00a"

    def test_engine_roundtrip(self, engine):
        key = engine.generate_random_key()
        plaintext = "Case Sensitive, spaces too."

        encrypted = engine.encrypt(plaintext, key)

        assert engine.decrypt(encrypted, key) == plaintext

    def test_engine_strict_by_default(self, engine):
        with pytest.raises(KeyLengthMismatchError):
            engine.encrypt("HELLO", "KEY")

    def test_engine_repeat_policy(self, engine):
        key = {"key": "KEY", "policy": "repeat"}
        encrypted = engine.encrypt("HELLO", key)

        assert engine.decrypt(encrypted, key) == "HELLO"

    def test_engine_rejects_unknown_policy(self, engine):
        with pytest.raises(InvalidKeyError):
            engine.encrypt("HELLO", {"key": "KEYKEY", "policy": "wrap"})

    def test_engine_rejects_empty_key(self, engine):
        assert engine.validate_key("") is False

    def test_visualize_hex(self, engine):
        data = engine.visualize("AB", "\x00\x03", "AA", CipherMode.ENCODE)

        assert data["output_hex"] == "00 03"
        assert data["codes"] == [0, 3]

    def test_generated_key_covers_long_text(self, engine):
        plaintext = "A" * 40
        key = engine.generate_key_for(plaintext)

        assert len(key) == 40
        assert engine.decrypt(engine.encrypt(plaintext, key), key) == plaintext

    def test_output_above_unicode_range_raises(self):
        with pytest.raises(UnrepresentableOutputError) as exc_info:
            xor_pad.xor("\U0001F600", "\U00100000")

        assert exc_info.value.details == {"position": 0, "code_point": 0x11F600}

    def test_output_in_surrogate_range_raises(self):
        with pytest.raises(UnrepresentableOutputError) as exc_info:
            xor_pad.xor("ok门", "ab一")

        assert exc_info.value.details == {"position": 2, "code_point": 0xDBE8}
