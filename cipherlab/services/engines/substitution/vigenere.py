import random
import string
from typing import ClassVar

from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine, CipherMode, KeyInput
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.preprocessing.normalizer import letters_only

ALPHABET = string.ascii_uppercase


def running_key(key: str, length: int) -> str:
    """Repeat the key's letters and cut the result to length."""
    letters = letters_only(key)
    if not letters:
        return ""
    repeats = length // len(letters) + 1
    return (letters * repeats)[:length]


def encode(plaintext: str, key: str) -> str:
    text = letters_only(plaintext)
    stream = running_key(key, len(text))

    return "".join(
        ALPHABET[(ALPHABET.index(p) + ALPHABET.index(k)) % 26]
        for p, k in zip(text, stream)
    )


def decode(ciphertext: str, key: str) -> str:
    text = letters_only(ciphertext)
    stream = running_key(key, len(text))

    return "".join(
        ALPHABET[(ALPHABET.index(c) - ALPHABET.index(k) + 26) % 26]
        for c, k in zip(text, stream)
    )


@EngineRegistry.register
class VigenereEngine(CipherEngine):
    """
    Vigenère cipher engine.

    A polyalphabetic substitution cipher that uses a keyword to determine
    the shift for each letter. The keyword is repeated to the length of
    the text and added letter by letter, modulo 26.

    Only letters survive: text and key are uppercased and everything
    outside A-Z is dropped before the key is lined up.
    """

    name = "Vigenère Cipher"
    cipher_type = CipherType.VIGENERE
    cipher_family = CipherFamily.SUBSTITUTION
    description = (
        "A polyalphabetic cipher where each letter is shifted by a different amount "
        "based on a repeating keyword. More secure than Caesar but vulnerable to "
        "Kasiski examination and frequency analysis per key position."
    )
    key_hint = "Keyword with at least one letter, e.g. LEMON."

    ALPHABET: ClassVar[str] = ALPHABET

    def encrypt(self, plaintext: str, key: KeyInput) -> str:
        """Encrypt using the keyword."""
        return encode(plaintext, self._parse_key(key))

    def decrypt(self, ciphertext: str, key: KeyInput) -> str:
        """Decrypt using the keyword."""
        return decode(ciphertext, self._parse_key(key))

    def generate_random_key(self) -> str:
        """Generate a random keyword of 4-10 letters."""
        length = random.randint(4, 10)
        return "".join(random.choice(self.ALPHABET) for _ in range(length))

    def explain(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> str:
        """Generate human-readable explanation."""
        keyword = self._parse_key(key)
        shifts = ", ".join(str(self.ALPHABET.index(c)) for c in keyword[:6])
        operation = "added to" if mode == CipherMode.ENCODE else "subtracted from"

        return (
            f"Vigenère cipher with keyword '{keyword}' (length {len(keyword)}). "
            f"Key letter values {shifts}{'...' if len(keyword) > 6 else ''} are "
            f"{operation} the letters in turn, modulo 26, repeating the keyword "
            f"as needed."
        )

    def _parse_key(self, key: KeyInput) -> str:
        """Parse key to an uppercase keyword of letters only."""
        keyword = letters_only(str(self._unwrap_key(key, "keyword") or ""))
        if not keyword:
            raise InvalidKeyError(self.name, "keyword must contain at least one letter")
        return keyword
