import random
import string
from typing import ClassVar

from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine, CipherMode, KeyInput
from cipherlab.services.engines.registry import EngineRegistry

ALPHABET = string.ascii_uppercase


def encode(plaintext: str, key: str) -> str:
    """Substitute ALPHABET[i] with key[i]; other characters pass through."""
    result = []

    for char in plaintext.upper():
        index = ALPHABET.find(char)
        result.append(key[index] if index != -1 else char)

    return "".join(result)


def decode(ciphertext: str, key: str) -> str:
    """Substitute key[i] with ALPHABET[i]; other characters pass through."""
    result = []

    for char in ciphertext.upper():
        index = key.find(char)
        result.append(ALPHABET[index] if index != -1 else char)

    return "".join(result)


@EngineRegistry.register
class MonoalphabeticEngine(CipherEngine):
    """
    Monoalphabetic substitution cipher engine.

    Each letter is replaced with another letter according to a fixed permutation
    of the alphabet. The key is the permuted alphabet itself: the letter at
    position i replaces the i-th letter of A-Z.
    """

    name = "Monoalphabetic Cipher"
    cipher_type = CipherType.MONOALPHABETIC
    cipher_family = CipherFamily.SUBSTITUTION
    description = (
        "Each letter is mapped to a different letter using a permutation of the "
        "alphabet. With 26! (about 4 x 10^26) possible keys brute force is "
        "hopeless, but letter frequencies survive and give it away."
    )
    key_hint = "26 unique letters, e.g. QWERTYUIOPASDFGHJKLZXCVBNM."

    ALPHABET: ClassVar[str] = ALPHABET

    def encrypt(self, plaintext: str, key: KeyInput) -> str:
        """Encrypt using the substitution key."""
        return encode(plaintext, self._parse_key(key))

    def decrypt(self, ciphertext: str, key: KeyInput) -> str:
        """Decrypt using the substitution key."""
        return decode(ciphertext, self._parse_key(key))

    def generate_random_key(self) -> str:
        """Generate a random permutation of the alphabet."""
        letters = list(self.ALPHABET)
        random.shuffle(letters)
        return "".join(letters)

    def explain(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> str:
        """Generate human-readable explanation."""
        key_str = self._parse_key(key)

        # Show first few letter mappings
        sample_mappings = ", ".join(
            f"{self.ALPHABET[i]}→{key_str[i]}"
            for i in range(5)
        )
        action = (
            "Each plaintext letter was replaced by the key letter at the same position"
            if mode == CipherMode.ENCODE
            else "Each ciphertext letter was looked up in the key and replaced by "
                 "the alphabet letter at that position"
        )

        return (
            f"Monoalphabetic substitution with key: {key_str}. "
            f"The alphabet is mapped as: {sample_mappings}, etc. "
            f"{action}."
        )

    def _parse_key(self, key: KeyInput) -> str:
        """Parse key to an uppercase 26-letter permutation."""
        key_str = str(self._unwrap_key(key, "permutation") or "").strip().upper()

        if len(key_str) != 26:
            raise InvalidKeyError(self.name, "key must be exactly 26 characters")
        if any(c not in self.ALPHABET for c in key_str):
            raise InvalidKeyError(self.name, "key must contain only letters A-Z")
        if len(set(key_str)) != 26:
            raise InvalidKeyError(self.name, "key letters must be unique")

        return key_str
