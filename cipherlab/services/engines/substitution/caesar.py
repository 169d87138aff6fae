import random
import string
from typing import Any, ClassVar

from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine, CipherMode, KeyInput
from cipherlab.services.engines.registry import EngineRegistry

ALPHABET_SIZE = 26


def shift(text: str, k: int) -> str:
    """Rotate every ASCII letter by k places, keeping its case."""
    result = []

    for char in text:
        if char in string.ascii_uppercase:
            base = ord("A")
        elif char in string.ascii_lowercase:
            base = ord("a")
        else:
            result.append(char)
            continue
        result.append(chr((ord(char) - base + k) % ALPHABET_SIZE + base))

    return "".join(result)


def encode(plaintext: str, k: int) -> str:
    return shift(plaintext, k)


def decode(ciphertext: str, k: int) -> str:
    return shift(ciphertext, ALPHABET_SIZE - (k % ALPHABET_SIZE))


@EngineRegistry.register
class CaesarEngine(CipherEngine):
    """
    Caesar cipher engine.

    The Caesar cipher is a simple substitution cipher that shifts each letter
    by a fixed amount. Case is kept and anything that is not a letter
    passes through untouched.
    """

    name = "Caesar Cipher"
    cipher_type = CipherType.CAESAR
    cipher_family = CipherFamily.SUBSTITUTION
    description = (
        "A substitution cipher where each letter is shifted by a fixed amount. "
        "Named after Julius Caesar who used it for military communications."
    )
    key_hint = "Non-negative integer shift, taken modulo 26."

    DIGITS: ClassVar[str] = string.digits

    def encrypt(self, plaintext: str, key: KeyInput) -> str:
        """Encrypt plaintext with the given shift."""
        return encode(plaintext, self._parse_key(key))

    def decrypt(self, ciphertext: str, key: KeyInput) -> str:
        """Decrypt by shifting the rest of the way around the alphabet."""
        return decode(ciphertext, self._parse_key(key))

    def generate_random_key(self) -> int:
        """Generate a random shift (1-25, excluding 0 and 26)."""
        return random.randint(1, 25)

    def explain(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> str:
        """Generate human-readable explanation."""
        k = self._parse_key(key) % ALPHABET_SIZE
        direction = "forward" if mode == CipherMode.ENCODE else "back"

        return (
            f"Caesar cipher with shift of {k}. "
            f"Each letter was shifted {direction} {k} positions in the alphabet. "
            f"For example, the first character '{source[0] if source else 'N/A'}' "
            f"becomes '{result[0] if result else 'N/A'}'."
        )

    def _parse_key(self, key: KeyInput) -> int:
        """Parse key to a non-negative integer shift."""
        value: Any = self._unwrap_key(key, "shift")

        if isinstance(value, bool):
            raise InvalidKeyError(self.name, "shift must be a non-negative integer")
        if isinstance(value, int):
            if value < 0:
                raise InvalidKeyError(self.name, "shift must be a non-negative integer")
            return value

        value = str(value if value is not None else "").strip()
        if not value or any(c not in self.DIGITS for c in value):
            raise InvalidKeyError(self.name, "shift must be a non-negative integer")

        return int(value)
