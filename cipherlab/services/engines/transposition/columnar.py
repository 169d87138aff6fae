import math
import random
import string
from typing import Any, ClassVar

from cipherlab.core.config import get_settings
from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine, CipherMode, KeyInput
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.preprocessing.normalizer import NormalizationMode, TextNormalizer

DEFAULT_PAD = "_"


def column_order(key: str) -> list[int]:
    """Column indices sorted by key digit value, ties kept in key order."""
    return sorted(range(len(key)), key=lambda i: int(key[i]))


def is_contiguous_key(key: str) -> bool:
    """True when the digits are unique and run from their min to their max."""
    digits = sorted(int(c) for c in key)
    return digits == list(range(digits[0], digits[0] + len(digits)))


def build_grid(text: str, num_cols: int, pad: str = DEFAULT_PAD) -> list[list[str]]:
    """Row-major grid of text, last row filled out with pad."""
    num_rows = math.ceil(len(text) / num_cols)
    padded = text.ljust(num_rows * num_cols, pad)
    return [list(padded[row * num_cols:(row + 1) * num_cols]) for row in range(num_rows)]


def encode(plaintext: str, key: str, pad: str = DEFAULT_PAD) -> str:
    text = TextNormalizer().normalize(plaintext, NormalizationMode.UPPERCASE)
    grid = build_grid(text, len(key), pad)

    # Read columns in key order, top to bottom
    return "".join(
        row[col]
        for col in column_order(key)
        for row in grid
    )


def decode(ciphertext: str, key: str, pad: str = DEFAULT_PAD) -> str:
    """Rebuild the grid column by column and read it row by row, padding included."""
    num_cols = len(key)
    num_rows = math.ceil(len(ciphertext) / num_cols)
    grid = [[pad] * num_cols for _ in range(num_rows)]

    chars = iter(ciphertext)
    for col in column_order(key):
        for row in range(num_rows):
            char = next(chars, None)
            if char is None:
                break
            grid[row][col] = char

    return "".join("".join(row) for row in grid)


def strip_padding(text: str, pad: str = DEFAULT_PAD) -> str:
    return text.rstrip(pad)


@EngineRegistry.register
class ColumnarEngine(CipherEngine):
    """
    Columnar Transposition cipher engine.

    The plaintext is written into a grid row by row, then the columns
    are read out in the order given by the digits of a numeric key.

    Example with key "25431" (read order: 1, 2, 3, 4, 5):

    Key:    2 5 4 3 1
            ─────────
            A T T A C
            K . A T .  (. is a space)
            D A W N _  (padded)

    Read columns in sorted order: "C _", "AKD", "ATN", "TAW", "T A"

    The pad character marks the filled-in cells and is stripped from the
    end of decrypted text unless keep_padding is set.
    """

    name = "Columnar Transposition Cipher"
    cipher_type = CipherType.COLUMNAR
    cipher_family = CipherFamily.TRANSPOSITION
    description = (
        "A transposition cipher where plaintext is written into a grid "
        "by rows, then read out by columns in an order determined by "
        "the digits of a numeric key."
    )
    key_hint = (
        'Digit string, one digit per column, e.g. 25431. Pass {"key": ..., "strict": true} '
        "to require unique, consecutive digits."
    )

    DIGITS: ClassVar[str] = string.digits

    def encrypt(self, plaintext: str, key: KeyInput) -> str:
        """Encrypt using the digit key."""
        return encode(plaintext, self._parse_key(key), self._pad(key))

    def decrypt(self, ciphertext: str, key: KeyInput) -> str:
        """Decrypt using the digit key."""
        pad = self._pad(key)
        plaintext = decode(ciphertext, self._parse_key(key), pad)

        if isinstance(key, dict) and key.get("keep_padding"):
            return plaintext
        return strip_padding(plaintext, pad)

    def generate_random_key(self) -> str:
        """Generate a random permutation of 1..n for 3 to 9 columns."""
        digits = [str(d) for d in range(1, random.randint(3, 9) + 1)]
        random.shuffle(digits)
        return "".join(digits)

    def explain(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> str:
        """Generate human-readable explanation."""
        key_str = self._parse_key(key)
        order = ", ".join(str(i + 1) for i in column_order(key_str))

        if mode == CipherMode.ENCODE:
            steps = (
                f"The plaintext was written in rows of {len(key_str)}, "
                f"then columns were read in the order {order}."
            )
        else:
            steps = (
                f"The ciphertext was written column by column in the order {order}, "
                f"then read row by row to recover the plaintext."
            )

        return f"Columnar transposition with key '{key_str}'. {steps}"

    def visualize(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> dict[str, Any]:
        """The plaintext grid and the order its columns are read in."""
        key_str = self._parse_key(key)
        pad = self._pad(key)

        if mode == CipherMode.ENCODE:
            text = TextNormalizer().normalize(source, NormalizationMode.UPPERCASE)
        else:
            text = decode(source, key_str, pad)

        return {
            "grid": build_grid(text, len(key_str), pad),
            "column_order": column_order(key_str),
        }

    def _parse_key(self, key: KeyInput) -> str:
        """Parse key to a digit string, applying the contiguity rule in strict mode."""
        value = self._unwrap_key(key, "digits")
        key_str = str(value if value is not None else "").strip()

        if not key_str or any(c not in self.DIGITS for c in key_str):
            raise InvalidKeyError(self.name, "key must be a string of digits")

        strict = get_settings().columnar_strict_keys
        if isinstance(key, dict) and "strict" in key:
            strict = bool(key["strict"])

        if strict and not is_contiguous_key(key_str):
            raise InvalidKeyError(
                self.name,
                "key digits must be unique and consecutive (e.g. 231, not 241)",
            )

        return key_str

    def _pad(self, key: KeyInput) -> str:
        pad = key.get("pad") if isinstance(key, dict) else None
        pad = pad or get_settings().columnar_pad_char
        if not isinstance(pad, str) or len(pad) != 1:
            raise InvalidKeyError(self.name, "pad must be a single character")
        return pad
