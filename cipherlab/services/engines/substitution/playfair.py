import random
from typing import Any, ClassVar

from cipherlab.core.config import get_settings
from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine, CipherMode, KeyInput
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.preprocessing.normalizer import letters_only

SIZE = 5
FILLER = "X"
# 25 letters, J is left out of the square
SQUARE_ALPHABET = "ABCDEFGHIKLMNOPQRSTUVWXYZ"


def build_matrix(key: str) -> list[list[str]]:
    """
    Build the 5x5 key square.

    Unique key letters come first (J is skipped), followed by the rest of
    the alphabet in order.
    """
    seen: set[str] = set()
    letters = []

    for char in letters_only(key) + SQUARE_ALPHABET:
        if char != "J" and char not in seen:
            seen.add(char)
            letters.append(char)

    return [letters[row * SIZE:(row + 1) * SIZE] for row in range(SIZE)]


def prepare_text(text: str) -> str:
    """Uppercase, strip non-letters and fold J into I."""
    return letters_only(text).replace("J", "I")


def make_digraphs(text: str, separate_doubles: bool = False) -> list[tuple[str, str]]:
    """
    Split prepared text into letter pairs.

    A trailing singleton is padded with X. With separate_doubles, a filler
    is inserted between two identical letters that would share a pair.
    """
    pairs = []
    i = 0

    while i < len(text):
        first = text[i]
        if i + 1 >= len(text):
            pairs.append((first, FILLER))
            i += 1
        elif separate_doubles and text[i + 1] == first:
            pairs.append((first, "Q" if first == FILLER else FILLER))
            i += 1
        else:
            pairs.append((first, text[i + 1]))
            i += 2

    return pairs


def _transform(pairs: list[tuple[str, str]], matrix: list[list[str]], step: int) -> str:
    positions = {
        matrix[row][col]: (row, col)
        for row in range(SIZE)
        for col in range(SIZE)
    }
    result = []

    for a, b in pairs:
        row_a, col_a = positions[a]
        row_b, col_b = positions[b]

        if row_a == row_b:
            result.append(matrix[row_a][(col_a + step) % SIZE])
            result.append(matrix[row_b][(col_b + step) % SIZE])
        elif col_a == col_b:
            result.append(matrix[(row_a + step) % SIZE][col_a])
            result.append(matrix[(row_b + step) % SIZE][col_b])
        else:
            # Rectangle: own row, other letter's column
            result.append(matrix[row_a][col_b])
            result.append(matrix[row_b][col_a])

    return "".join(result)


def encode(plaintext: str, key: str, separate_doubles: bool = False) -> str:
    matrix = build_matrix(key)
    return _transform(make_digraphs(prepare_text(plaintext), separate_doubles), matrix, 1)


def decode(ciphertext: str, key: str) -> str:
    matrix = build_matrix(key)
    decoded = _transform(make_digraphs(prepare_text(ciphertext)), matrix, SIZE - 1)
    return decoded.rstrip(FILLER)


@EngineRegistry.register
class PlayfairEngine(CipherEngine):
    """
    Playfair cipher engine.

    The Playfair cipher encrypts digraphs (pairs of letters) using a 5x5 key square.
    The alphabet is reduced to 25 letters (J is dropped and read as I).

    Rules for encryption:
    1. Same row: replace each letter with the one to its right
    2. Same column: replace each letter with the one below
    3. Rectangle: swap corners horizontally

    Doubled letters are paired as they stand unless separate_doubles is set,
    in which case an X splits them (e.g., "BALLOON" -> "BA LX LO ON").
    Trailing X characters are removed after decryption.
    """

    name = "Playfair Cipher"
    cipher_type = CipherType.PLAYFAIR
    cipher_family = CipherFamily.SUBSTITUTION
    description = (
        "A digraph substitution cipher using a 5x5 key square. "
        "Pairs of letters are encrypted together based on their positions "
        "in the square. I and J are treated as the same letter."
    )
    key_hint = 'Keyword, e.g. MONARCHY. Pass {"key": ..., "separate_doubles": true} to split doubled letters.'

    ALPHABET: ClassVar[str] = SQUARE_ALPHABET
    COMMON_KEYS: ClassVar[list[str]] = [
        "PLAYFAIR", "SECRET", "KEYWORD", "CIPHER", "MONARCHY",
        "EXAMPLE", "CRYPTO", "HIDDEN", "SECURE", "SQUARE",
    ]

    def encrypt(self, plaintext: str, key: KeyInput) -> str:
        """Encrypt using the keyword."""
        keyword = self._parse_key(key)
        return encode(plaintext, keyword, self._separate_doubles(key))

    def decrypt(self, ciphertext: str, key: KeyInput) -> str:
        """Decrypt using the keyword."""
        return decode(ciphertext, self._parse_key(key))

    def generate_random_key(self) -> str:
        """Pick one of the common keywords."""
        return random.choice(self.COMMON_KEYS)

    def explain(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> str:
        """Generate human-readable explanation."""
        keyword = self._parse_key(key)
        square = build_matrix(keyword)

        # Show first two rows of the key square
        square_preview = " ".join(square[0]) + "\n" + " ".join(square[1])
        rule = "right/down" if mode == CipherMode.ENCODE else "left/up"

        return (
            f"Playfair cipher with keyword '{keyword}'. "
            f"5x5 key square (first 2 rows):\n{square_preview}\n"
            f"Letters are processed in pairs: same row or column moves {rule}, "
            f"otherwise each letter takes the other's column."
        )

    def visualize(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> dict[str, Any]:
        """Key square and the digraphs that went through it."""
        separate = self._separate_doubles(key) if mode == CipherMode.ENCODE else False
        pairs = make_digraphs(prepare_text(source), separate)
        return {
            "matrix": build_matrix(self._parse_key(key)),
            "digraphs": ["".join(pair) for pair in pairs],
        }

    def _parse_key(self, key: KeyInput) -> str:
        """Parse key to keyword string."""
        value = self._unwrap_key(key, "keyword")
        if value is None or not str(value).strip():
            raise InvalidKeyError(self.name, "keyword is required")
        return str(value).strip().upper()

    def _separate_doubles(self, key: KeyInput) -> bool:
        if isinstance(key, dict) and "separate_doubles" in key:
            return bool(key["separate_doubles"])
        return get_settings().playfair_separate_doubles
