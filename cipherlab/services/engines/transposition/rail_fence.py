import random
import string
from typing import Any, ClassVar

from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine, CipherMode, KeyInput
from cipherlab.services.engines.registry import EngineRegistry


def effective_rails(length: int, rails: int) -> int:
    """Rails beyond the text length only add empty rows."""
    return max(1, min(rails, length))


def rail_pattern(length: int, rails: int) -> list[int]:
    """Rail index for each position, bouncing between 0 and rails - 1."""
    rails = effective_rails(length, rails)
    if rails == 1:
        return [0] * length

    pattern = []
    rail = 0
    direction = 1  # 1 = down, -1 = up

    for _ in range(length):
        pattern.append(rail)

        # Change direction at top or bottom
        if rail == 0:
            direction = 1
        elif rail == rails - 1:
            direction = -1

        rail += direction

    return pattern


def encode(plaintext: str, rails: int) -> str:
    fence: list[list[str]] = [[] for _ in range(effective_rails(len(plaintext), rails))]

    for char, rail in zip(plaintext, rail_pattern(len(plaintext), rails)):
        fence[rail].append(char)

    # Read off each rail
    return "".join("".join(row) for row in fence)


def decode(ciphertext: str, rails: int) -> str:
    pattern = rail_pattern(len(ciphertext), rails)

    sizes = [0] * effective_rails(len(ciphertext), rails)
    for rail in pattern:
        sizes[rail] += 1

    # Slice the ciphertext into rails by how many positions each rail owns
    fence = []
    idx = 0
    for length in sizes:
        fence.append(iter(ciphertext[idx:idx + length]))
        idx += length

    # Read off in zigzag order
    return "".join(next(fence[rail]) for rail in pattern)


@EngineRegistry.register
class RailFenceEngine(CipherEngine):
    """
    Rail Fence cipher engine.

    The Rail Fence cipher writes the plaintext in a zigzag pattern across
    a number of "rails" (rows), then reads off each rail in order to
    produce the ciphertext.

    Example with 3 rails:
    Plaintext: WEAREDISCOVEREDFLEEATONCE

    W . . . E . . . C . . . R . . . L . . . T . . . E
    . E . R . D . S . O . E . E . F . E . A . O . C .
    . . A . . . I . . . V . . . D . . . E . . . N . .

    Read off rows: WECRLTE + ERDSOEEFEAOC + AIVDEN
    """

    name = "Rail Fence Cipher"
    cipher_type = CipherType.RAIL_FENCE
    cipher_family = CipherFamily.TRANSPOSITION
    description = (
        "A transposition cipher that writes plaintext in a zigzag pattern "
        "across multiple 'rails' (rows), then reads each rail in sequence. "
        "The number of rails is the key."
    )
    key_hint = "Number of rails, an integer of at least 2."

    DIGITS: ClassVar[str] = string.digits

    def encrypt(self, plaintext: str, key: KeyInput) -> str:
        """Encrypt using the specified number of rails."""
        return encode(plaintext, self._parse_key(key))

    def decrypt(self, ciphertext: str, key: KeyInput) -> str:
        """Decrypt using the specified number of rails."""
        return decode(ciphertext, self._parse_key(key))

    def generate_random_key(self) -> int:
        """Generate a random number of rails (2-10)."""
        return random.randint(2, 10)

    def explain(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> str:
        """Generate human-readable explanation."""
        rails = self._parse_key(key)

        if mode == CipherMode.ENCODE:
            steps = (
                f"The plaintext is written in a zigzag pattern across {rails} rows, "
                f"then each row is read in sequence to form the ciphertext."
            )
        else:
            steps = (
                f"The zigzag over {rails} rows is rebuilt to see how many characters "
                f"each row holds, the ciphertext is cut into those rows, and the "
                f"zigzag is walked again to read the plaintext."
            )

        return f"Rail Fence cipher with {rails} rails. {steps}"

    def visualize(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> dict[str, Any]:
        """Characters on each rail as [column, char] pairs, with the zigzag pattern."""
        plaintext = source if mode == CipherMode.ENCODE else result
        rails = effective_rails(len(plaintext), self._parse_key(key))
        pattern = rail_pattern(len(plaintext), rails)
        rows: list[list[list[Any]]] = [[] for _ in range(rails)]

        for col, (char, rail) in enumerate(zip(plaintext, pattern)):
            rows[rail].append([col, char])

        return {"rails": rows, "pattern": pattern}

    def _parse_key(self, key: KeyInput) -> int:
        """Parse key to number of rails."""
        value: Any = self._unwrap_key(key, "rails")

        if isinstance(value, int) and not isinstance(value, bool):
            rails = value
        else:
            value = str(value if value is not None else "").strip()
            if not value or any(c not in self.DIGITS for c in value):
                raise InvalidKeyError(self.name, "rails must be a positive integer")
            rails = int(value)

        if rails < 2:
            raise InvalidKeyError(self.name, "number of rails must be at least 2")

        return rails
