import secrets
import string
from typing import Any, ClassVar, Literal

from cipherlab.core.config import get_settings
from cipherlab.core.exceptions import InvalidKeyError, KeyLengthMismatchError, UnrepresentableOutputError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine, CipherMode, KeyInput
from cipherlab.services.engines.registry import EngineRegistry

KeyPolicy = Literal["strict", "repeat"]
POLICIES: tuple[str, ...] = ("strict", "repeat")
MAX_CODE_POINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)


def xor(text: str, key: str, policy: KeyPolicy = "strict") -> str:
    """
    XOR each character code of text with the matching key character.

    Under the strict policy a key shorter than the text is an error and a
    longer key is cut to the text length. Under the repeat policy the key
    is cycled to cover the text.

    Raises:
        KeyLengthMismatchError: Strict policy and key shorter than text
        UnrepresentableOutputError: A result code is a surrogate or above U+10FFFF
    """
    if policy == "strict":
        if len(key) < len(text):
            raise KeyLengthMismatchError(len(text), len(key))
        pad = key[:len(text)]
    else:
        pad = (key * (len(text) // len(key) + 1))[:len(text)] if key else ""

    output = []
    for position, (t, k) in enumerate(zip(text, pad)):
        code = ord(t) ^ ord(k)
        if code > MAX_CODE_POINT or code in SURROGATES:
            raise UnrepresentableOutputError(position, code)
        output.append(chr(code))

    return "".join(output)


def encode(plaintext: str, key: str, policy: KeyPolicy = "strict") -> str:
    return xor(plaintext, key, policy)


def decode(ciphertext: str, key: str, policy: KeyPolicy = "strict") -> str:
    return xor(ciphertext, key, policy)


@EngineRegistry.register
class XorPadEngine(CipherEngine):
    """
    Vernam one-time pad engine.

    Works on raw character codes: nothing is normalized, case and
    punctuation are kept, and encoding and decoding are the same XOR.
    The output may contain control characters, so the hex form is
    returned alongside it.
    """

    name = "Vernam Cipher (XOR One-Time Pad)"
    cipher_type = CipherType.XOR_PAD
    cipher_family = CipherFamily.SUBSTITUTION
    description = (
        "Each character code is XORed with the matching character of a key at "
        "least as long as the message. With a truly random key used only once "
        "this is the one-time pad."
    )
    key_hint = 'Key at least as long as the text. Pass {"key": ..., "policy": "repeat"} to cycle a shorter key.'

    KEY_CHARS: ClassVar[str] = string.ascii_letters + string.digits
    RANDOM_KEY_LENGTH: ClassVar[int] = 32

    def encrypt(self, plaintext: str, key: KeyInput) -> str:
        """XOR plaintext with the pad."""
        return encode(plaintext, self._parse_key(key), self._policy(key))

    def decrypt(self, ciphertext: str, key: KeyInput) -> str:
        """XOR ciphertext with the pad."""
        return decode(ciphertext, self._parse_key(key), self._policy(key))

    def generate_random_key(self, length: int | None = None) -> str:
        """Generate a random alphanumeric pad."""
        length = length or self.RANDOM_KEY_LENGTH
        return "".join(secrets.choice(self.KEY_CHARS) for _ in range(length))

    def generate_key_for(self, text: str) -> str:
        """A fresh pad exactly as long as the text."""
        return self.generate_random_key(len(text))

    def explain(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> str:
        """Generate human-readable explanation."""
        pad = self._parse_key(key)
        policy = self._policy(key)
        coverage = (
            "the key was cycled to cover the text"
            if policy == "repeat" and len(pad) < len(source)
            else "each character used its own key character"
        )

        return (
            f"Vernam XOR with a {len(pad)}-character key over {len(source)} characters; "
            f"{coverage}. Applying the same key again restores the input, "
            f"since (x XOR k) XOR k = x."
        )

    def visualize(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> dict[str, Any]:
        """Hex of the output, which may hold unprintable characters."""
        return {
            "output_hex": " ".join(f"{ord(c):02x}" for c in result),
            "codes": [ord(c) for c in result],
        }

    def display_key(self, key: KeyInput) -> str:
        return self._parse_key(key)

    def _parse_key(self, key: KeyInput) -> str:
        """Parse key to the raw pad string."""
        value = self._unwrap_key(key, "pad")
        if value is None or value == "":
            raise InvalidKeyError(self.name, "key is required")
        return str(value)

    def _policy(self, key: KeyInput) -> KeyPolicy:
        policy = key.get("policy") if isinstance(key, dict) else None
        policy = policy or get_settings().xor_key_policy
        if policy not in POLICIES:
            raise InvalidKeyError(self.name, f"policy must be one of {', '.join(POLICIES)}")
        return policy
