from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.models.schemas import CipherFamily, CipherType

KeyInput = int | str | dict[str, Any]


class CipherMode(str, Enum):
    """Direction of a cipher operation."""

    ENCODE = "encode"
    DECODE = "decode"


@dataclass(frozen=True)
class CipherRequest:
    """A single encode or decode submission."""

    text: str
    key: KeyInput
    mode: CipherMode = CipherMode.ENCODE


@dataclass
class CipherResult:
    """Result of an encode or decode operation."""

    text: str
    key: int | str | dict[str, Any]
    explanation: str
    visual_data: dict[str, Any] = field(default_factory=dict)


class CipherEngine(ABC):
    """
    Abstract base class for all cipher engines.

    An engine is the boundary around one cipher's pure functions.
    Each cipher implementation must provide:
    - encrypt(): Validate the key and encode plaintext
    - decrypt(): Validate the key and decode ciphertext
    - validate_key(): Check a key without using it
    - generate_random_key(): Produce a valid key
    - explain(): Generate human-readable explanation
    """

    # Cipher metadata
    name: str
    cipher_type: CipherType
    cipher_family: CipherFamily
    description: str
    key_hint: str

    @abstractmethod
    def encrypt(self, plaintext: str, key: KeyInput) -> str:
        """
        Encrypt plaintext with the given key.

        Args:
            plaintext: The plaintext to encrypt
            key: The encryption key

        Returns:
            Ciphertext

        Raises:
            InvalidKeyError: If the key is malformed
        """
        pass

    @abstractmethod
    def decrypt(self, ciphertext: str, key: KeyInput) -> str:
        """
        Decrypt ciphertext with the given key.

        Args:
            ciphertext: The ciphertext to decrypt
            key: The decryption key

        Returns:
            Plaintext

        Raises:
            InvalidKeyError: If the key is malformed
        """
        pass

    @abstractmethod
    def generate_random_key(self) -> int | str:
        """
        Generate a random valid key for this cipher.

        Returns:
            A randomly generated key
        """
        pass

    def generate_key_for(self, text: str) -> int | str:
        """Random key suitable for encrypting text."""
        return self.generate_random_key()

    @abstractmethod
    def explain(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> str:
        """
        Generate human-readable explanation of an operation.

        Args:
            source: The text that was transformed
            result: The transformed text
            key: The key used
            mode: Whether the text was encoded or decoded

        Returns:
            Explanation string
        """
        pass

    def validate_key(self, key: KeyInput) -> bool:
        """
        Validate that a key is valid for this cipher.

        Args:
            key: The key to validate

        Returns:
            True if key is valid
        """
        try:
            self._parse_key(key)
        except (InvalidKeyError, ValueError, TypeError):
            return False
        return True

    def visualize(self, source: str, result: str, key: KeyInput, mode: CipherMode) -> dict[str, Any]:
        """Return grid data for display. Engines without a grid return nothing."""
        return {}

    def apply(self, request: CipherRequest) -> CipherResult:
        """Run a request through encrypt or decrypt and describe the outcome."""
        if request.mode == CipherMode.ENCODE:
            output = self.encrypt(request.text, request.key)
        else:
            output = self.decrypt(request.text, request.key)

        return CipherResult(
            text=output,
            key=self.display_key(request.key),
            explanation=self.explain(request.text, output, request.key, request.mode),
            visual_data=self.visualize(request.text, output, request.key, request.mode),
        )

    def display_key(self, key: KeyInput) -> int | str | dict[str, Any]:
        """Key as echoed back to the caller."""
        return key

    @abstractmethod
    def _parse_key(self, key: KeyInput) -> Any:
        """
        Parse and validate a raw key.

        Raises:
            InvalidKeyError: If the key is malformed
        """
        pass

    @staticmethod
    def _unwrap_key(key: KeyInput, *names: str) -> Any:
        """Pull the key value out of a dict key, trying each name in turn."""
        if not isinstance(key, dict):
            return key
        for name in names + ("key",):
            if name in key:
                return key[name]
        return None


def with_options(key: KeyInput, options: dict[str, Any]) -> KeyInput:
    """Fold request options into the key so engines see a single value."""
    if not options:
        return key
    if isinstance(key, dict):
        return {**options, **key}
    return {**options, "key": key}
