import string
import unicodedata
from enum import Enum


class NormalizationMode(str, Enum):
    """Text normalization modes."""

    STRICT = "strict"  # Letters only, uppercase
    UPPERCASE = "uppercase"  # Everything kept, uppercase


class TextNormalizer:
    """
    Normalizes text before it reaches a cipher.

    Handles:
    - Unicode normalization (NFKC) for letter-only modes
    - Case conversion
    - Non-alphabetic character removal
    """

    def __init__(self, alphabet: str = string.ascii_uppercase):
        """Initialize normalizer with the alphabet letters are filtered against."""
        self.alphabet = alphabet

    def normalize(
        self,
        text: str,
        mode: NormalizationMode = NormalizationMode.STRICT,
    ) -> str:
        """
        Normalize text for a cipher.

        Args:
            text: Input text to normalize
            mode: Normalization mode

        Returns:
            Normalized text string
        """
        if mode == NormalizationMode.UPPERCASE:
            return text.upper()

        text = unicodedata.normalize("NFKC", text)
        return self._filter_chars(text.upper(), self.alphabet)

    def _filter_chars(self, text: str, allowed: str) -> str:
        """Filter text to only allowed characters."""
        allowed_set = set(allowed)
        return "".join(char for char in text if char in allowed_set)


def letters_only(text: str) -> str:
    """Uppercase text with everything outside A-Z removed."""
    return TextNormalizer().normalize(text, NormalizationMode.STRICT)
