"""Substitution cipher engines."""

from cipherlab.services.engines.substitution.caesar import CaesarEngine
from cipherlab.services.engines.substitution.monoalphabetic import MonoalphabeticEngine
from cipherlab.services.engines.substitution.playfair import PlayfairEngine
from cipherlab.services.engines.substitution.vigenere import VigenereEngine
from cipherlab.services.engines.substitution.xor_pad import XorPadEngine

__all__ = [
    "CaesarEngine",
    "MonoalphabeticEngine",
    "PlayfairEngine",
    "VigenereEngine",
    "XorPadEngine",
]
