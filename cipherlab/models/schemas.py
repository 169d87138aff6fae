from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# ============================================================================
# Enums
# ============================================================================


class CipherFamily(str, Enum):
    """Supported cipher families."""

    SUBSTITUTION = "substitution"
    TRANSPOSITION = "transposition"


class CipherType(str, Enum):
    """Specific cipher types."""

    CAESAR = "caesar"
    MONOALPHABETIC = "monoalphabetic"
    PLAYFAIR = "playfair"
    VIGENERE = "vigenere"
    XOR_PAD = "xor_pad"
    RAIL_FENCE = "rail_fence"
    COLUMNAR = "columnar"


class DigestAlgorithm(str, Enum):
    """Digest algorithms offered by the hashing collaborator."""

    SHA1 = "SHA-1"
    SHA256 = "SHA-256"
    SHA384 = "SHA-384"
    SHA512 = "SHA-512"


# ============================================================================
# Request Schemas
# ============================================================================


class EncryptRequest(BaseModel):
    """Request schema for /encrypt endpoint."""

    plaintext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    key: int | str | dict[str, Any] | None = None
    options: dict[str, Any] = Field(default_factory=dict)


class DecryptRequest(BaseModel):
    """Request schema for /decrypt endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    key: int | str | dict[str, Any]
    options: dict[str, Any] = Field(default_factory=dict)


class DigestRequest(BaseModel):
    """Request schema for /digest endpoint."""

    text: str = Field(max_length=100_000)
    algorithm: DigestAlgorithm = DigestAlgorithm.SHA256


# ============================================================================
# Response Schemas
# ============================================================================


class CipherInfo(BaseModel):
    """Description of a registered cipher engine."""

    cipher_type: CipherType
    cipher_family: CipherFamily
    name: str
    description: str
    key_hint: str


class CipherListResponse(BaseModel):
    """Response schema for /ciphers endpoint."""

    items: list[CipherInfo]
    total: int


class KeyResponse(BaseModel):
    """Response schema for random key generation."""

    cipher_type: CipherType
    key: int | str


class EncryptResponse(BaseModel):
    """Response schema for /encrypt endpoint."""

    ciphertext: str
    cipher_type: CipherType
    key_used: int | str | dict[str, Any]
    explanation: str
    visual_data: dict[str, Any] = Field(default_factory=dict)


class DecryptResponse(BaseModel):
    """Response schema for /decrypt endpoint."""

    plaintext: str
    cipher_type: CipherType
    key_used: int | str | dict[str, Any]
    explanation: str
    visual_data: dict[str, Any] = Field(default_factory=dict)


class DigestResponse(BaseModel):
    """Response schema for /digest endpoint."""

    algorithm: DigestAlgorithm
    digest: str


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
