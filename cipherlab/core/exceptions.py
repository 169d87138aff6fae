from typing import Any


class CipherLabError(Exception):
    """Base exception for all cipher lab errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(CipherLabError):
    """Raised when input validation fails."""

    pass


class TextTooLongError(ValidationError):
    """Raised when input text exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Text length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class InvalidKeyError(ValidationError):
    """Raised when a key is malformed for the selected cipher."""

    def __init__(self, cipher_name: str, reason: str):
        super().__init__(
            f"Invalid key for {cipher_name}: {reason}",
            {"cipher": cipher_name, "reason": reason},
        )


class EngineError(CipherLabError):
    """Base exception for cipher engine errors."""

    pass


class EngineNotFoundError(EngineError):
    """Raised when requested cipher engine is not found."""

    def __init__(self, engine_name: str):
        super().__init__(
            f"Cipher engine '{engine_name}' not found",
            {"engine_name": engine_name},
        )


class KeyLengthMismatchError(EngineError):
    """Raised when a one-time pad key is shorter than the text."""

    def __init__(self, text_length: int, key_length: int):
        super().__init__(
            f"Key length {key_length} is shorter than text length {text_length}",
            {"text_length": text_length, "key_length": key_length},
        )


class UnsupportedAlgorithmError(ValidationError):
    """Raised when a digest algorithm is not supported."""

    def __init__(self, algorithm: str, supported: list[str]):
        super().__init__(
            f"Digest algorithm '{algorithm}' is not supported",
            {"algorithm": algorithm, "supported": supported},
        )


class UnrepresentableOutputError(EngineError):
    """Raised when a cipher produces a code point that is not a valid character."""

    def __init__(self, position: int, code_point: int):
        super().__init__(
            f"Output at position {position} is code point {code_point:#x}, "
            f"which is not a valid character",
            {"position": position, "code_point": code_point},
        )
