from typing import Any

from fastapi import HTTPException, status

from cipherlab.core.exceptions import (
    CipherLabError,
    EngineNotFoundError,
    KeyLengthMismatchError,
    UnrepresentableOutputError,
    ValidationError,
)
from cipherlab.models.schemas import ErrorResponse


def error_detail(exc: CipherLabError) -> dict[str, Any]:
    """Body for an HTTPException raised from a cipher lab error."""
    return ErrorResponse(
        error=type(exc).__name__,
        message=exc.message,
        details=exc.details,
    ).model_dump()


def http_error(exc: CipherLabError) -> HTTPException:
    """Map a cipher lab error to the matching HTTP status."""
    if isinstance(exc, EngineNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (ValidationError, KeyLengthMismatchError, UnrepresentableOutputError)):
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=error_detail(exc))
