import logging

from fastapi import APIRouter

from cipherlab.api.v1.errors import http_error
from cipherlab.core.exceptions import CipherLabError, TextTooLongError
from cipherlab.dependencies import SettingsDep
from cipherlab.models.schemas import DigestRequest, DigestResponse, ErrorResponse
from cipherlab.services.digest import digest_text

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=DigestResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    summary="Hash text",
    description="Hash UTF-8 text with SHA-1, SHA-256, SHA-384 or SHA-512.",
)
async def hash_text(request: DigestRequest, settings: SettingsDep) -> DigestResponse:
    """Return the hex digest of the request text."""
    try:
        if len(request.text) > settings.max_text_length:
            raise TextTooLongError(len(request.text), settings.max_text_length)
        hex_digest = digest_text(request.algorithm, request.text)
    except CipherLabError as e:
        logger.warning("Digest rejected: %s", e.message)
        raise http_error(e)

    return DigestResponse(algorithm=request.algorithm, digest=hex_digest)
