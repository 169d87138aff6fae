import logging

from fastapi import APIRouter, HTTPException, status

from cipherlab.api.v1.errors import http_error
from cipherlab.core.exceptions import CipherLabError, TextTooLongError
from cipherlab.dependencies import RegistryDep, SettingsDep
from cipherlab.models.schemas import DecryptRequest, DecryptResponse, ErrorResponse
from cipherlab.services.engines.base import CipherMode, CipherRequest, with_options

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=DecryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
        500: {"model": ErrorResponse, "description": "Decryption failed"},
    },
    summary="Decrypt ciphertext",
    description="Decrypt ciphertext using a specified cipher type and key.",
)
async def decrypt_ciphertext(
    request: DecryptRequest,
    settings: SettingsDep,
    registry: RegistryDep,
) -> DecryptResponse:
    """
    Decrypt ciphertext with a known key.

    There is no key search: the key is required.
    """
    try:
        if len(request.ciphertext) > settings.max_text_length:
            raise TextTooLongError(len(request.ciphertext), settings.max_text_length)

        engine = registry.require_engine(request.cipher_type)

        result = engine.apply(
            CipherRequest(
                text=request.ciphertext,
                key=with_options(request.key, request.options),
                mode=CipherMode.DECODE,
            )
        )

    except CipherLabError as e:
        logger.warning("Decrypt rejected for %s: %s", request.cipher_type.value, e.message)
        raise http_error(e)
    except Exception as e:
        logger.exception("Decrypt failed for %s", request.cipher_type.value)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Decryption failed: {str(e)}",
        )

    logger.debug("Decrypted %d characters with %s", len(request.ciphertext), request.cipher_type.value)

    return DecryptResponse(
        plaintext=result.text,
        cipher_type=request.cipher_type,
        key_used=result.key,
        explanation=result.explanation,
        visual_data=result.visual_data,
    )
