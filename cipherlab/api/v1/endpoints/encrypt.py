import logging

from fastapi import APIRouter, HTTPException, status

from cipherlab.api.v1.errors import http_error
from cipherlab.core.exceptions import CipherLabError, TextTooLongError
from cipherlab.dependencies import RegistryDep, SettingsDep
from cipherlab.models.schemas import EncryptRequest, EncryptResponse, ErrorResponse
from cipherlab.services.engines.base import CipherMode, CipherRequest, with_options

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=EncryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
    },
    summary="Encrypt plaintext",
    description="Encrypt plaintext using a specified cipher type. A random key is generated when none is given.",
)
async def encrypt_plaintext(
    request: EncryptRequest,
    settings: SettingsDep,
    registry: RegistryDep,
) -> EncryptResponse:
    """
    Encrypt plaintext with a specified cipher type.

    Options are folded into the key, so per-cipher flags such as
    separate_doubles or strict can be passed either way.
    """
    try:
        if len(request.plaintext) > settings.max_text_length:
            raise TextTooLongError(len(request.plaintext), settings.max_text_length)

        engine = registry.require_engine(request.cipher_type)

        # Generate key if not provided
        key = request.key
        if key is None:
            key = engine.generate_key_for(request.plaintext)

        result = engine.apply(
            CipherRequest(
                text=request.plaintext,
                key=with_options(key, request.options),
                mode=CipherMode.ENCODE,
            )
        )

    except CipherLabError as e:
        logger.warning("Encrypt rejected for %s: %s", request.cipher_type.value, e.message)
        raise http_error(e)
    except Exception as e:
        logger.exception("Encrypt failed for %s", request.cipher_type.value)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Encryption failed: {str(e)}",
        )

    logger.debug("Encrypted %d characters with %s", len(request.plaintext), request.cipher_type.value)

    return EncryptResponse(
        ciphertext=result.text,
        cipher_type=request.cipher_type,
        key_used=result.key,
        explanation=result.explanation,
        visual_data=result.visual_data,
    )
