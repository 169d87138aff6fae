import logging

from fastapi import APIRouter

from cipherlab.api.v1.errors import http_error
from cipherlab.core.exceptions import EngineNotFoundError
from cipherlab.dependencies import RegistryDep
from cipherlab.models.schemas import CipherInfo, CipherListResponse, CipherType, ErrorResponse, KeyResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=CipherListResponse,
    summary="List ciphers",
    description="List every registered cipher with its family and key format.",
)
async def list_ciphers(registry: RegistryDep) -> CipherListResponse:
    """List registered cipher engines."""
    items = [
        CipherInfo(
            cipher_type=engine.cipher_type,
            cipher_family=engine.cipher_family,
            name=engine.name,
            description=engine.description,
            key_hint=engine.key_hint,
        )
        for engine in registry.get_all_engines()
    ]
    return CipherListResponse(items=items, total=len(items))


@router.get(
    "/{cipher_type}/key",
    response_model=KeyResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
    },
    summary="Generate a key",
    description="Generate a random valid key for the given cipher.",
)
async def generate_key(cipher_type: CipherType, registry: RegistryDep) -> KeyResponse:
    """Generate a random key for a cipher."""
    try:
        engine = registry.require_engine(cipher_type)
    except EngineNotFoundError as e:
        logger.warning("Key requested for unknown cipher %s", cipher_type.value)
        raise http_error(e)

    return KeyResponse(cipher_type=cipher_type, key=engine.generate_random_key())
