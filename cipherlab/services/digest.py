import hashlib

from cipherlab.core.exceptions import UnsupportedAlgorithmError
from cipherlab.models.schemas import DigestAlgorithm

# Algorithm names as the browser crypto API spells them
HASHLIB_NAMES: dict[DigestAlgorithm, str] = {
    DigestAlgorithm.SHA1: "sha1",
    DigestAlgorithm.SHA256: "sha256",
    DigestAlgorithm.SHA384: "sha384",
    DigestAlgorithm.SHA512: "sha512",
}


def digest(algorithm: DigestAlgorithm | str, data: bytes) -> str:
    """
    Hash data with a SHA-family algorithm.

    Args:
        algorithm: Algorithm name, e.g. "SHA-256"
        data: Bytes to hash

    Returns:
        Lowercase hex digest

    Raises:
        UnsupportedAlgorithmError: If the algorithm is not SHA-1/256/384/512
    """
    try:
        algorithm = DigestAlgorithm(algorithm)
    except ValueError:
        raise UnsupportedAlgorithmError(
            str(algorithm), [a.value for a in DigestAlgorithm]
        ) from None

    return hashlib.new(HASHLIB_NAMES[algorithm], data).hexdigest()


def digest_text(algorithm: DigestAlgorithm | str, text: str) -> str:
    """Hash the UTF-8 encoding of text."""
    return digest(algorithm, text.encode("utf-8"))
