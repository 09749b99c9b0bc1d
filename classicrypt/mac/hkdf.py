"""
HKDF (HMAC-based Key Derivation Function, RFC 5869)

Extract-then-expand over the in-house HMAC:
    PRK = HMAC(salt, IKM)
    T(0) = b""
    T(i) = HMAC(PRK, T(i-1) || info || i)
    OKM  = first `length` bytes of T(1) || T(2) || ...

Used to turn a Diffie-Hellman shared secret into symmetric keys.
"""

from typing import Optional

from ..core_crypto.merkle_damgard import HashAlgorithm
from ..core_crypto.sha256 import SHA256
from .hash_mac import hmac


DEFAULT_KEY_LENGTH = 32


def hkdf_extract(salt: Optional[bytes], ikm: bytes,
                 algorithm: HashAlgorithm = SHA256) -> bytes:
    """
    HKDF-Extract: concentrate the input key material into a pseudorandom key.

    A missing or empty salt is replaced by digest_size zero bytes.
    """
    if not salt:
        salt = bytes(algorithm.digest_size)
    return hmac(salt, ikm, algorithm)


def hkdf_expand(prk: bytes, info: bytes = b"", length: int = DEFAULT_KEY_LENGTH,
                algorithm: HashAlgorithm = SHA256) -> bytes:
    """
    HKDF-Expand: stretch a pseudorandom key into length output bytes.

    Raises:
        ValueError: If length is not in [1, 255 * digest_size]
    """
    max_length = 255 * algorithm.digest_size
    if not 1 <= length <= max_length:
        raise ValueError(f"HKDF output length must be between 1 and {max_length}, got {length}")

    output = b''
    block = b''
    counter = 1
    while len(output) < length:
        block = hmac(prk, block + bytes(info) + bytes([counter]), algorithm)
        output += block
        counter += 1

    return output[:length]


def hkdf_derive_key(shared_secret: bytes,
                    salt: Optional[bytes] = None,
                    info: bytes = b"",
                    length: int = DEFAULT_KEY_LENGTH,
                    algorithm: HashAlgorithm = SHA256) -> bytes:
    """
    Derive a key from a shared secret using HKDF.

    Args:
        shared_secret: Input key material (e.g., from Diffie-Hellman)
        salt: Optional salt (random bytes)
        info: Context/application info
        length: Output key length in bytes
        algorithm: Underlying hash (default SHA-256)

    Returns:
        Derived key bytes
    """
    prk = hkdf_extract(salt, shared_secret, algorithm)
    return hkdf_expand(prk, info, length, algorithm)
