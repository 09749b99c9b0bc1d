"""
Finite-Field Diffie-Hellman Key Exchange

Each party picks a private exponent a, publishes A = g^a mod p, and
computes the shared secret B^a mod p from the peer's public value B.
Both sides arrive at g^(ab) mod p.

Groups:
- MODP_2048: RFC 3526 group 14 (2048-bit safe prime, g = 2)
- MODP_1024: RFC 2409 Oakley group 2 (1024-bit, g = 2), faster for tests

All exponentiation goes through the square-and-multiply mod_exp.
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from ..core_crypto.modarith import mod_exp
from ..core_crypto.util import bytes_to_int, int_to_bytes
from ..errors import InvalidModulusError
from ..mac.hkdf import DEFAULT_KEY_LENGTH, hkdf_derive_key


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DHParameters:
    """
    Public group parameters: a prime modulus p and a generator g.

    Raises:
        InvalidModulusError: If p < 5 or g is not in [2, p - 2]
    """
    modulus: int
    generator: int

    def __post_init__(self):
        if self.modulus < 5:
            raise InvalidModulusError(f"DH modulus must be at least 5, got {self.modulus}")
        if not 2 <= self.generator <= self.modulus - 2:
            raise InvalidModulusError(
                f"DH generator must be in [2, p - 2], got {self.generator}"
            )
        logger.debug("DH parameters with %d-bit modulus", self.modulus.bit_length())

    @property
    def bits(self) -> int:
        """Modulus size in bits."""
        return self.modulus.bit_length()

    @property
    def byte_length(self) -> int:
        """Size of an encoded group element in bytes."""
        return (self.modulus.bit_length() + 7) // 8


MODP_2048 = DHParameters(
    modulus=int(
        "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD1"
        "29024E088A67CC74020BBEA63B139B22514A08798E3404DD"
        "EF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245"
        "E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
        "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3D"
        "C2007CB8A163BF0598DA48361C55D39A69163FA8FD24CF5F"
        "83655D23DCA3AD961C62F356208552BB9ED529077096966D"
        "670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B"
        "E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9"
        "DE2BCBF6955817183995497CEA956AE515D2261898FA0510"
        "15728E5A8AACAA68FFFFFFFFFFFFFFFF",
        16,
    ),
    generator=2,
)

MODP_1024 = DHParameters(
    modulus=int(
        "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD1"
        "29024E088A67CC74020BBEA63B139B22514A08798E3404DD"
        "EF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245"
        "E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
        "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE65381"
        "FFFFFFFFFFFFFFFF",
        16,
    ),
    generator=2,
)

DEFAULT_PARAMETERS = MODP_2048


def generate_private_exponent(params: DHParameters = DEFAULT_PARAMETERS) -> int:
    """Random private exponent in [2, p - 2]."""
    return secrets.randbelow(params.modulus - 3) + 2


def dh_public_value(params: DHParameters, private_exponent: int) -> int:
    """
    Compute the public value g^a mod p.

    Raises:
        ValueError: If the private exponent is not in [1, p - 1]
    """
    if not 0 < private_exponent < params.modulus:
        raise ValueError("Private exponent must satisfy 0 < a < p")
    return mod_exp(params.generator, private_exponent, params.modulus)


def dh_shared_secret(params: DHParameters, peer_public: int, private_exponent: int) -> int:
    """
    Compute the shared secret B^a mod p from the peer's public value B.

    Public values 1 and p - 1 are accepted: they arise from valid
    exponents (a = p - 1, or a multiple of the order of g) and both
    parties still agree on the result.

    Raises:
        ValueError: If the peer value is not in [1, p - 1] or the private
            exponent is out of range
    """
    if not 0 < peer_public < params.modulus:
        raise ValueError("Peer public value must satisfy 0 < B < p")
    if not 0 < private_exponent < params.modulus:
        raise ValueError("Private exponent must satisfy 0 < a < p")
    return mod_exp(peer_public, private_exponent, params.modulus)


class DHKeyExchange:
    """
    One party of a Diffie-Hellman exchange.

    Example:
        >>> alice = DHKeyExchange(MODP_1024)
        >>> bob = DHKeyExchange(MODP_1024)
        >>> alice.derive_shared_secret(bob.public_value) == \\
        ...     bob.derive_shared_secret(alice.public_value)
        True
    """

    def __init__(self, params: DHParameters = DEFAULT_PARAMETERS,
                 private_exponent: Optional[int] = None):
        """
        Initialize with optional existing private exponent.

        Args:
            params: Group parameters
            private_exponent: Existing exponent, or generate new if None
        """
        self._params = params
        if private_exponent is None:
            private_exponent = generate_private_exponent(params)
        self._private = private_exponent
        self._public = dh_public_value(params, private_exponent)

    @property
    def params(self) -> DHParameters:
        return self._params

    @property
    def public_value(self) -> int:
        """Public value g^a mod p for sharing."""
        return self._public

    def public_bytes(self) -> bytes:
        """Public value as fixed-length big-endian bytes."""
        return int_to_bytes(self._public, self._params.byte_length)

    def derive_shared_secret(self, peer_public: int) -> int:
        """Derive the shared group element from the peer's public value."""
        return dh_shared_secret(self._params, peer_public, self._private)

    def derive_shared_secret_from_bytes(self, peer_public_bytes: bytes) -> int:
        """Derive the shared group element from the peer's public_bytes()."""
        return self.derive_shared_secret(bytes_to_int(peer_public_bytes))

    def derive_key(self, peer_public: int,
                   length: int = DEFAULT_KEY_LENGTH,
                   salt: Optional[bytes] = None,
                   info: bytes = b"") -> bytes:
        """
        Derive a symmetric key: HKDF-SHA256 over the fixed-length
        big-endian encoding of the shared secret.
        """
        secret = int_to_bytes(self.derive_shared_secret(peer_public), self._params.byte_length)
        return hkdf_derive_key(secret, salt=salt, info=info, length=length)
