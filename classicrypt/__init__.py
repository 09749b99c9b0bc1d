"""
classicrypt - classical cryptographic primitives written from scratch.

For learning only: nothing here is constant-time or clears secrets from
memory.

Modules:
  - core_crypto: modular arithmetic, AES, Feistel cipher, SHA-256
  - modes: PKCS#7 padding, ECB / CBC / CTR
  - mac: HMAC, secret-prefix MAC, CBC-MAC, HKDF
  - pubkey: Diffie-Hellman, RSA
"""

import logging

from .errors import (
    CryptoError,
    InvalidBlockSizeError,
    InvalidKeySizeError,
    InvalidModulusError,
    NoInverseError,
    PaddingError,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'CryptoError',
    'InvalidBlockSizeError',
    'InvalidKeySizeError',
    'InvalidModulusError',
    'NoInverseError',
    'PaddingError',
]
