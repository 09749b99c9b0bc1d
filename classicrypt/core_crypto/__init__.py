# Core Cryptography Module
"""
Core cryptographic implementations including:
- Modular arithmetic (square-and-multiply, extended Euclid, Miller-Rabin)
- Block cipher abstraction, AES-128/192/256 and a toy Feistel cipher
- Merkle-Damgård hashing with SHA-256 / SHA-224
- Byte helpers
"""

from .block_cipher import BlockCipher
from .aes import AES
from .feistel import FeistelCipher
from .merkle_damgard import HashAlgorithm, Hasher
from .sha256 import SHA224, SHA256, sha224, sha256, sha256_hex

__all__ = [
    'BlockCipher',
    'AES',
    'FeistelCipher',
    'HashAlgorithm',
    'Hasher',
    'SHA224',
    'SHA256',
    'sha224',
    'sha256',
    'sha256_hex',
]
