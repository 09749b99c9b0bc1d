# Modes of Operation Module
"""
Block cipher modes of operation including:
- PKCS#7 padding - padding.py
- ECB, CBC, CTR - chaining.py

Every mode accepts any BlockCipher instance (AES, FeistelCipher, ...).
"""

from .padding import (
    pkcs7_pad,
    pkcs7_unpad,
)

from .chaining import (
    random_iv,
    ecb_encrypt,
    ecb_decrypt,
    cbc_encrypt,
    cbc_decrypt,
    ctr_keystream_block,
    ctr_transform,
    ctr_encrypt,
    ctr_decrypt,
)

__all__ = [
    # Padding
    'pkcs7_pad',
    'pkcs7_unpad',
    # Chaining
    'random_iv',
    'ecb_encrypt',
    'ecb_decrypt',
    'cbc_encrypt',
    'cbc_decrypt',
    'ctr_keystream_block',
    'ctr_transform',
    'ctr_encrypt',
    'ctr_decrypt',
]
