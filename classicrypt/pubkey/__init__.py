# Public-Key Module
"""
Public-key primitives built on modular exponentiation:
- Finite-field Diffie-Hellman (RFC 3526 / RFC 2409 groups) - diffie_hellman.py
- Textbook RSA encryption and hash-then-sign signatures - rsa.py
"""

from .diffie_hellman import (
    DHParameters,
    DHKeyExchange,
    MODP_1024,
    MODP_2048,
    generate_private_exponent,
    dh_public_value,
    dh_shared_secret,
)

from .rsa import (
    RSAKeyPair,
    generate_rsa_keypair,
    rsa_encrypt,
    rsa_decrypt,
    rsa_sign,
    rsa_verify,
)

__all__ = [
    # Diffie-Hellman
    'DHParameters',
    'DHKeyExchange',
    'MODP_1024',
    'MODP_2048',
    'generate_private_exponent',
    'dh_public_value',
    'dh_shared_secret',
    # RSA
    'RSAKeyPair',
    'generate_rsa_keypair',
    'rsa_encrypt',
    'rsa_decrypt',
    'rsa_sign',
    'rsa_verify',
]
