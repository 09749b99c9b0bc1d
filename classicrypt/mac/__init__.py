# Message Authentication Module
"""
Message authentication implementations including:
- Secret-prefix MAC and HMAC (RFC 2104) - hash_mac.py
- CBC-MAC over any block cipher - cbc_mac.py
- HKDF key derivation (RFC 5869) - hkdf.py

Tags are compared with plain equality; nothing here is constant-time.
"""

from .hash_mac import (
    prefix_mac,
    prefix_mac_verify,
    hmac,
    hmac_verify,
    compute_hmac,
    verify_hmac,
)

from .cbc_mac import (
    cbc_mac,
    cbc_mac_verify,
)

from .hkdf import (
    hkdf_extract,
    hkdf_expand,
    hkdf_derive_key,
)

__all__ = [
    # Hash-based
    'prefix_mac',
    'prefix_mac_verify',
    'hmac',
    'hmac_verify',
    'compute_hmac',
    'verify_hmac',
    # Cipher-based
    'cbc_mac',
    'cbc_mac_verify',
    # Key derivation
    'hkdf_extract',
    'hkdf_expand',
    'hkdf_derive_key',
]
