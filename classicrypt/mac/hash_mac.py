"""
Hash-Based Message Authentication Codes

Implements two MACs over any Merkle-Damgård hash (SHA-256 by default):
- Secret-prefix MAC: hash(key || message). Vulnerable to length
  extension, kept for demonstration.
- HMAC (RFC 2104): hash((K ^ opad) || hash((K ^ ipad) || message))

Verification is a plain equality check, not constant-time.
"""

from ..core_crypto.merkle_damgard import HashAlgorithm
from ..core_crypto.sha256 import SHA256


IPAD_BYTE = 0x36
OPAD_BYTE = 0x5c


def prefix_mac(key: bytes, message: bytes, algorithm: HashAlgorithm = SHA256) -> bytes:
    """Secret-prefix MAC: hash(key || message)."""
    return algorithm.hash(bytes(key) + bytes(message))


def prefix_mac_verify(key: bytes, message: bytes, tag: bytes,
                      algorithm: HashAlgorithm = SHA256) -> bool:
    """Recompute the secret-prefix MAC and compare it with tag."""
    return prefix_mac(key, message, algorithm) == tag


def _block_sized_key(key: bytes, algorithm: HashAlgorithm) -> bytes:
    # Keys longer than a block are hashed, then everything is zero-padded to a block
    if len(key) > algorithm.block_size:
        key = algorithm.hash(key)
    return bytes(key) + b'\x00' * (algorithm.block_size - len(key))


def hmac(key: bytes, message: bytes, algorithm: HashAlgorithm = SHA256) -> bytes:
    """
    Compute HMAC as defined in RFC 2104.

    Args:
        key: Secret key of any length
        message: Data to authenticate
        algorithm: Underlying hash (default SHA-256)

    Returns:
        Tag of algorithm.digest_size bytes

    Example:
        >>> hmac(b"key", b"The quick brown fox jumps over the lazy dog").hex()[:16]
        'f7bc83f430538424'
    """
    block_key = _block_sized_key(key, algorithm)
    inner_key = bytes(b ^ IPAD_BYTE for b in block_key)
    outer_key = bytes(b ^ OPAD_BYTE for b in block_key)

    inner = algorithm.hash(inner_key + bytes(message))
    return algorithm.hash(outer_key + inner)


def hmac_verify(key: bytes, message: bytes, tag: bytes,
                algorithm: HashAlgorithm = SHA256) -> bool:
    """Recompute the HMAC of message and compare it with tag."""
    return hmac(key, message, algorithm) == tag


def compute_hmac(key: bytes, data: bytes) -> bytes:
    """Compute HMAC-SHA256."""
    return hmac(key, data, SHA256)


def verify_hmac(key: bytes, data: bytes, expected_hmac: bytes) -> bool:
    """Verify HMAC-SHA256 (plain comparison)."""
    return hmac_verify(key, data, expected_hmac, SHA256)
