"""
Error taxonomy for classicrypt.

Every failure a primitive can signal is a subclass of CryptoError. The
concrete errors also derive from ValueError, since each of them describes
an argument the caller got wrong.
"""


class CryptoError(Exception):
    """Base class for all primitive-level failures."""
    pass


class InvalidKeySizeError(CryptoError, ValueError):
    """Raised when a key does not have a length the primitive accepts."""
    pass


class InvalidBlockSizeError(CryptoError, ValueError):
    """Raised when input is not a block, or not block-aligned where it must be."""
    pass


class PaddingError(CryptoError, ValueError):
    """Raised when decrypted data does not end with consistent padding."""
    pass


class NoInverseError(CryptoError, ValueError):
    """Raised when a modular inverse does not exist (gcd(value, modulus) != 1)."""
    pass


class InvalidModulusError(CryptoError, ValueError):
    """Raised for a non-positive or otherwise unsuitable modulus."""
    pass
