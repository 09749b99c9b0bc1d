"""
CBC-MAC

The tag is the last ciphertext block of CBC encryption under a fixed
all-zero IV. The message is PKCS#7 padded first, as in cbc_encrypt().

Plain CBC-MAC is only secure for messages of one fixed length; for
variable-length messages it can be forged by splicing. Kept for
demonstration.
"""

from ..core_crypto.block_cipher import BlockCipher
from ..modes.chaining import cbc_encrypt


def cbc_mac(cipher: BlockCipher, message: bytes) -> bytes:
    """
    Compute the CBC-MAC of message.

    Args:
        cipher: Keyed block cipher
        message: Data to authenticate

    Returns:
        One block (cipher.block_size bytes) of tag
    """
    zero_iv = bytes(cipher.block_size)
    return cbc_encrypt(cipher, message, zero_iv)[-cipher.block_size:]


def cbc_mac_verify(cipher: BlockCipher, message: bytes, tag: bytes) -> bool:
    """Recompute the CBC-MAC of message and compare it with tag."""
    return cbc_mac(cipher, message) == tag
