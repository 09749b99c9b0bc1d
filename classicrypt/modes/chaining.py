"""
Block Cipher Modes of Operation

Extends any BlockCipher to variable-length messages:
- ECB: every block encrypted independently (kept to show why not)
- CBC: each plaintext block is XORed with the previous ciphertext block
  (the IV for the first one) before encryption; PKCS#7 padded
- CTR: a counter block seeded from a nonce is encrypted to produce a
  keystream; no padding, and encryption is its own inverse

All functions take an already-keyed cipher instance, so the key
schedule is computed once per key rather than once per call.
"""

import secrets
from typing import List

from ..core_crypto.block_cipher import BlockCipher
from ..core_crypto.util import split_blocks, xor_bytes
from ..errors import InvalidBlockSizeError
from .padding import pkcs7_pad, pkcs7_unpad


def random_iv(block_size: int = 16) -> bytes:
    """Generate a random IV (or CTR nonce) of one block."""
    return secrets.token_bytes(block_size)


def _check_iv(cipher: BlockCipher, iv: bytes, label: str = "IV") -> bytes:
    iv = bytes(iv)
    if len(iv) != cipher.block_size:
        raise InvalidBlockSizeError(
            f"{label} must be {cipher.block_size} bytes for {cipher.name}, got {len(iv)} bytes"
        )
    return iv


def _ciphertext_blocks(cipher: BlockCipher, ciphertext: bytes) -> List[bytes]:
    if not ciphertext or len(ciphertext) % cipher.block_size != 0:
        raise InvalidBlockSizeError(
            f"Ciphertext must be a non-empty multiple of {cipher.block_size} bytes, "
            f"got {len(ciphertext)} bytes"
        )
    return split_blocks(ciphertext, cipher.block_size)


# ============================================================================
# ECB
# ============================================================================

def ecb_encrypt(cipher: BlockCipher, plaintext: bytes) -> bytes:
    """Encrypt with PKCS#7 padding, each block independently."""
    padded = pkcs7_pad(plaintext, cipher.block_size)
    return b''.join(
        cipher.encrypt_block(block) for block in split_blocks(padded, cipher.block_size)
    )


def ecb_decrypt(cipher: BlockCipher, ciphertext: bytes) -> bytes:
    """
    Decrypt ECB ciphertext and strip its padding.

    Raises:
        InvalidBlockSizeError: If ciphertext is not block-aligned
        PaddingError: If the recovered padding is inconsistent
    """
    blocks = _ciphertext_blocks(cipher, ciphertext)
    padded = b''.join(cipher.decrypt_block(block) for block in blocks)
    return pkcs7_unpad(padded, cipher.block_size)


# ============================================================================
# CBC
# ============================================================================

def cbc_encrypt(cipher: BlockCipher, plaintext: bytes, iv: bytes) -> bytes:
    """
    Encrypt in Cipher Block Chaining mode.

    The plaintext is PKCS#7 padded first, so the output is always
    between 1 and block_size bytes longer than the input. The IV is not
    included in the output; transmit it separately.

    Args:
        cipher: Keyed block cipher
        plaintext: Message of any length (including empty)
        iv: One block of initialization vector

    Returns:
        Ciphertext, a multiple of the block size

    Example:
        >>> from classicrypt.core_crypto.aes import AES
        >>> aes = AES(bytes(16))
        >>> len(cbc_encrypt(aes, b"hello", bytes(16)))
        16
    """
    previous = _check_iv(cipher, iv)
    padded = pkcs7_pad(plaintext, cipher.block_size)

    output = []
    for block in split_blocks(padded, cipher.block_size):
        previous = cipher.encrypt_block(xor_bytes(block, previous))
        output.append(previous)

    return b''.join(output)


def cbc_decrypt(cipher: BlockCipher, ciphertext: bytes, iv: bytes) -> bytes:
    """
    Decrypt Cipher Block Chaining ciphertext and strip its padding.

    Args:
        cipher: Keyed block cipher
        ciphertext: Output of cbc_encrypt()
        iv: The IV used for encryption

    Returns:
        The original plaintext

    Raises:
        InvalidBlockSizeError: If the IV is not one block, or the
            ciphertext is empty or not block-aligned
        PaddingError: If the recovered padding is inconsistent
    """
    previous = _check_iv(cipher, iv)
    blocks = _ciphertext_blocks(cipher, ciphertext)

    output = []
    for block in blocks:
        output.append(xor_bytes(cipher.decrypt_block(block), previous))
        previous = block

    return pkcs7_unpad(b''.join(output), cipher.block_size)


# ============================================================================
# CTR
# ============================================================================

def ctr_keystream_block(cipher: BlockCipher, nonce: bytes, index: int) -> bytes:
    """
    Keystream block number index: E(nonce + index).

    The counter is the nonce read as a big-endian integer, incremented
    once per block and wrapping around modulo 2^(8 * block_size).
    """
    nonce = _check_iv(cipher, nonce, label="Nonce")
    modulus = 1 << (8 * cipher.block_size)
    counter = (int.from_bytes(nonce, byteorder='big') + index) % modulus
    return cipher.encrypt_block(counter.to_bytes(cipher.block_size, byteorder='big'))


def ctr_transform(cipher: BlockCipher, data: bytes, nonce: bytes) -> bytes:
    """
    Encrypt or decrypt in Counter mode.

    XOR with the keystream is its own inverse, so the same function
    serves both directions. No padding is applied: the output has
    exactly len(data) bytes and a trailing partial block is allowed.

    Args:
        cipher: Keyed block cipher
        data: Plaintext or ciphertext of any length
        nonce: One block used as the initial counter value

    Returns:
        Transformed bytes, same length as data

    Raises:
        InvalidBlockSizeError: If the nonce is not one block
    """
    nonce = _check_iv(cipher, nonce, label="Nonce")
    modulus = 1 << (8 * cipher.block_size)
    counter = int.from_bytes(nonce, byteorder='big')

    output = []
    for chunk in split_blocks(data, cipher.block_size):
        keystream = cipher.encrypt_block(counter.to_bytes(cipher.block_size, byteorder='big'))
        output.append(xor_bytes(chunk, keystream))
        counter = (counter + 1) % modulus

    return b''.join(output)


ctr_encrypt = ctr_transform
ctr_decrypt = ctr_transform
