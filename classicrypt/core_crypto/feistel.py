"""
Toy Feistel Block Cipher

A balanced Feistel network with 64-bit blocks, a 128-bit key and 16
rounds. The round function is SHA-256 of (round key || right half),
truncated to the half-block size. This is for EDUCATIONAL purposes only:
it shows how a Feistel structure is invertible whatever the round
function, and gives the modes of operation a second block size to run on.

Round i (L, R) -> (R, L xor F(K_i, R)); decryption runs the rounds with
the keys in reverse order.
"""

from typing import List

from .block_cipher import BlockCipher
from .sha256 import sha256
from .util import xor_bytes


FEISTEL_BLOCK_SIZE = 8
FEISTEL_KEY_SIZE = 16
FEISTEL_ROUNDS = 16


def derive_round_keys(key: bytes, rounds: int = FEISTEL_ROUNDS) -> List[bytes]:
    """Round key i is SHA-256(key || i), as 32 bytes."""
    return [sha256(key + bytes([i])) for i in range(rounds)]


def round_function(round_key: bytes, half: bytes) -> bytes:
    """F(K, R): SHA-256(K || R) truncated to len(R) bytes."""
    return sha256(round_key + half)[:len(half)]


class FeistelCipher(BlockCipher):
    """
    16-round Feistel cipher over 8-byte blocks.

    Example:
        >>> cipher = FeistelCipher(bytes(16))
        >>> len(cipher.encrypt_block(b"8 bytes!"))
        8
    """

    name = "Feistel-64"
    block_size = FEISTEL_BLOCK_SIZE
    key_sizes = (FEISTEL_KEY_SIZE,)

    def _expand_key(self, key: bytes) -> None:
        self._round_keys = tuple(derive_round_keys(key))

    def _encrypt_block(self, block: bytes) -> bytes:
        half = self.block_size // 2
        left, right = block[:half], block[half:]
        for round_key in self._round_keys:
            left, right = right, xor_bytes(left, round_function(round_key, right))
        # Undo the last swap so decryption is the same network
        return right + left

    def _decrypt_block(self, block: bytes) -> bytes:
        half = self.block_size // 2
        left, right = block[:half], block[half:]
        for round_key in reversed(self._round_keys):
            left, right = right, xor_bytes(left, round_function(round_key, right))
        return right + left
