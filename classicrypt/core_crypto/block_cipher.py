"""
Block Cipher Abstraction

A block cipher is a keyed permutation over fixed-size blocks. Concrete
ciphers (AES, the didactic Feistel cipher) subclass BlockCipher and
implement the key schedule and the single-block transforms; the modes of
operation are written once against this interface.
"""

import logging
from abc import ABC, abstractmethod
from typing import Tuple

from ..errors import InvalidBlockSizeError, InvalidKeySizeError


logger = logging.getLogger(__name__)


class BlockCipher(ABC):
    """
    Base class for fixed-block-size keyed permutations.

    Subclasses set:
        name: Human readable cipher name
        block_size: Block length in bytes
        key_sizes: Accepted key lengths in bytes

    The key schedule is derived once in the constructor; instances are
    not modified afterwards and may be shared between threads.

    Example:
        >>> from classicrypt.core_crypto.aes import AES
        >>> cipher = AES(bytes(16))
        >>> cipher.decrypt_block(cipher.encrypt_block(bytes(16))) == bytes(16)
        True
    """

    name: str = "block cipher"
    block_size: int = 16
    key_sizes: Tuple[int, ...] = ()

    def __init__(self, key: bytes):
        """
        Validate the key and derive the key schedule.

        Args:
            key: Raw key bytes

        Raises:
            InvalidKeySizeError: If len(key) is not in key_sizes
        """
        key = bytes(key)
        if len(key) not in self.key_sizes:
            expected = ", ".join(str(size) for size in self.key_sizes)
            raise InvalidKeySizeError(
                f"{self.name} requires a key of {expected} bytes, got {len(key)} bytes"
            )
        self._key_size = len(key)
        self._expand_key(key)
        logger.debug("Initialized %s with %d-bit key", self.name, len(key) * 8)

    @property
    def key_size(self) -> int:
        """Key length in bytes."""
        return self._key_size

    def _check_block(self, block: bytes) -> bytes:
        block = bytes(block)
        if len(block) != self.block_size:
            raise InvalidBlockSizeError(
                f"{self.name} operates on {self.block_size}-byte blocks, "
                f"got {len(block)} bytes"
            )
        return block

    def encrypt_block(self, block: bytes) -> bytes:
        """
        Encrypt a single block.

        Raises:
            InvalidBlockSizeError: If len(block) != block_size
        """
        return self._encrypt_block(self._check_block(block))

    def decrypt_block(self, block: bytes) -> bytes:
        """
        Decrypt a single block.

        Raises:
            InvalidBlockSizeError: If len(block) != block_size
        """
        return self._decrypt_block(self._check_block(block))

    @abstractmethod
    def _expand_key(self, key: bytes) -> None:
        """Derive and store the round keys."""

    @abstractmethod
    def _encrypt_block(self, block: bytes) -> bytes:
        """Encrypt a block already checked to be block_size bytes."""

    @abstractmethod
    def _decrypt_block(self, block: bytes) -> bytes:
        """Decrypt a block already checked to be block_size bytes."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key_bits={self._key_size * 8})"
