"""
Merkle-Damgård Construction

Turns a fixed-size compression function into a hash of arbitrary-length
messages:

- Padding: append the bit '1' (0x80 byte), then zero bits, then the
  original message length in bits as a big-endian integer, so that the
  padded length is a multiple of the block size.
- Iteration: start from the algorithm's initial state and fold every
  padded block into it with state' = compress(state, block).
- Output: the final state, serialized by the algorithm.

Because the length is always encoded, every message (including the empty
one) pads to a distinct block sequence.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Tuple


# Defaults for 512-bit block / 64-bit length hashes (SHA-1, SHA-2 family)
DEFAULT_BLOCK_SIZE = 64
DEFAULT_LENGTH_SIZE = 8


def md_padding(message_length: int,
               block_size: int = DEFAULT_BLOCK_SIZE,
               length_size: int = DEFAULT_LENGTH_SIZE) -> bytes:
    """
    Compute the padding suffix for a message of message_length bytes.

    Args:
        message_length: Length of the original message in bytes
        block_size: Compression function input size in bytes
        length_size: Width of the encoded bit length in bytes

    Returns:
        0x80, zero bytes, then the bit length (big-endian)
    """
    bit_length = message_length * 8
    if bit_length >= 1 << (8 * length_size):
        raise ValueError("Message too long for the length encoding")

    # We need: (message_length + 1 + zeros + length_size) % block_size == 0
    zeros = (block_size - (message_length + 1 + length_size)) % block_size
    return b'\x80' + b'\x00' * zeros + bit_length.to_bytes(length_size, byteorder='big')


def md_pad(message: bytes,
           block_size: int = DEFAULT_BLOCK_SIZE,
           length_size: int = DEFAULT_LENGTH_SIZE) -> bytes:
    """
    Pad a message according to the Merkle-Damgård scheme.

    Example:
        >>> len(md_pad(b"abc"))
        64
        >>> len(md_pad(b"\\x00" * 56))
        128
    """
    return bytes(message) + md_padding(len(message), block_size, length_size)


def md_padded_length(message_length: int,
                     block_size: int = DEFAULT_BLOCK_SIZE,
                     length_size: int = DEFAULT_LENGTH_SIZE) -> int:
    """
    Size in bytes of the padded message.

    The trailing partial block needs room for one 0x80 byte plus the
    length field; if it does not fit, one extra block is added.
    """
    full_blocks = message_length // block_size
    remaining = message_length % block_size + 1 + length_size
    extra_blocks = 1 if remaining <= block_size else 2
    return (full_blocks + extra_blocks) * block_size


def iter_blocks(message: bytes,
                block_size: int = DEFAULT_BLOCK_SIZE,
                length_size: int = DEFAULT_LENGTH_SIZE) -> Iterator[bytes]:
    """Yield the padded message one block at a time."""
    padded = md_pad(message, block_size, length_size)
    for i in range(0, len(padded), block_size):
        yield padded[i:i + block_size]


class HashAlgorithm(ABC):
    """
    A compression function plus the constants the Merkle-Damgård
    iteration needs.

    Subclasses set name, block_size, digest_size, length_size and
    initial_state, and implement compress() and finalize().
    """

    name: str = "hash"
    block_size: int = DEFAULT_BLOCK_SIZE
    digest_size: int = 32
    length_size: int = DEFAULT_LENGTH_SIZE
    initial_state: Tuple[int, ...] = ()

    @abstractmethod
    def compress(self, state: Tuple[int, ...], block: bytes) -> Tuple[int, ...]:
        """Fold one block_size block into the chaining state."""

    @abstractmethod
    def finalize(self, state: Tuple[int, ...]) -> bytes:
        """Serialize the final chaining state into a digest_size digest."""

    def hash(self, message: bytes) -> bytes:
        """Hash a complete message."""
        return merkle_damgard_hash(self, message)

    def new(self, data: bytes = b'') -> 'Hasher':
        """Start an incremental hash, optionally with some initial data."""
        hasher = Hasher(self)
        hasher.update(data)
        return hasher

    def __repr__(self) -> str:
        return self.name


def merkle_damgard_hash(algorithm: HashAlgorithm, message: bytes) -> bytes:
    """
    Hash message with the given compression function.

    Args:
        algorithm: Compression function and constants
        message: Input bytes of any length (including empty)

    Returns:
        algorithm.digest_size-byte digest
    """
    state = algorithm.initial_state
    for block in iter_blocks(message, algorithm.block_size, algorithm.length_size):
        state = algorithm.compress(state, block)
    return algorithm.finalize(state)


class Hasher:
    """
    Incremental Merkle-Damgård hashing.

    Data may be fed in any number of update() calls; the digest equals
    the one-shot hash of the concatenated data. digest() does not
    consume the hasher, so more data can be added afterwards.

    Example:
        >>> from classicrypt.core_crypto.sha256 import SHA256, sha256
        >>> h = SHA256.new(b"ab")
        >>> h.update(b"c")
        >>> h.digest() == sha256(b"abc")
        True
    """

    def __init__(self, algorithm: HashAlgorithm):
        self._algorithm = algorithm
        self._state = algorithm.initial_state
        self._buffer = b''
        self._length = 0

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    @property
    def digest_size(self) -> int:
        return self._algorithm.digest_size

    @property
    def block_size(self) -> int:
        return self._algorithm.block_size

    def update(self, data: bytes) -> None:
        """Absorb more message bytes, compressing every completed block."""
        block_size = self._algorithm.block_size
        self._buffer += bytes(data)
        self._length += len(data)

        full = len(self._buffer) - len(self._buffer) % block_size
        for i in range(0, full, block_size):
            self._state = self._algorithm.compress(self._state, self._buffer[i:i + block_size])
        self._buffer = self._buffer[full:]

    def digest(self) -> bytes:
        """Digest of all data absorbed so far."""
        algorithm = self._algorithm
        tail = self._buffer + md_padding(self._length, algorithm.block_size, algorithm.length_size)

        state = self._state
        for i in range(0, len(tail), algorithm.block_size):
            state = algorithm.compress(state, tail[i:i + algorithm.block_size])
        return algorithm.finalize(state)

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> 'Hasher':
        """Independent hasher with the same absorbed data."""
        other = Hasher(self._algorithm)
        other._state = self._state
        other._buffer = self._buffer
        other._length = self._length
        return other
