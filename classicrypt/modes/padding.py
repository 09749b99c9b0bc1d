"""
PKCS#7 Padding

Pads a message to a whole number of blocks by appending n bytes of value
n, where 1 <= n <= block_size. A message that is already block-aligned
(including the empty message) receives a full block of padding, so that
unpadding is never ambiguous.

Note: unpadding reports *why* padding is bad, and does so in
variable time. In a real system this is a padding oracle.
"""

from ..errors import InvalidBlockSizeError, PaddingError


DEFAULT_BLOCK_SIZE = 16


def _check_block_size(block_size: int) -> None:
    if not 1 <= block_size <= 255:
        raise InvalidBlockSizeError(
            f"PKCS#7 block size must be between 1 and 255, got {block_size}"
        )


def pkcs7_pad(data: bytes, block_size: int = DEFAULT_BLOCK_SIZE) -> bytes:
    """
    Append PKCS#7 padding.

    Example:
        >>> pkcs7_pad(b"\\x2a", 16)[-1]
        15
        >>> len(pkcs7_pad(b"", 16))
        16
    """
    _check_block_size(block_size)
    pad_length = block_size - len(data) % block_size
    return bytes(data) + bytes([pad_length]) * pad_length


def pkcs7_unpad(data: bytes, block_size: int = DEFAULT_BLOCK_SIZE) -> bytes:
    """
    Strip and validate PKCS#7 padding.

    Args:
        data: Padded data (non-empty, multiple of block_size)
        block_size: Block size used when padding

    Returns:
        The original message

    Raises:
        InvalidBlockSizeError: If data is empty or not block-aligned
        PaddingError: If the padding bytes are inconsistent
    """
    _check_block_size(block_size)
    if not data or len(data) % block_size != 0:
        raise InvalidBlockSizeError(
            f"Padded data must be a non-empty multiple of {block_size} bytes, "
            f"got {len(data)} bytes"
        )

    pad_length = data[-1]
    if pad_length == 0 or pad_length > block_size:
        raise PaddingError(f"Invalid padding length byte: {pad_length}")

    if data[-pad_length:] != bytes([pad_length]) * pad_length:
        raise PaddingError("Padding bytes do not match the declared length")

    return bytes(data[:-pad_length])
