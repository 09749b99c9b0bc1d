"""
Byte and integer helpers shared by the primitives.

- XOR of byte strings
- Big-endian integer <-> bytes conversion
- Splitting data into fixed-size blocks
- Helpers for eyeballing many-time-pad style ciphertexts
"""

from typing import List, Optional, Sequence


# Placeholder shown for bytes that are not printable ASCII
NON_PRINTABLE = '࿕'


def xor_bytes(data1: bytes, data2: bytes) -> bytes:
    """
    XOR two byte strings together.

    If one input is shorter than the other, only the overlapping prefix
    is XORed and returned.

    Example:
        >>> xor_bytes(b'\\x0f\\xf0', b'\\xff\\xff\\xff')
        b'\\xf0\\x0f'
    """
    return bytes(a ^ b for a, b in zip(data1, data2))


def max_length(messages: Sequence[bytes]) -> Optional[int]:
    """Length of the longest message, or None if there are no messages."""
    if not messages:
        return None
    return max(len(message) for message in messages)


def as_printable_char(byte: int) -> str:
    """Return the ASCII character for a printable byte, a placeholder otherwise."""
    if 0x20 <= byte <= 0x7E:
        return chr(byte)
    return NON_PRINTABLE


def format_columns(labels: Sequence[str], messages: Sequence[bytes]) -> str:
    """
    Render messages one per line with their bytes aligned in columns.

    Each line is the label, padded to the widest label, followed by the
    message bytes as printable characters. Shorter messages are padded
    with spaces up to the longest one, so byte i of every message sits
    in the same column. Useful when lining up XORed many-time-pad
    ciphertexts to guess plaintext fragments.

    Raises:
        ValueError: If labels and messages differ in length

    Example:
        >>> print(format_columns(['c1', 'c2'], [b'hi!', b'\\x00ok']))
        c1: hi!
        c2: ࿕ok
    """
    if len(labels) != len(messages):
        raise ValueError("Need exactly one label per message")
    width = max_length(messages)
    if width is None:
        return ""

    label_width = max(len(label) for label in labels)
    lines = []
    for label, message in zip(labels, messages):
        row = ''.join(as_printable_char(byte) for byte in message)
        lines.append(f"{label:<{label_width}}: {row:<{width}}")
    return '\n'.join(lines)


def bytes_to_int(data: bytes) -> int:
    """Convert bytes to integer (big-endian)."""
    return int.from_bytes(data, byteorder='big')


def int_to_bytes(n: int, length: Optional[int] = None) -> bytes:
    """Convert integer to bytes (big-endian)."""
    if length is None:
        length = (n.bit_length() + 7) // 8
        length = max(1, length)  # At least 1 byte
    return n.to_bytes(length, byteorder='big')


def split_blocks(data: bytes, block_size: int) -> List[bytes]:
    """
    Split data into consecutive chunks of block_size bytes.

    The last chunk is shorter when len(data) is not a multiple of
    block_size. Empty data gives an empty list.
    """
    if block_size <= 0:
        raise ValueError("Block size must be positive")
    return [data[i:i + block_size] for i in range(0, len(data), block_size)]
