"""
AES Block Cipher (Rijndael, FIPS-197)

Implements AES-128, AES-192 and AES-256 from scratch:
- S-box (Rijndael substitution box) and its inverse
- Key expansion for 128, 192 and 256-bit keys
- SubBytes / ShiftRows / MixColumns / AddRoundKey rounds and their inverses

The 16-byte state is stored column-major, as in FIPS-197: byte i of the
block is row i % 4 of column i // 4.
"""

from typing import List

from .block_cipher import BlockCipher


AES_BLOCK_SIZE = 16
AES_KEY_SIZES = (16, 24, 32)

# Number of 32-bit words in a block
NB = 4

# Rijndael S-box (Substitution box)
# This is the standard AES S-box - a non-linear substitution table
S_BOX = (
    0x63, 0x7c, 0x77, 0x7b, 0xf2, 0x6b, 0x6f, 0xc5, 0x30, 0x01, 0x67, 0x2b, 0xfe, 0xd7, 0xab, 0x76,
    0xca, 0x82, 0xc9, 0x7d, 0xfa, 0x59, 0x47, 0xf0, 0xad, 0xd4, 0xa2, 0xaf, 0x9c, 0xa4, 0x72, 0xc0,
    0xb7, 0xfd, 0x93, 0x26, 0x36, 0x3f, 0xf7, 0xcc, 0x34, 0xa5, 0xe5, 0xf1, 0x71, 0xd8, 0x31, 0x15,
    0x04, 0xc7, 0x23, 0xc3, 0x18, 0x96, 0x05, 0x9a, 0x07, 0x12, 0x80, 0xe2, 0xeb, 0x27, 0xb2, 0x75,
    0x09, 0x83, 0x2c, 0x1a, 0x1b, 0x6e, 0x5a, 0xa0, 0x52, 0x3b, 0xd6, 0xb3, 0x29, 0xe3, 0x2f, 0x84,
    0x53, 0xd1, 0x00, 0xed, 0x20, 0xfc, 0xb1, 0x5b, 0x6a, 0xcb, 0xbe, 0x39, 0x4a, 0x4c, 0x58, 0xcf,
    0xd0, 0xef, 0xaa, 0xfb, 0x43, 0x4d, 0x33, 0x85, 0x45, 0xf9, 0x02, 0x7f, 0x50, 0x3c, 0x9f, 0xa8,
    0x51, 0xa3, 0x40, 0x8f, 0x92, 0x9d, 0x38, 0xf5, 0xbc, 0xb6, 0xda, 0x21, 0x10, 0xff, 0xf3, 0xd2,
    0xcd, 0x0c, 0x13, 0xec, 0x5f, 0x97, 0x44, 0x17, 0xc4, 0xa7, 0x7e, 0x3d, 0x64, 0x5d, 0x19, 0x73,
    0x60, 0x81, 0x4f, 0xdc, 0x22, 0x2a, 0x90, 0x88, 0x46, 0xee, 0xb8, 0x14, 0xde, 0x5e, 0x0b, 0xdb,
    0xe0, 0x32, 0x3a, 0x0a, 0x49, 0x06, 0x24, 0x5c, 0xc2, 0xd3, 0xac, 0x62, 0x91, 0x95, 0xe4, 0x79,
    0xe7, 0xc8, 0x37, 0x6d, 0x8d, 0xd5, 0x4e, 0xa9, 0x6c, 0x56, 0xf4, 0xea, 0x65, 0x7a, 0xae, 0x08,
    0xba, 0x78, 0x25, 0x2e, 0x1c, 0xa6, 0xb4, 0xc6, 0xe8, 0xdd, 0x74, 0x1f, 0x4b, 0xbd, 0x8b, 0x8a,
    0x70, 0x3e, 0xb5, 0x66, 0x48, 0x03, 0xf6, 0x0e, 0x61, 0x35, 0x57, 0xb9, 0x86, 0xc1, 0x1d, 0x9e,
    0xe1, 0xf8, 0x98, 0x11, 0x69, 0xd9, 0x8e, 0x94, 0x9b, 0x1e, 0x87, 0xe9, 0xce, 0x55, 0x28, 0xdf,
    0x8c, 0xa1, 0x89, 0x0d, 0xbf, 0xe6, 0x42, 0x68, 0x41, 0x99, 0x2d, 0x0f, 0xb0, 0x54, 0xbb, 0x16,
)

# Inverse S-box, used by InvSubBytes during decryption
INV_S_BOX = (
    0x52, 0x09, 0x6a, 0xd5, 0x30, 0x36, 0xa5, 0x38, 0xbf, 0x40, 0xa3, 0x9e, 0x81, 0xf3, 0xd7, 0xfb,
    0x7c, 0xe3, 0x39, 0x82, 0x9b, 0x2f, 0xff, 0x87, 0x34, 0x8e, 0x43, 0x44, 0xc4, 0xde, 0xe9, 0xcb,
    0x54, 0x7b, 0x94, 0x32, 0xa6, 0xc2, 0x23, 0x3d, 0xee, 0x4c, 0x95, 0x0b, 0x42, 0xfa, 0xc3, 0x4e,
    0x08, 0x2e, 0xa1, 0x66, 0x28, 0xd9, 0x24, 0xb2, 0x76, 0x5b, 0xa2, 0x49, 0x6d, 0x8b, 0xd1, 0x25,
    0x72, 0xf8, 0xf6, 0x64, 0x86, 0x68, 0x98, 0x16, 0xd4, 0xa4, 0x5c, 0xcc, 0x5d, 0x65, 0xb6, 0x92,
    0x6c, 0x70, 0x48, 0x50, 0xfd, 0xed, 0xb9, 0xda, 0x5e, 0x15, 0x46, 0x57, 0xa7, 0x8d, 0x9d, 0x84,
    0x90, 0xd8, 0xab, 0x00, 0x8c, 0xbc, 0xd3, 0x0a, 0xf7, 0xe4, 0x58, 0x05, 0xb8, 0xb3, 0x45, 0x06,
    0xd0, 0x2c, 0x1e, 0x8f, 0xca, 0x3f, 0x0f, 0x02, 0xc1, 0xaf, 0xbd, 0x03, 0x01, 0x13, 0x8a, 0x6b,
    0x3a, 0x91, 0x11, 0x41, 0x4f, 0x67, 0xdc, 0xea, 0x97, 0xf2, 0xcf, 0xce, 0xf0, 0xb4, 0xe6, 0x73,
    0x96, 0xac, 0x74, 0x22, 0xe7, 0xad, 0x35, 0x85, 0xe2, 0xf9, 0x37, 0xe8, 0x1c, 0x75, 0xdf, 0x6e,
    0x47, 0xf1, 0x1a, 0x71, 0x1d, 0x29, 0xc5, 0x89, 0x6f, 0xb7, 0x62, 0x0e, 0xaa, 0x18, 0xbe, 0x1b,
    0xfc, 0x56, 0x3e, 0x4b, 0xc6, 0xd2, 0x79, 0x20, 0x9a, 0xdb, 0xc0, 0xfe, 0x78, 0xcd, 0x5a, 0xf4,
    0x1f, 0xdd, 0xa8, 0x33, 0x88, 0x07, 0xc7, 0x31, 0xb1, 0x12, 0x10, 0x59, 0x27, 0x80, 0xec, 0x5f,
    0x60, 0x51, 0x7f, 0xa9, 0x19, 0xb5, 0x4a, 0x0d, 0x2d, 0xe5, 0x7a, 0x9f, 0x93, 0xc9, 0x9c, 0xef,
    0xa0, 0xe0, 0x3b, 0x4d, 0xae, 0x2a, 0xf5, 0xb0, 0xc8, 0xeb, 0xbb, 0x3c, 0x83, 0x53, 0x99, 0x61,
    0x17, 0x2b, 0x04, 0x7e, 0xba, 0x77, 0xd6, 0x26, 0xe1, 0x69, 0x14, 0x63, 0x55, 0x21, 0x0c, 0x7d,
)

# Round constants (Rcon) for key expansion
# Rcon[i] = [rc[i], 0, 0, 0] where rc[i] = 2^(i-1) in GF(2^8)
# AES-128 consumes up to Rcon[10], AES-192 up to Rcon[8], AES-256 up to Rcon[7]
RCON = (
    0x00,  # Not used (index 0)
    0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1b, 0x36,
)


# ============================================================================
# GF(2^8) arithmetic
# ============================================================================

def xtime(byte: int) -> int:
    """Multiply a byte by x (i.e. 0x02) in GF(2^8) modulo x^8 + x^4 + x^3 + x + 1."""
    byte <<= 1
    if byte & 0x100:
        byte ^= 0x11b
    return byte


def gf_mul(a: int, b: int) -> int:
    """Multiply two bytes in GF(2^8) using repeated xtime (peasant multiplication)."""
    result = 0
    while b:
        if b & 1:
            result ^= a
        a = xtime(a)
        b >>= 1
    return result


# ============================================================================
# Key expansion
# ============================================================================

def sub_word(word: List[int]) -> List[int]:
    """SubWord: the S-box applied to each of the four bytes."""
    return [S_BOX[b] for b in word]


def rot_word(word: List[int]) -> List[int]:
    """RotWord: [a0, a1, a2, a3] -> [a1, a2, a3, a0]."""
    return word[1:] + word[:1]


def num_rounds(key_size: int) -> int:
    """Number of AES rounds for a key of key_size bytes (Nr = Nk + 6)."""
    return key_size // 4 + 6


def key_expansion(key: bytes) -> List[bytes]:
    """
    Perform AES key expansion (Rijndael key schedule).

    Expands a 128, 192 or 256-bit key into Nr + 1 round keys of 16 bytes
    each (11, 13 or 15 round keys respectively).

    Args:
        key: 16, 24 or 32-byte encryption key

    Returns:
        List of round keys, each 16 bytes (128 bits)

    Raises:
        ValueError: If the key length is not 16, 24 or 32 bytes

    Example:
        >>> round_keys = key_expansion(bytes(range(32)))
        >>> len(round_keys), len(round_keys[0])
        (15, 16)
    """
    if len(key) not in AES_KEY_SIZES:
        raise ValueError(f"AES requires a 16, 24 or 32-byte key, got {len(key)} bytes")

    nk = len(key) // 4
    nr = num_rounds(len(key))
    total_words = NB * (nr + 1)

    w = [list(key[i:i + 4]) for i in range(0, len(key), 4)]

    for i in range(nk, total_words):
        temp = w[i - 1]

        if i % nk == 0:
            # First word of each Nk-word group
            temp = sub_word(rot_word(temp))
            temp[0] ^= RCON[i // nk]
        elif nk > 6 and i % nk == 4:
            # 256-bit keys only: extra SubWord halfway through each group
            temp = sub_word(temp)

        w.append([a ^ b for a, b in zip(w[i - nk], temp)])

    return [bytes(sum(w[i:i + NB], [])) for i in range(0, total_words, NB)]


# ============================================================================
# Round transformations
# ============================================================================

def add_round_key(state: List[int], round_key: bytes) -> List[int]:
    """XOR the state with a 16-byte round key."""
    return [s ^ k for s, k in zip(state, round_key)]


def sub_bytes(state: List[int]) -> List[int]:
    """Substitute every state byte through the S-box."""
    return [S_BOX[b] for b in state]


def inv_sub_bytes(state: List[int]) -> List[int]:
    """Substitute every state byte through the inverse S-box."""
    return [INV_S_BOX[b] for b in state]


def shift_rows(state: List[int]) -> List[int]:
    """Cyclically shift row r of the state left by r positions."""
    return [state[(r + 4 * (c + r)) % 16] for c in range(4) for r in range(4)]


def inv_shift_rows(state: List[int]) -> List[int]:
    """Cyclically shift row r of the state right by r positions."""
    return [state[(r + 4 * (c - r)) % 16] for c in range(4) for r in range(4)]


def _mix_column(column: List[int], coefficients: List[int]) -> List[int]:
    # Multiply the column by the circulant matrix whose first row is coefficients
    return [
        gf_mul(column[0], coefficients[(0 - r) % 4])
        ^ gf_mul(column[1], coefficients[(1 - r) % 4])
        ^ gf_mul(column[2], coefficients[(2 - r) % 4])
        ^ gf_mul(column[3], coefficients[(3 - r) % 4])
        for r in range(4)
    ]


MIX_COLUMNS_COEFFICIENTS = [0x02, 0x03, 0x01, 0x01]
INV_MIX_COLUMNS_COEFFICIENTS = [0x0e, 0x0b, 0x0d, 0x09]


def mix_columns(state: List[int]) -> List[int]:
    """Treat each column as a polynomial and multiply it by {03}x^3 + {01}x^2 + {01}x + {02}."""
    result = []
    for c in range(4):
        result.extend(_mix_column(state[4 * c:4 * c + 4], MIX_COLUMNS_COEFFICIENTS))
    return result


def inv_mix_columns(state: List[int]) -> List[int]:
    """Inverse of mix_columns: multiply by {0b}x^3 + {0d}x^2 + {09}x + {0e}."""
    result = []
    for c in range(4):
        result.extend(_mix_column(state[4 * c:4 * c + 4], INV_MIX_COLUMNS_COEFFICIENTS))
    return result


# ============================================================================
# Cipher
# ============================================================================

def cipher(block: bytes, round_keys: List[bytes]) -> bytes:
    """
    The AES forward cipher on one 16-byte block.

    Args:
        block: 16-byte input block
        round_keys: Output of key_expansion()

    Returns:
        16-byte ciphertext block
    """
    nr = len(round_keys) - 1

    state = add_round_key(list(block), round_keys[0])

    for round_num in range(1, nr):
        state = sub_bytes(state)
        state = shift_rows(state)
        state = mix_columns(state)
        state = add_round_key(state, round_keys[round_num])

    # Final round has no MixColumns
    state = sub_bytes(state)
    state = shift_rows(state)
    state = add_round_key(state, round_keys[nr])

    return bytes(state)


def inv_cipher(block: bytes, round_keys: List[bytes]) -> bytes:
    """
    The straightforward AES inverse cipher on one 16-byte block.

    Args:
        block: 16-byte ciphertext block
        round_keys: Output of key_expansion()

    Returns:
        16-byte plaintext block
    """
    nr = len(round_keys) - 1

    state = add_round_key(list(block), round_keys[nr])

    for round_num in range(nr - 1, 0, -1):
        state = inv_shift_rows(state)
        state = inv_sub_bytes(state)
        state = add_round_key(state, round_keys[round_num])
        state = inv_mix_columns(state)

    state = inv_shift_rows(state)
    state = inv_sub_bytes(state)
    state = add_round_key(state, round_keys[0])

    return bytes(state)


class AES(BlockCipher):
    """
    AES block cipher with 128, 192 or 256-bit keys.

    Example:
        >>> aes = AES(bytes(16))
        >>> aes.encrypt_block(bytes(16)).hex()
        '66e94bd4ef8a2c3b884cfa59ca342b2e'
    """

    name = "AES"
    block_size = AES_BLOCK_SIZE
    key_sizes = AES_KEY_SIZES

    def _expand_key(self, key: bytes) -> None:
        self._round_keys = tuple(key_expansion(key))

    @property
    def num_rounds(self) -> int:
        """Number of AES rounds (10, 12 or 14)."""
        return len(self._round_keys) - 1

    @property
    def round_keys(self) -> List[bytes]:
        """List of round keys (16 bytes each)."""
        return list(self._round_keys)

    def _encrypt_block(self, block: bytes) -> bytes:
        return cipher(block, self._round_keys)

    def _decrypt_block(self, block: bytes) -> bytes:
        return inv_cipher(block, self._round_keys)

    def __repr__(self) -> str:
        return f"AES-{self.key_size * 8}"


def encrypt_block(block: bytes, key: bytes) -> bytes:
    """
    Encrypt a single 16-byte block under key.

    Raises:
        InvalidKeySizeError: If key is not 16, 24 or 32 bytes
        InvalidBlockSizeError: If block is not 16 bytes
    """
    return AES(key).encrypt_block(block)


def decrypt_block(block: bytes, key: bytes) -> bytes:
    """
    Decrypt a single 16-byte block under key.

    Raises:
        InvalidKeySizeError: If key is not 16, 24 or 32 bytes
        InvalidBlockSizeError: If block is not 16 bytes
    """
    return AES(key).decrypt_block(block)


if __name__ == "__main__":
    print("AES Implementation Test")
    print("=" * 60)

    # FIPS-197 Appendix C
    plaintext = bytes.fromhex("00112233445566778899aabbccddeeff")
    vectors = [
        ("000102030405060708090a0b0c0d0e0f", "69c4e0d86a7b0430d8cdb78070b4c55a"),
        ("000102030405060708090a0b0c0d0e0f1011121314151617", "dda97ca4864cdfe06eaf70a0ec0d7191"),
        ("000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f",
         "8ea2b7ca516745bfeafc49904b496089"),
    ]

    all_passed = True
    for key_hex, expected in vectors:
        aes = AES(bytes.fromhex(key_hex))
        ciphertext = aes.encrypt_block(plaintext)
        passed = ciphertext.hex() == expected and aes.decrypt_block(ciphertext) == plaintext
        all_passed = all_passed and passed
        print(f"  {aes!r}: {ciphertext.hex()} {'✓ PASS' if passed else '✗ FAIL'}")

    print("=" * 60)
    print("All checks passed" if all_passed else "Some checks failed")
