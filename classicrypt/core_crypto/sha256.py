"""
SHA-256 and SHA-224 (FIPS 180-4)

Both hashes share one compression function and differ only in their
initial chaining values and output length. The padding and block
iteration live in merkle_damgard.py; this module supplies the
HashAlgorithm instances SHA256 and SHA224 plus one-shot helpers.

Components:
- Constants: H_INITIAL, H_INITIAL_224, K
- Message schedule: 16 input words stretched to 64
- compress(): 64 rounds over one 512-bit block
- SHA256 / SHA224 algorithm objects and sha256() / sha224() shortcuts
"""

from typing import List, Tuple

from .merkle_damgard import HashAlgorithm, merkle_damgard_hash


SHA256_BLOCK_SIZE = 64
SHA256_DIGEST_SIZE = 32
SHA224_DIGEST_SIZE = 28

# sqrt of the first 8 primes, fractional part, top 32 bits
H_INITIAL = (
    0x6a09e667, 0xbb67ae85, 0x3c6ef372, 0xa54ff53a,
    0x510e527f, 0x9b05688c, 0x1f83d9ab, 0x5be0cd19
)

# sqrt of primes 9..16, fractional part, bits 33..64
H_INITIAL_224 = (
    0xc1059ed8, 0x367cd507, 0x3070dd17, 0xf70e5939,
    0xffc00b31, 0x68581511, 0x64f98fa7, 0xbefa4fa4
)

# cbrt of the first 64 primes, fractional part, top 32 bits
K = (
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5,
    0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3,
    0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc,
    0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7,
    0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13,
    0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3,
    0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5,
    0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208,
    0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2
)

MASK_32 = 0xFFFFFFFF


def _rotr(value: int, amount: int) -> int:
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def _ch(x: int, y: int, z: int) -> int:
    # Bits of x select between y and z
    return (x & y) ^ (~x & z & MASK_32)


def _maj(x: int, y: int, z: int) -> int:
    return (x & y) ^ (x & z) ^ (y & z)


def _sigma0(x: int) -> int:
    return _rotr(x, 7) ^ _rotr(x, 18) ^ (x >> 3)


def _sigma1(x: int) -> int:
    return _rotr(x, 17) ^ _rotr(x, 19) ^ (x >> 10)


def _big_sigma0(x: int) -> int:
    return _rotr(x, 2) ^ _rotr(x, 13) ^ _rotr(x, 22)


def _big_sigma1(x: int) -> int:
    return _rotr(x, 6) ^ _rotr(x, 11) ^ _rotr(x, 25)


def message_schedule(block: bytes) -> List[int]:
    """
    Read a 64-byte block as 16 big-endian words and extend it to 64:
    W[t] = σ1(W[t-2]) + W[t-7] + σ0(W[t-15]) + W[t-16]  (mod 2^32)
    """
    w = [int.from_bytes(block[i:i + 4], byteorder='big') for i in range(0, 64, 4)]
    for t in range(16, 64):
        w.append((_sigma1(w[t - 2]) + w[t - 7] + _sigma0(w[t - 15]) + w[t - 16]) & MASK_32)
    return w


def compress(state: Tuple[int, ...], block: bytes) -> Tuple[int, ...]:
    """
    Fold one 64-byte block into the eight-word chaining state.

    Public so that a caller holding a published digest can resume
    hashing from it (the length-extension property of Merkle-Damgård).
    """
    w = message_schedule(block)
    a, b, c, d, e, f, g, h = state

    for t in range(64):
        t1 = (h + _big_sigma1(e) + _ch(e, f, g) + K[t] + w[t]) & MASK_32
        t2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_32
        a, b, c, d, e, f, g, h = (t1 + t2) & MASK_32, a, b, c, (d + t1) & MASK_32, e, f, g

    # Feed-forward: add the incoming state word by word
    return tuple(
        (old + new) & MASK_32
        for old, new in zip(state, (a, b, c, d, e, f, g, h))
    )


class SHA256Algorithm(HashAlgorithm):
    """SHA-256: 512-bit blocks, 256-bit digest."""

    name = "SHA-256"
    block_size = SHA256_BLOCK_SIZE
    digest_size = SHA256_DIGEST_SIZE
    initial_state = H_INITIAL

    def compress(self, state: Tuple[int, ...], block: bytes) -> Tuple[int, ...]:
        return compress(state, block)

    def finalize(self, state: Tuple[int, ...]) -> bytes:
        # Big-endian words, truncated for SHA-224
        digest = b''.join(word.to_bytes(4, byteorder='big') for word in state)
        return digest[:self.digest_size]


class SHA224Algorithm(SHA256Algorithm):
    """SHA-224: the SHA-256 compression function with its own IV, truncated to 224 bits."""

    name = "SHA-224"
    digest_size = SHA224_DIGEST_SIZE
    initial_state = H_INITIAL_224


SHA256 = SHA256Algorithm()
SHA224 = SHA224Algorithm()


def sha256(data: bytes) -> bytes:
    """
    One-shot SHA-256.

    Returns:
        32-byte digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return merkle_damgard_hash(SHA256, data)


def sha256_hex(data: bytes) -> str:
    """SHA-256 digest as 64 lowercase hex characters."""
    return sha256(data).hex()


def sha256_string(text: str, encoding: str = 'utf-8') -> bytes:
    """SHA-256 of text after encoding it."""
    return sha256(text.encode(encoding))


def sha224(data: bytes) -> bytes:
    """Compute the 28-byte SHA-224 hash of the input data."""
    return merkle_damgard_hash(SHA224, data)


def sha224_hex(data: bytes) -> str:
    return sha224(data).hex()


if __name__ == "__main__":
    vectors = [
        (SHA256, b"", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
        (SHA256, b"abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
        (SHA256, b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
         "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"),
        (SHA224, b"", "d14a028c2a3a2bc9476102bb288234c415a2b01f828ea62ac5b3e42f"),
        (SHA224, b"abc", "23097d223405d8228642a477bda255b32aadbce4bda0b3f7e36c9da7"),
    ]

    print("FIPS 180-4 Known-Answer Check")
    print("-" * 60)
    failures = 0
    for algorithm, message, expected in vectors:
        got = algorithm.hash(message).hex()
        ok = got == expected
        failures += not ok
        label = message[:20] + (b"..." if len(message) > 20 else b"")
        print(f"  {algorithm.name:<8} {label!r:<30} {'✓' if ok else '✗'}")
        if not ok:
            print(f"    expected {expected}\n    got      {got}")

    print("-" * 60)
    print("All checks passed" if failures == 0 else f"{failures} check(s) failed")
