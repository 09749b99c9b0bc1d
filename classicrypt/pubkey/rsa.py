"""
Textbook RSA

Implements RSA on top of the modular arithmetic layer:
- Key pair generation from two Miller-Rabin primes
- Raw encryption / decryption on integers (no OAEP)
- Hash-then-sign signatures: s = H(m)^d mod n (no PSS / PKCS#1 padding)

This is textbook RSA and is malleable; for learning purposes only.
"""

import logging
from typing import Tuple

from ..core_crypto.merkle_damgard import HashAlgorithm
from ..core_crypto.modarith import gcd, generate_prime, mod_exp, mod_inverse
from ..core_crypto.sha256 import SHA256
from ..core_crypto.util import bytes_to_int, int_to_bytes


logger = logging.getLogger(__name__)

DEFAULT_RSA_BITS = 2048
MIN_RSA_BITS = 64
DEFAULT_PUBLIC_EXPONENT = 65537


def generate_rsa_keypair(bits: int = DEFAULT_RSA_BITS) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """
    Generate an RSA key pair with a modulus of exactly `bits` bits.

    p and q are independent Miller-Rabin primes of half the size each;
    e starts at 65537 and is bumped until it is coprime with (p-1)(q-1),
    and d is its inverse modulo (p-1)(q-1).

    Args:
        bits: Modulus size in bits

    Returns:
        ((e, n), (d, n)): the public key, then the private key

    Raises:
        ValueError: If bits < 64
    """
    if bits < MIN_RSA_BITS:
        raise ValueError(f"RSA modulus must be at least {MIN_RSA_BITS} bits")

    p_bits = bits // 2
    q_bits = bits - p_bits

    while True:
        p = generate_prime(p_bits)
        q = generate_prime(q_bits)
        n = p * q
        # The product of two k-bit primes can be 2k - 1 bits; retry until exact
        if p != q and n.bit_length() == bits:
            break

    # Euler's totient: φ(n) = (p-1)(q-1)
    phi_n = (p - 1) * (q - 1)

    e = DEFAULT_PUBLIC_EXPONENT
    while gcd(e, phi_n) != 1:
        e += 2

    d = mod_inverse(e, phi_n)
    logger.debug("Generated %d-bit RSA key pair (e=%d)", bits, e)

    return (e, n), (d, n)


def rsa_encrypt(message: int, public_key: Tuple[int, int]) -> int:
    """
    Textbook RSA encryption: c = m^e mod n.

    Raises:
        ValueError: If message is negative or not less than n
    """
    e, n = public_key
    if not 0 <= message < n:
        raise ValueError("Message must satisfy 0 <= m < n")
    return mod_exp(message, e, n)


def rsa_decrypt(ciphertext: int, private_key: Tuple[int, int]) -> int:
    """
    Textbook RSA decryption: m = c^d mod n.

    Raises:
        ValueError: If ciphertext is negative or not less than n
    """
    d, n = private_key
    if not 0 <= ciphertext < n:
        raise ValueError("Ciphertext must satisfy 0 <= c < n")
    return mod_exp(ciphertext, d, n)


def hash_to_int(message: bytes, modulus: int, algorithm: HashAlgorithm = SHA256) -> int:
    """Hash message and reduce the digest, read as a big-endian integer, modulo n."""
    return bytes_to_int(algorithm.hash(message)) % modulus


def rsa_sign(message: bytes, private_key: Tuple[int, int],
             algorithm: HashAlgorithm = SHA256) -> int:
    """
    Hash-then-sign: s = (H(message) mod n)^d mod n.

    Args:
        message: Message bytes (hashed internally)
        private_key: Tuple (d, n)
        algorithm: Hash algorithm (default SHA-256)

    Returns:
        Signature in [0, n)
    """
    d, n = private_key
    return mod_exp(hash_to_int(message, n, algorithm), d, n)


def rsa_verify(message: bytes, signature: int, public_key: Tuple[int, int],
               algorithm: HashAlgorithm = SHA256) -> bool:
    """
    Check that signature^e mod n equals H(message) mod n.

    An out-of-range signature is rejected rather than reduced.
    """
    e, n = public_key
    if not 0 <= signature < n:
        return False
    return mod_exp(signature, e, n) == hash_to_int(message, n, algorithm)


class RSAKeyPair:
    """
    Public and private halves of one RSA key, plus byte-level helpers.

    Example:
        >>> keypair = RSAKeyPair.generate(bits=512)
        >>> signature = keypair.sign(b"message")
        >>> keypair.verify(b"message", signature)
        True
    """

    def __init__(self, public_key: Tuple[int, int], private_key: Tuple[int, int]):
        """
        Wrap existing keys.

        Args:
            public_key: (e, n)
            private_key: (d, n), with the same n
        """
        if public_key[1] != private_key[1]:
            raise ValueError("Public and private keys must share the modulus")
        self._public_key = public_key
        self._private_key = private_key
        self._e, self._n = public_key
        self._d, _ = private_key

    @classmethod
    def generate(cls, bits: int = DEFAULT_RSA_BITS) -> 'RSAKeyPair':
        """Generate a new RSA key pair with a bits-bit modulus."""
        public_key, private_key = generate_rsa_keypair(bits)
        return cls(public_key, private_key)

    @property
    def public_key(self) -> Tuple[int, int]:
        """Public key (e, n)."""
        return self._public_key

    @property
    def private_key(self) -> Tuple[int, int]:
        """Private key (d, n)."""
        return self._private_key

    @property
    def modulus(self) -> int:
        return self._n

    @property
    def public_exponent(self) -> int:
        return self._e

    @property
    def private_exponent(self) -> int:
        return self._d

    @property
    def key_size(self) -> int:
        """Key size in bits."""
        return self._n.bit_length()

    @property
    def byte_length(self) -> int:
        return (self._n.bit_length() + 7) // 8

    def encrypt(self, message: int) -> int:
        """m^e mod n with this key pair's public half."""
        return rsa_encrypt(message, self._public_key)

    def decrypt(self, ciphertext: int) -> int:
        """c^d mod n with the private half."""
        return rsa_decrypt(ciphertext, self._private_key)

    def sign(self, message: bytes, algorithm: HashAlgorithm = SHA256) -> int:
        """Hash-then-sign message with the private exponent."""
        return rsa_sign(message, self._private_key, algorithm)

    def verify(self, message: bytes, signature: int,
               algorithm: HashAlgorithm = SHA256) -> bool:
        """Check a signature from sign() against message."""
        return rsa_verify(message, signature, self._public_key, algorithm)

    def sign_bytes(self, message: bytes) -> bytes:
        """Signature as fixed-length big-endian bytes."""
        return int_to_bytes(self.sign(message), self.byte_length)

    def verify_bytes(self, message: bytes, signature: bytes) -> bool:
        return self.verify(message, bytes_to_int(signature))

    def encrypt_bytes(self, data: bytes) -> bytes:
        """
        Encrypt a short byte string read as a big-endian integer.

        Raises:
            ValueError: If the integer is not below n
        """
        value = bytes_to_int(data)
        if value >= self._n:
            raise ValueError(f"Data does not fit below a {self.key_size}-bit modulus")
        return int_to_bytes(self.encrypt(value), self.byte_length)

    def decrypt_bytes(self, data: bytes) -> bytes:
        """Decrypt bytes. Leading zero bytes of the plaintext are not preserved."""
        return int_to_bytes(self.decrypt(bytes_to_int(data)))

    def __repr__(self) -> str:
        return f"RSAKeyPair(bits={self.key_size}, e={self._e})"
