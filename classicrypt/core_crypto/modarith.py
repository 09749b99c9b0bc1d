"""
Modular Arithmetic over Arbitrary-Precision Integers

Implements the arithmetic layer underneath the public-key primitives:
- Normalized modular add / subtract / multiply / reduce
- Modular exponentiation (square-and-multiply algorithm)
- Extended Euclidean Algorithm for modular inverse
- Miller-Rabin primality testing
- Prime number generation

Python's int is the unbounded integer type, so no fixed-width overflow
can occur. Every result is normalized into [0, modulus).

Note: This implementation avoids using Python's built-in pow(a, b, mod).
      All modular exponentiation uses the square-and-multiply algorithm.
"""

import logging
import secrets
from typing import Tuple

from ..errors import InvalidModulusError, NoInverseError


logger = logging.getLogger(__name__)

# Number of Miller-Rabin witnesses; false positive rate at most (1/4)^rounds
MILLER_RABIN_ROUNDS = 40

SMALL_PRIMES = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47,
    53, 59, 61, 67, 71, 73, 79, 83, 89, 97,
)


def _check_modulus(modulus: int) -> None:
    if modulus <= 0:
        raise InvalidModulusError(f"Modulus must be positive, got {modulus}")


def mod_reduce(value: int, modulus: int) -> int:
    """
    Reduce value into the range [0, modulus).

    Negative values are mapped to their non-negative representative,
    e.g. mod_reduce(-1, 7) == 6.

    Raises:
        InvalidModulusError: If modulus <= 0
    """
    _check_modulus(modulus)
    return value % modulus


def mod_add(a: int, b: int, modulus: int) -> int:
    """(a + b) mod modulus, normalized into [0, modulus)."""
    _check_modulus(modulus)
    return (a + b) % modulus


def mod_sub(a: int, b: int, modulus: int) -> int:
    """(a - b) mod modulus, normalized into [0, modulus)."""
    _check_modulus(modulus)
    return (a - b) % modulus


def mod_mul(a: int, b: int, modulus: int) -> int:
    """(a * b) mod modulus, normalized into [0, modulus)."""
    _check_modulus(modulus)
    return (a * b) % modulus


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """
    Compute base^exponent mod modulus by right-to-left square-and-multiply.

    The exponent is consumed one bit at a time from the least significant
    end: base is squared once per bit and folded into the accumulator
    whenever the bit is set, so the cost is O(bit_length(exponent))
    multiplications. Built-in pow() with a modulus is deliberately not used.

    A negative exponent is interpreted as a power of the modular inverse
    of base.

    Args:
        base: The base number (any integer, reduced first)
        exponent: The exponent
        modulus: The modulus (must be positive)

    Returns:
        (base^exponent) mod modulus

    Raises:
        InvalidModulusError: If modulus <= 0
        NoInverseError: If exponent < 0 and base is not invertible
    """
    _check_modulus(modulus)
    if modulus == 1:
        return 0

    if exponent < 0:
        base = mod_inverse(base, modulus)
        exponent = -exponent

    base = base % modulus
    result = 1

    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1

    return result


def gcd(a: int, b: int) -> int:
    """
    Compute the greatest common divisor using Euclidean algorithm.

    Args:
        a: First integer
        b: Second integer

    Returns:
        GCD of a and b (always non-negative)
    """
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean Algorithm.

    Finds integers x, y such that: a*x + b*y = gcd(a, b)

    Iterative so that inputs of thousands of bits stay well clear of
    the recursion limit.

    Args:
        a: First integer (non-negative)
        b: Second integer (non-negative)

    Returns:
        Tuple (gcd, x, y) where a*x + b*y = gcd
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1

    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y

    return old_r, old_x, old_y


def mod_inverse(value: int, modulus: int) -> int:
    """
    Compute modular multiplicative inverse using Extended Euclidean Algorithm.

    Finds x such that (value * x) mod modulus = 1

    Args:
        value: The number to find inverse of
        modulus: The modulus

    Returns:
        Modular inverse of value mod modulus, in [0, modulus)

    Raises:
        InvalidModulusError: If modulus <= 0
        NoInverseError: If inverse doesn't exist (gcd(value, modulus) != 1)
    """
    _check_modulus(modulus)
    g, x, _ = extended_gcd(value % modulus, modulus)

    if g != 1:
        raise NoInverseError(
            f"Modular inverse doesn't exist (gcd({value}, {modulus}) = {g})"
        )

    return x % modulus


def is_probable_prime(n: int, rounds: int = MILLER_RABIN_ROUNDS) -> bool:
    """
    Probabilistic primality test (Miller-Rabin).

    n - 1 is split as 2^r * d with d odd. For each random base a in
    [2, n - 2], the sequence a^d, a^2d, ..., a^(2^(r-1) d) mod n must either
    start at 1 or pass through n - 1; otherwise a witnesses that n is
    composite. A composite survives one round with probability at most 1/4.

    Args:
        n: Candidate integer (any value; n < 2 is never prime)
        rounds: Number of random bases to try

    Returns:
        False if n is certainly composite, True if no witness was found
    """
    if n < 2:
        return False

    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    # Write n-1 as 2^r * d
    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for _ in range(rounds):
        a = secrets.randbelow(n - 3) + 2

        x = mod_exp(a, d, n)
        if x == 1 or x == n - 1:
            continue

        composite = True
        for _ in range(r - 1):
            x = (x * x) % n
            if x == n - 1:
                composite = False
                break

        if composite:
            return False

    return True


def generate_prime(bits: int, rounds: int = MILLER_RABIN_ROUNDS) -> int:
    """
    Draw random odd candidates with the top bit set until one passes
    is_probable_prime().

    Args:
        bits: Exact bit length of the result
        rounds: Number of Miller-Rabin rounds

    Returns:
        A prime number of exactly the specified bit length

    Raises:
        ValueError: If bits < 2
    """
    if bits < 2:
        raise ValueError("Bit length must be at least 2")
    if bits == 2:
        return 2 + secrets.randbelow(2)

    attempts = 0
    while True:
        attempts += 1
        # Set MSB for the exact bit length, LSB to make the candidate odd
        candidate = secrets.randbits(bits)
        candidate |= (1 << (bits - 1))
        candidate |= 1

        if is_probable_prime(candidate, rounds):
            logger.debug("Found %d-bit prime after %d candidates", bits, attempts)
            return candidate


if __name__ == "__main__":
    print("Modular Arithmetic Self-Check")
    print("-" * 60)

    checks = [
        ("mod_add(5, 4, 7)", mod_add(5, 4, 7), 2),
        ("mod_sub(2, 5, 7)", mod_sub(2, 5, 7), 4),
        ("mod_mul(-3, 4, 7)", mod_mul(-3, 4, 7), 2),
        ("mod_exp(4, 13, 497)", mod_exp(4, 13, 497), 445),
        ("mod_exp(3, -1, 10)", mod_exp(3, -1, 10), 7),
        ("mod_exp(9, 0, 1)", mod_exp(9, 0, 1), 0),
        ("mod_inverse(17, 3120)", mod_inverse(17, 3120), 2753),
        ("is_probable_prime(561)", is_probable_prime(561), False),
        ("is_probable_prime(2**89 - 1)", is_probable_prime(2 ** 89 - 1), True),
    ]

    failures = 0
    for label, got, want in checks:
        ok = got == want
        failures += not ok
        print(f"  {label:<30} -> {got!s:<8} {'✓' if ok else '✗'}")

    prime = generate_prime(128)
    ok = prime.bit_length() == 128 and is_probable_prime(prime)
    failures += not ok
    print(f"  generate_prime(128) -> {prime:#x} {'✓' if ok else '✗'}")

    print("-" * 60)
    print("All checks passed" if failures == 0 else f"{failures} check(s) failed")
