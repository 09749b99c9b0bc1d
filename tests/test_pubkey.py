"""
Unit tests for the Public-Key module.

Tests:
- Diffie-Hellman parameters and key agreement
- RSA key generation, encryption and signatures
"""

import pytest

from classicrypt.core_crypto.modarith import gcd, is_probable_prime
from classicrypt.core_crypto.sha256 import SHA224
from classicrypt.errors import InvalidModulusError
from classicrypt.pubkey import (
    DHParameters, DHKeyExchange, MODP_1024, MODP_2048,
    generate_private_exponent, dh_public_value, dh_shared_secret,
    RSAKeyPair, generate_rsa_keypair, rsa_encrypt, rsa_decrypt, rsa_sign, rsa_verify
)


@pytest.fixture(scope="module")
def rsa_keypair():
    """One 512-bit key pair shared by the RSA tests."""
    return RSAKeyPair.generate(bits=512)


class TestDHParameters:
    """Unit tests for Diffie-Hellman group parameters."""

    def test_standard_groups(self):
        assert MODP_2048.bits == 2048
        assert MODP_1024.bits == 1024
        assert MODP_2048.generator == MODP_1024.generator == 2
        assert MODP_2048.byte_length == 256

    def test_rfc3526_modulus_ends(self):
        """Both RFC groups start and end with 64 one bits."""
        for params in (MODP_1024, MODP_2048):
            assert params.modulus >> (params.bits - 64) == 2 ** 64 - 1
            assert params.modulus & (2 ** 64 - 1) == 2 ** 64 - 1

    def test_small_group_is_prime(self):
        assert is_probable_prime(MODP_1024.modulus, rounds=8)

    def test_rejects_tiny_modulus(self):
        with pytest.raises(InvalidModulusError):
            DHParameters(modulus=3, generator=2)

    def test_rejects_bad_generator(self):
        for generator in (0, 1, 22, 23):
            with pytest.raises(InvalidModulusError):
                DHParameters(modulus=23, generator=generator)

    def test_parameters_immutable(self):
        with pytest.raises(AttributeError):
            MODP_1024.generator = 5


class TestDiffieHellman:
    """Unit tests for Diffie-Hellman key agreement."""

    def test_toy_group(self):
        """Textbook example: p = 23, g = 5, a = 6, b = 15 -> secret 2."""
        params = DHParameters(modulus=23, generator=5)
        alice_public = dh_public_value(params, 6)
        bob_public = dh_public_value(params, 15)
        assert alice_public == 8
        assert bob_public == 19
        assert dh_shared_secret(params, bob_public, 6) == 2
        assert dh_shared_secret(params, alice_public, 15) == 2

    def test_agreement(self):
        """Both parties derive the same shared secret."""
        alice = DHKeyExchange(MODP_1024)
        bob = DHKeyExchange(MODP_1024)

        alice_secret = alice.derive_shared_secret(bob.public_value)
        bob_secret = bob.derive_shared_secret(alice.public_value)

        assert alice_secret == bob_secret
        assert 1 < alice_secret < MODP_1024.modulus

    def test_agreement_from_bytes(self):
        alice = DHKeyExchange(MODP_1024)
        bob = DHKeyExchange(MODP_1024)

        assert len(alice.public_bytes()) == 128
        assert alice.derive_shared_secret_from_bytes(bob.public_bytes()) == \
            bob.derive_shared_secret(alice.public_value)

    def test_derived_keys_match(self):
        alice = DHKeyExchange(MODP_1024)
        bob = DHKeyExchange(MODP_1024)

        alice_key = alice.derive_key(bob.public_value, info=b"session")
        bob_key = bob.derive_key(alice.public_value, info=b"session")

        assert alice_key == bob_key
        assert len(alice_key) == 32
        assert alice.derive_key(bob.public_value, length=16, info=b"other") != alice_key[:16]

    def test_fixed_private_exponent(self):
        party = DHKeyExchange(MODP_1024, private_exponent=12345)
        assert party.public_value == pow(2, 12345, MODP_1024.modulus)

    def test_default_group(self):
        party = DHKeyExchange()
        assert party.params is MODP_2048
        assert 1 < party.public_value < MODP_2048.modulus

    def test_private_exponent_range(self):
        for _ in range(20):
            exponent = generate_private_exponent(MODP_1024)
            assert 2 <= exponent <= MODP_1024.modulus - 2

    def test_rejects_out_of_range_peer_values(self):
        """Peer values must be group elements: 0 < B < p."""
        party = DHKeyExchange(MODP_1024)
        p = MODP_1024.modulus
        for value in (-1, 0, p, p + 5):
            with pytest.raises(ValueError):
                party.derive_shared_secret(value)

    def test_accepts_peer_values_one_and_p_minus_one(self):
        party = DHKeyExchange(MODP_1024, private_exponent=3)
        p = MODP_1024.modulus
        assert party.derive_shared_secret(1) == 1
        assert party.derive_shared_secret(p - 1) == p - 1

    def test_agreement_when_public_value_is_one(self):
        """g = 2 has order 3 mod 7, so a = 3 publishes 1; both sides still agree."""
        params = DHParameters(modulus=7, generator=2)
        alice_public = dh_public_value(params, 3)
        bob_public = dh_public_value(params, 2)
        assert alice_public == 1
        assert dh_shared_secret(params, alice_public, 2) == \
            dh_shared_secret(params, bob_public, 3) == 1

    def test_agreement_with_exponent_p_minus_one(self):
        """a = p - 1 always publishes 1 (Fermat); the exchange still completes."""
        params = DHParameters(modulus=23, generator=5)
        for b in range(1, 23):
            alice_public = dh_public_value(params, 22)
            bob_public = dh_public_value(params, b)
            assert alice_public == 1
            assert dh_shared_secret(params, alice_public, b) == \
                dh_shared_secret(params, bob_public, 22)

    def test_agreement_with_exponent_equal_to_generator_order(self):
        """2 has order (p - 1) / 2 in the RFC groups, so that exponent publishes 1."""
        p = MODP_1024.modulus
        alice = DHKeyExchange(MODP_1024, private_exponent=(p - 1) // 2)
        bob = DHKeyExchange(MODP_1024)
        assert alice.public_value == 1
        assert alice.derive_key(bob.public_value) == bob.derive_key(alice.public_value)

    def test_rejects_bad_private_exponent(self):
        with pytest.raises(ValueError):
            dh_public_value(MODP_1024, 0)
        with pytest.raises(ValueError):
            DHKeyExchange(MODP_1024, private_exponent=MODP_1024.modulus)


class TestRSA:
    """Unit tests for RSA."""

    def test_keypair_structure(self, rsa_keypair):
        e, n = rsa_keypair.public_key
        d, n2 = rsa_keypair.private_key
        assert n == n2
        assert n.bit_length() == 512
        assert rsa_keypair.key_size == 512
        assert e == 65537
        assert gcd(e, d) == 1

    def test_generate_function(self):
        public_key, private_key = generate_rsa_keypair(128)
        assert public_key[1] == private_key[1]
        assert public_key[1].bit_length() == 128

    def test_minimum_size(self):
        with pytest.raises(ValueError):
            generate_rsa_keypair(32)

    def test_encrypt_decrypt(self, rsa_keypair):
        """Decryption inverts encryption for several messages."""
        for message in (0, 1, 2, 42, 2 ** 200 + 7, rsa_keypair.modulus - 1):
            ciphertext = rsa_keypair.encrypt(message)
            assert rsa_keypair.decrypt(ciphertext) == message

    def test_textbook_example(self):
        """p = 61, q = 53, e = 17, d = 2753."""
        public_key, private_key = (17, 3233), (2753, 3233)
        assert rsa_encrypt(65, public_key) == 2790
        assert rsa_decrypt(2790, private_key) == 65

    def test_message_out_of_range(self, rsa_keypair):
        with pytest.raises(ValueError):
            rsa_keypair.encrypt(rsa_keypair.modulus)
        with pytest.raises(ValueError):
            rsa_keypair.encrypt(-1)
        with pytest.raises(ValueError):
            rsa_keypair.decrypt(rsa_keypair.modulus + 1)

    def test_encrypt_bytes(self, rsa_keypair):
        data = b"short secret"
        ciphertext = rsa_keypair.encrypt_bytes(data)
        assert len(ciphertext) == 64
        assert rsa_keypair.decrypt_bytes(ciphertext) == data

    def test_encrypt_bytes_too_long(self, rsa_keypair):
        with pytest.raises(ValueError):
            rsa_keypair.encrypt_bytes(b"\xff" * 64)

    def test_sign_verify(self, rsa_keypair):
        """Test RSA signature and verification."""
        message = b"Test message for signing"
        signature = rsa_keypair.sign(message)
        assert rsa_keypair.verify(message, signature)

    def test_sign_verify_functions(self, rsa_keypair):
        signature = rsa_sign(b"data", rsa_keypair.private_key)
        assert rsa_verify(b"data", signature, rsa_keypair.public_key)

    def test_verify_rejects_other_message(self, rsa_keypair):
        signature = rsa_keypair.sign(b"original")
        assert not rsa_keypair.verify(b"modified", signature)

    def test_verify_rejects_tampered_signature(self, rsa_keypair):
        signature = rsa_keypair.sign(b"original")
        assert not rsa_keypair.verify(b"original", signature ^ 1)
        assert not rsa_keypair.verify(b"original", rsa_keypair.modulus + signature)
        assert not rsa_keypair.verify(b"original", -1)

    def test_verify_rejects_other_key(self, rsa_keypair):
        other = RSAKeyPair.generate(bits=256)
        signature = other.sign(b"message")
        assert not rsa_keypair.verify(b"message", signature % rsa_keypair.modulus)

    def test_signature_bytes(self, rsa_keypair):
        signature = rsa_keypair.sign_bytes(b"message")
        assert len(signature) == 64
        assert rsa_keypair.verify_bytes(b"message", signature)

    def test_alternate_hash(self, rsa_keypair):
        signature = rsa_keypair.sign(b"message", SHA224)
        assert rsa_keypair.verify(b"message", signature, SHA224)
        assert not rsa_keypair.verify(b"message", signature)

    def test_mismatched_moduli(self):
        with pytest.raises(ValueError):
            RSAKeyPair((65537, 3233), (2753, 3127))
