"""
Docstring example tests.

Every `Example:` block in the package must run on its own, with the
imports it needs written inside the example.
"""

import doctest
import importlib

import pytest


MODULES = [
    "classicrypt.core_crypto.aes",
    "classicrypt.core_crypto.block_cipher",
    "classicrypt.core_crypto.feistel",
    "classicrypt.core_crypto.merkle_damgard",
    "classicrypt.core_crypto.sha256",
    "classicrypt.core_crypto.util",
    "classicrypt.mac.hash_mac",
    "classicrypt.modes.chaining",
    "classicrypt.modes.padding",
    "classicrypt.pubkey.diffie_hellman",
    "classicrypt.pubkey.rsa",
]


class TestDocstringExamples:
    """Run the examples embedded in module docstrings."""

    @pytest.mark.parametrize("module_name", MODULES)
    def test_examples_pass(self, module_name):
        """Examples in each module run without errors or mismatches."""
        module = importlib.import_module(module_name)
        results = doctest.testmod(module, verbose=False)
        assert results.attempted > 0, f"{module_name} has no examples"
        assert results.failed == 0, f"{results.failed} example(s) failed in {module_name}"
