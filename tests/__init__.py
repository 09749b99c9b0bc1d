# classicrypt Test Suite
"""
Test suite including:
- Known-answer tests (FIPS-197, SP 800-38A, RFC 4231, RFC 5869)
- Randomized comparisons against the cryptography package
- Security tests (invalid inputs, tampering, padding errors)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
