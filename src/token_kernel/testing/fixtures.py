"""
──────────────────────────────────────────────────────────────────────────────
token_kernel.testing.fixtures
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Provide reusable pytest fixtures for apps that issue or check tokens.

Exports:
    - secret        → 32+ byte HMAC secret
    - rsa_keys      → RsaKeyPair(private_pem, public_pem), generated once per session
    - frozen_clock  → FixedClock pinned to FROZEN_NOW

Usage in your test:
    from token_kernel.testing.fixtures import secret, frozen_clock

    def test_roundtrip(secret, frozen_clock):
        token = sign({"sub": "u1"}, SignOptions(secret=secret), clock=frozen_clock)
        assert verify(token, VerifyOptions(secret=secret), clock=frozen_clock).sub == "u1"
──────────────────────────────────────────────────────────────────────────────
"""
from __future__ import annotations

from typing import NamedTuple

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from token_kernel.core.clock import FixedClock

FROZEN_NOW = 1_700_000_000
TEST_SECRET = "test-secret-key-that-is-32-bytes!"


class RsaKeyPair(NamedTuple):
    private_pem: str
    public_pem: str


def generate_rsa_keys(key_size: int = 2048) -> RsaKeyPair:
    """PKCS#8 private key + SubjectPublicKeyInfo public key, both PEM text."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")
    return RsaKeyPair(private_pem, public_pem)


# ──────────────────────────────────────────────────────────────
# Key material
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def secret() -> str:
    return TEST_SECRET


@pytest.fixture(scope="session")
def rsa_keys() -> RsaKeyPair:
    return generate_rsa_keys()


# ──────────────────────────────────────────────────────────────
# Clock
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def frozen_clock() -> FixedClock:
    return FixedClock(FROZEN_NOW)
