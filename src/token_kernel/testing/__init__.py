"""
Testing utilities for token_kernel apps.
──────────────────────────────────────────────────────────────
Provides pytest fixtures for key material and a frozen clock.
──────────────────────────────────────────────────────────────
"""
from .fixtures import FROZEN_NOW, TEST_SECRET, frozen_clock, generate_rsa_keys, rsa_keys, secret

__all__ = ["FROZEN_NOW", "TEST_SECRET", "frozen_clock", "generate_rsa_keys", "rsa_keys", "secret"]
