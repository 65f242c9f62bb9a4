from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping, Optional

from token_kernel.config.settings import TokenSettings, get_settings
from token_kernel.core.claims import ClaimSet
from token_kernel.core.clock import Clock
from token_kernel.core.signer import sign
from token_kernel.core.verifier import verify

"""
──────────────────────────────────────────────────────────────────────────────
TokenProvider: settings-bound sign/verify
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Issue and check tokens with options taken from TokenSettings, so
    routes don't pass keys around.

Features:
    - encode() injects iat/exp (+ iss/aud when configured).
    - decode() runs the full verify() stage pipeline.
    - Caches singleton provider via get_provider().

Usage:
    from token_kernel.security.provider import get_provider
    tokens = get_provider()

    token = tokens.encode({"sub": "user@example.com"})
    claims = tokens.decode(token)
──────────────────────────────────────────────────────────────────────────────
"""


class TokenProvider:
    def __init__(self, settings: Optional[TokenSettings] = None, clock: Optional[Clock] = None):
        self.settings = settings or get_settings()
        self.clock = clock

    def encode(self, claims: Mapping[str, Any], **overrides: Any) -> str:
        """`overrides` replace SignOptions fields for this call, e.g. expires_in="5m"."""
        return sign(claims, self.settings.sign_options(**overrides), clock=self.clock)

    def decode(self, token: str, **overrides: Any) -> ClaimSet:
        return verify(token, self.settings.verify_options(**overrides), clock=self.clock)

    # middleware calls verify() on whatever it is given
    verify = decode


@lru_cache(maxsize=1)
def get_provider() -> TokenProvider:
    # singleton (reads env once)
    return TokenProvider()
