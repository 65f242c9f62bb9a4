# token_kernel/__init__.py
"""
token_kernel
──────────────────────────────────────────────────────────────
Compact signed tokens (JWT) for services that issue and check them.
Provides:
    - sign() / verify() with HS256/384/512 and RS256
    - ClaimSet record and TokenError taxonomy
    - Env-driven settings + cached TokenProvider
    - ASGI bearer-token middleware and FastAPI deps
──────────────────────────────────────────────────────────────
"""

__version__ = "0.1.0"

from token_kernel.core import (
    Algorithm,
    ClaimSet,
    ErrorKind,
    SignOptions,
    TokenError,
    VerifyOptions,
    decode_unverified,
    sign,
    verify,
)

__all__ = [
    "Algorithm",
    "ClaimSet",
    "ErrorKind",
    "SignOptions",
    "TokenError",
    "VerifyOptions",
    "decode_unverified",
    "sign",
    "verify",
]
