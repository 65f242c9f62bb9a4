# token_kernel/core/algorithms.py
"""
──────────────────────────────────────────────────────────────────────────────
Algorithm allow-list and signing primitives
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Map the closed set of supported `alg` values onto PyJWT algorithm
    objects (HMAC digest or RSA PKCS#1 v1.5), resolved once per call.

Supported:
    HS256 / HS384 / HS512  → HMAC-SHA2, shared secret
    RS256                  → RSA-SHA256, PEM private key signs, PEM public key verifies

Usage:
    alg = Algorithm.resolve(options.algorithm)
    key = prepare_key(alg, options.secret)
    sig = sign_bytes(alg, key, b"header.payload")
──────────────────────────────────────────────────────────────────────────────
"""
from __future__ import annotations

import hmac
from enum import Enum
from typing import Any, Dict, Optional

from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import HMACAlgorithm, RSAAlgorithm
from jwt.exceptions import InvalidKeyError

from token_kernel.core.errors import ErrorKind, TokenError


class Algorithm(str, Enum):
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"

    @property
    def is_symmetric(self) -> bool:
        return self.value.startswith("HS")

    @classmethod
    def resolve(cls, value: Optional[str | "Algorithm"]) -> "Algorithm":
        """Default to HS256; anything outside the allow-list is rejected."""
        if value is None:
            return DEFAULT_ALGORITHM
        try:
            return cls(value)
        except ValueError:
            raise TokenError(ErrorKind.INVALID_CLAIMS, f"Unsupported algorithm: {value}") from None


DEFAULT_ALGORITHM = Algorithm.HS256

# min secret length in bytes for the HMAC family
MIN_SECRET_BYTES = 32

_PRIMITIVES: Dict[Algorithm, Any] = {
    Algorithm.HS256: HMACAlgorithm(HMACAlgorithm.SHA256),
    Algorithm.HS384: HMACAlgorithm(HMACAlgorithm.SHA384),
    Algorithm.HS512: HMACAlgorithm(HMACAlgorithm.SHA512),
    Algorithm.RS256: RSAAlgorithm(RSAAlgorithm.SHA256),
}


def prepare_key(alg: Algorithm, key: str | bytes) -> Any:
    """
    Load key material for `alg` through PyJWT.
    Keys the backend refuses (unparseable PEM, PEM used as an HMAC secret,
    encrypted or non-RSA keys) become TokenError(MISSING_KEY).
    """
    try:
        prepared = _PRIMITIVES[alg].prepare_key(key)
    except (InvalidKeyError, ValueError, TypeError) as e:
        raise TokenError(ErrorKind.MISSING_KEY, f"Unusable key for {alg.value}") from e

    if not alg.is_symmetric and not isinstance(prepared, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        raise TokenError(ErrorKind.MISSING_KEY, f"Unusable key for {alg.value}")
    return prepared


def sign_bytes(alg: Algorithm, key: Any, message: bytes) -> bytes:
    return _PRIMITIVES[alg].sign(message, key)


def verify_bytes(alg: Algorithm, key: Any, message: bytes, signature: bytes) -> bool:
    if alg.is_symmetric:
        # constant time wrt. the expected MAC
        return hmac.compare_digest(sign_bytes(alg, key, message), signature)
    if not isinstance(key, rsa.RSAPublicKey):
        return False
    return _PRIMITIVES[alg].verify(message, key, signature)
