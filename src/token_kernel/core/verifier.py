# token_kernel/core/verifier.py
"""
──────────────────────────────────────────────────────────────────────────────
verify(): compact token → ClaimSet
──────────────────────────────────────────────────────────────────────────────
Stages run in order; the first failure is the one reported:

    1. key presence          → MISSING_KEY
    2. three segments        → MALFORMED_TOKEN
    3. header decode         → MALFORMED_TOKEN
    4. header alg == config  → INVALID_SIGNATURE  (blocks "none" / downgrade)
    5. payload decode        → MALFORMED_TOKEN
    6. signature             → MALFORMED_TOKEN / INVALID_SIGNATURE
    7. exp / nbf / iat       → TOKEN_EXPIRED / CLAIM_VALIDATION
    8. issuer                → CLAIM_VALIDATION
    9. audience              → CLAIM_VALIDATION

An expired token with a bad signature therefore reports INVALID_SIGNATURE.
──────────────────────────────────────────────────────────────────────────────
"""
from __future__ import annotations

import json
import math
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from token_kernel.core import base64url
from token_kernel.core.algorithms import Algorithm, prepare_key, verify_bytes
from token_kernel.core.claims import ClaimSet
from token_kernel.core.clock import Clock, now_seconds
from token_kernel.core.errors import ErrorKind, TokenError
from token_kernel.core.keys import KeyKind, validate_pem
from token_kernel.core.options import VerifyOptions
from token_kernel.logging import get_logger

logger = get_logger(__name__)


# ──────────────────────────────────────────────────────────────
# Decoding helpers
# ──────────────────────────────────────────────────────────────
def _split(token: Any) -> List[str]:
    if not isinstance(token, str):
        raise TokenError(ErrorKind.MALFORMED_TOKEN, "Invalid token: expected a string")
    parts = token.split(".")
    if len(parts) != 3:
        raise TokenError(ErrorKind.MALFORMED_TOKEN, "Invalid token: expected 3 segments")
    return parts


def _decode_json(segment: str, what: str) -> Dict[str, Any]:
    try:
        obj = json.loads(base64url.decode(segment).decode("utf-8"))
    except (TokenError, UnicodeDecodeError, ValueError) as e:
        raise TokenError(ErrorKind.MALFORMED_TOKEN, f"Invalid token {what}") from e
    if not isinstance(obj, dict):
        raise TokenError(ErrorKind.MALFORMED_TOKEN, f"Invalid token {what}")
    return obj


def decode_unverified(token: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Return (header, payload) WITHOUT checking the signature or any claim.
    For inspection and debugging only; never trust the result.
    """
    parts = _split(token)
    return _decode_json(parts[0], "header"), _decode_json(parts[1], "payload")


# ──────────────────────────────────────────────────────────────
# Stages
# ──────────────────────────────────────────────────────────────
def _verification_key(alg: Algorithm, options: VerifyOptions) -> Any:
    if alg.is_symmetric:
        if not options.secret:
            raise TokenError(ErrorKind.MISSING_KEY, f"Secret is required for {alg.value} verification")
        if not isinstance(options.secret, (str, bytes)):
            raise TokenError(ErrorKind.MISSING_KEY, "Secret must be str or bytes")
        return options.secret
    if not options.public_key:
        raise TokenError(ErrorKind.MISSING_KEY, f"Public key is required for {alg.value} verification")
    validate_pem(options.public_key, KeyKind.PUBLIC)
    return options.public_key


def _check_signature(alg: Algorithm, key: Any, parts: List[str]) -> None:
    try:
        signature = base64url.decode(parts[2])
    except TokenError as e:
        raise TokenError(ErrorKind.MALFORMED_TOKEN, "Invalid signature encoding") from e

    signing_input = f"{parts[0]}.{parts[1]}".encode("ascii")
    if not verify_bytes(alg, prepare_key(alg, key), signing_input, signature):
        raise TokenError(ErrorKind.INVALID_SIGNATURE)


def _timestamp(payload: Dict[str, Any], claim: str) -> Optional[float]:
    value = payload.get(claim)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise TokenError(ErrorKind.CLAIM_VALIDATION, f"Invalid {claim} claim", {"claim": claim})
    return value


def _iso(ts: float) -> str:
    try:
        return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return str(ts)


def _check_times(payload: Dict[str, Any], now: int, tolerance: int) -> None:
    exp = _timestamp(payload, "exp")
    if exp is not None and now - tolerance > exp:
        raise TokenError(ErrorKind.TOKEN_EXPIRED, f"Token expired at {_iso(exp)}", {"claim": "exp"})

    nbf = _timestamp(payload, "nbf")
    if nbf is not None and now + tolerance < nbf:
        raise TokenError(ErrorKind.CLAIM_VALIDATION, f"Token not valid before {_iso(nbf)}", {"claim": "nbf"})

    iat = _timestamp(payload, "iat")
    if iat is not None and now + tolerance < iat:
        raise TokenError(ErrorKind.CLAIM_VALIDATION, f"Token used before issued at {_iso(iat)}", {"claim": "iat"})


def _as_set(value: Any) -> set:
    if isinstance(value, str):
        return {value}
    if isinstance(value, Iterable) and not isinstance(value, (bytes, dict)):
        return {v for v in value if isinstance(v, str)}
    return set()


def _check_identity(payload: Dict[str, Any], options: VerifyOptions) -> None:
    if options.issuer and payload.get("iss") != options.issuer:
        raise TokenError(ErrorKind.CLAIM_VALIDATION, "Invalid issuer", {"claim": "iss"})

    if options.audience:
        aud = payload.get("aud")
        if not aud:
            raise TokenError(ErrorKind.CLAIM_VALIDATION, "Token audience is required", {"claim": "aud"})
        if not _as_set(options.audience) & _as_set(aud):
            raise TokenError(ErrorKind.CLAIM_VALIDATION, "Invalid audience", {"claim": "aud"})


# ──────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────
def verify(token: str, options: VerifyOptions, *, clock: Optional[Clock] = None) -> ClaimSet:
    """
    Verify `token` and return its claims.
    Raises TokenError; see module docstring for stage order.
    """
    alg = Algorithm.resolve(options.algorithm)
    try:
        key = _verification_key(alg, options)
        parts = _split(token)

        header = _decode_json(parts[0], "header")
        if header.get("alg") != alg.value:
            raise TokenError(
                ErrorKind.INVALID_SIGNATURE,
                f"Token algorithm mismatch: expected {alg.value}",
                {"expected": alg.value},
            )

        payload = _decode_json(parts[1], "payload")
        _check_signature(alg, key, parts)

        tolerance = 5 if options.clock_tolerance_sec is None else options.clock_tolerance_sec
        _check_times(payload, now_seconds(clock), tolerance)
        _check_identity(payload, options)
    except TokenError as e:
        logger.info("token_rejected", code=e.code, alg=alg.value)
        raise

    logger.debug("token_verified", alg=alg.value, sub=payload.get("sub"))
    return ClaimSet.from_dict(payload)
