# token_kernel/core/signer.py
"""
──────────────────────────────────────────────────────────────────────────────
sign(): claims → compact token
──────────────────────────────────────────────────────────────────────────────
Procedure:
    1. resolve algorithm, check key (secret ≥ 32 bytes / PEM private key)
    2. copy claims, inject iat (+ exp/nbf/iss/aud/jti from options)
    3. header = {**options.header, alg, typ}
    4. signature over "b64(header).b64(payload)"

Usage:
    from token_kernel import sign, SignOptions
    token = sign({"sub": "u1"}, SignOptions(secret=SECRET, expires_in="1h"))
──────────────────────────────────────────────────────────────────────────────
"""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional, Union

from token_kernel.core import base64url, duration
from token_kernel.core.algorithms import DEFAULT_ALGORITHM, MIN_SECRET_BYTES, Algorithm, prepare_key, sign_bytes
from token_kernel.core.claims import ClaimSet
from token_kernel.core.clock import Clock, now_seconds
from token_kernel.core.errors import ErrorKind, TokenError
from token_kernel.core.keys import KeyKind, validate_pem
from token_kernel.core.options import SignOptions
from token_kernel.logging import get_logger

logger = get_logger(__name__)


def _encode_json(obj: Dict[str, Any]) -> str:
    return base64url.encode(json.dumps(obj, separators=(",", ":")))


def _signing_key(alg: Algorithm, options: SignOptions) -> Any:
    if alg.is_symmetric:
        secret = options.secret
        if not secret:
            raise TokenError(ErrorKind.MISSING_KEY, f"Secret is required for {alg.value} signing")
        if not isinstance(secret, (str, bytes)):
            raise TokenError(ErrorKind.MISSING_KEY, "Secret must be str or bytes")
        raw = secret.encode("utf-8") if isinstance(secret, str) else secret
        if len(raw) < MIN_SECRET_BYTES:
            raise TokenError(ErrorKind.MISSING_KEY, f"Secret must be at least {MIN_SECRET_BYTES} bytes long")
        return prepare_key(alg, raw)

    if not options.private_key:
        raise TokenError(ErrorKind.MISSING_KEY, f"Private key is required for {alg.value} signing")
    validate_pem(options.private_key, KeyKind.PRIVATE)
    return prepare_key(alg, options.private_key)


def _offset(now: int, value: Any, claim: str) -> int:
    try:
        return now + duration.parse(value)
    except TokenError as e:
        raise TokenError(ErrorKind.INVALID_CLAIMS, f"Invalid {claim}: {e.message}") from e


def _audience(value: Any) -> Union[str, list]:
    if isinstance(value, str):
        return value
    return list(value)


def sign(
    claims: Union[Mapping[str, Any], ClaimSet],
    options: SignOptions,
    *,
    clock: Optional[Clock] = None,
) -> str:
    """
    Sign `claims` and return the compact token.
    Raises TokenError (MISSING_KEY / INVALID_CLAIMS); the caller's mapping is never mutated.
    """
    try:
        return _sign(claims, options, clock)
    except TokenError as e:
        alg = getattr(options.algorithm, "value", options.algorithm) or DEFAULT_ALGORITHM.value
        logger.info("token_rejected", code=e.code, alg=alg)
        raise


def _sign(claims: Union[Mapping[str, Any], ClaimSet], options: SignOptions, clock: Optional[Clock]) -> str:
    alg = Algorithm.resolve(options.algorithm)
    key = _signing_key(alg, options)

    if isinstance(claims, ClaimSet):
        payload = claims.to_dict()
    elif isinstance(claims, Mapping):
        payload = dict(claims)
    else:
        raise TokenError(ErrorKind.INVALID_CLAIMS, "Payload must be a non-null object")

    header = dict(options.header or {})
    header.update(alg=alg.value, typ="JWT")

    now = now_seconds(clock)
    payload["iat"] = now
    if options.expires_in is not None:
        payload["exp"] = _offset(now, options.expires_in, "expires_in")
    if options.not_before is not None:
        payload["nbf"] = _offset(now, options.not_before, "not_before")
    if options.issuer:
        payload["iss"] = options.issuer
    if options.audience:
        payload["aud"] = _audience(options.audience)
    if options.jwtid:
        payload["jti"] = options.jwtid

    try:
        signing_input = f"{_encode_json(header)}.{_encode_json(payload)}"
    except (TypeError, ValueError) as e:
        raise TokenError(ErrorKind.INVALID_CLAIMS, "Payload must be JSON-serializable") from e

    signature = sign_bytes(alg, key, signing_input.encode("ascii"))
    logger.debug("token_signed", alg=alg.value, claims=list(payload))
    return f"{signing_input}.{base64url.encode(signature)}"
