# token_kernel/core/options.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Union

from token_kernel.core.algorithms import Algorithm
from token_kernel.core.duration import Duration

AudienceOption = Union[str, Iterable[str]]


@dataclass(frozen=True)
class SignOptions:
    """
    Per-call signing configuration.

    secret       → HMAC secret (HS*), at least 32 bytes
    private_key  → PEM private key (RS256)
    expires_in   → exp = iat + duration
    not_before   → nbf = iat + duration
    header       → extra header fields; alg/typ always win
    """

    secret: Optional[Union[str, bytes]] = field(default=None, repr=False)
    private_key: Optional[Union[str, bytes]] = field(default=None, repr=False)
    algorithm: Optional[Union[str, Algorithm]] = None
    expires_in: Optional[Duration] = None
    not_before: Optional[Duration] = None
    issuer: Optional[str] = None
    audience: Optional[AudienceOption] = None
    jwtid: Optional[str] = None
    header: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class VerifyOptions:
    """Per-call verification configuration (key, expected alg/iss/aud, leeway)."""

    secret: Optional[Union[str, bytes]] = field(default=None, repr=False)
    public_key: Optional[Union[str, bytes]] = field(default=None, repr=False)
    algorithm: Optional[Union[str, Algorithm]] = None
    issuer: Optional[str] = None
    audience: Optional[AudienceOption] = None
    clock_tolerance_sec: int = 5
