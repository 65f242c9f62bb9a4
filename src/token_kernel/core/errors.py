# token_kernel/core/errors.py
"""
Token error taxonomy
──────────────────────────────────────────────
• One exception type (TokenError) tagged with an ErrorKind
• Every kind carries a short, safe default message
• Messages never embed key material or raw token text
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    MISSING_KEY = "MISSING_KEY"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    CLAIM_VALIDATION = "CLAIM_VALIDATION"
    INVALID_CLAIMS = "INVALID_CLAIMS"
    INVALID_ENCODING = "INVALID_ENCODING"
    INVALID_DURATION = "INVALID_DURATION"


DEFAULT_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.MISSING_KEY: "Missing required key",
    ErrorKind.MALFORMED_TOKEN: "Malformed token",
    ErrorKind.INVALID_SIGNATURE: "Invalid signature",
    ErrorKind.TOKEN_EXPIRED: "Token has expired",
    ErrorKind.CLAIM_VALIDATION: "Invalid claim",
    ErrorKind.INVALID_CLAIMS: "Invalid claims",
    ErrorKind.INVALID_ENCODING: "Invalid base64url string",
    ErrorKind.INVALID_DURATION: "Invalid duration format",
}


class TokenError(Exception):
    """
    Raised by every sign/verify failure.

    Attributes
    ----------
    kind : ErrorKind
        Which stage or utility rejected the input.
    message : str
        Human-readable, safe to return to a client.
    details : dict
        Optional structured context (claim names, expected values).
    """

    def __init__(self, kind: ErrorKind, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        self.details = details or {}
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        """Error envelope used by the web adapter."""
        return {"error": {"code": self.code, "message": self.message, "details": self.details}}

    def __repr__(self) -> str:
        return f"TokenError({self.code}, {self.message!r})"
