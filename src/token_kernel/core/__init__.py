"""
Token core: codec, signer, verifier, error taxonomy.
"""
from .algorithms import Algorithm
from .claims import ClaimSet
from .clock import FixedClock, system_clock
from .errors import ErrorKind, TokenError
from .keys import KeyKind, validate_pem
from .options import SignOptions, VerifyOptions
from .signer import sign
from .verifier import decode_unverified, verify

__all__ = [
    "Algorithm",
    "ClaimSet",
    "ErrorKind",
    "FixedClock",
    "KeyKind",
    "SignOptions",
    "TokenError",
    "VerifyOptions",
    "decode_unverified",
    "sign",
    "system_clock",
    "validate_pem",
    "verify",
]
