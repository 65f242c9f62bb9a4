# token_kernel/core/base64url.py
"""URL-safe, unpadded base64 used for every token segment."""
from __future__ import annotations

import base64
import binascii
import re

from token_kernel.core.errors import ErrorKind, TokenError

_ALPHABET = re.compile(r"^[A-Za-z0-9\-_]*$")
_TO_STANDARD = str.maketrans("-_", "+/")


def encode(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(value: str) -> bytes:
    """
    Decode a base64url segment.

    Raises TokenError(INVALID_ENCODING) on foreign characters, on a length
    no base64 string can have, and on non-canonical input (stray bits in
    the last character), so every distinct segment maps to distinct bytes.
    """
    if not isinstance(value, str) or not _ALPHABET.match(value):
        raise TokenError(ErrorKind.INVALID_ENCODING)
    if len(value) % 4 == 1:
        raise TokenError(ErrorKind.INVALID_ENCODING)

    padded = value + "=" * (-len(value) % 4)
    try:
        raw = base64.b64decode(padded.translate(_TO_STANDARD), validate=True)
    except (binascii.Error, ValueError) as e:
        raise TokenError(ErrorKind.INVALID_ENCODING) from e

    if encode(raw) != value:
        raise TokenError(ErrorKind.INVALID_ENCODING)
    return raw
