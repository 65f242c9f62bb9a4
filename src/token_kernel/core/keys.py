# token_kernel/core/keys.py
from __future__ import annotations

from enum import Enum
from typing import Union

from token_kernel.core.errors import ErrorKind, TokenError

KeyMaterial = Union[str, bytes]


class KeyKind(str, Enum):
    PRIVATE = "private"
    PUBLIC = "public"


def validate_pem(key: KeyMaterial, kind: KeyKind) -> None:
    """
    Structural PEM check only: BEGIN/END markers of the requested kind.
    Whether the key actually loads is left to the crypto backend.
    """
    try:
        text = key.decode("utf-8") if isinstance(key, bytes) else str(key)
    except UnicodeDecodeError as e:
        raise TokenError(ErrorKind.MISSING_KEY, f"Invalid {kind.value} key format. Expected a PEM-encoded key.") from e

    text = text.strip()
    label = kind.value.upper()
    if not (text.startswith(f"-----BEGIN {label} KEY-----") and text.endswith(f"-----END {label} KEY-----")):
        raise TokenError(ErrorKind.MISSING_KEY, f"Invalid {kind.value} key format. Expected a PEM-encoded key.")
