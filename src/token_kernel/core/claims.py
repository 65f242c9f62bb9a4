from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

Audience = Union[str, List[str]]

RESERVED_CLAIMS = ("iss", "sub", "aud", "exp", "nbf", "iat", "jti")


@dataclass(frozen=True)
class ClaimSet:
    """
    Decoded token payload.

    Attributes
    ----------
    iss, sub, jti : str | None
        Issuer, subject and token id.
    aud : str | list[str] | None
        Intended recipient(s).
    exp, nbf, iat : int | None
        Unix seconds: expiry, not-before, issued-at.
    extra : dict[str, Any]
        Every non-reserved claim, untouched.
    """

    iss: Optional[str] = None
    sub: Optional[str] = None
    aud: Optional[Audience] = None
    exp: Optional[int] = None
    nbf: Optional[int] = None
    iat: Optional[int] = None
    jti: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    # ────────────────────────────────────────────────
    # Conversion
    # ────────────────────────────────────────────────
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClaimSet":
        """
        Split a plain mapping into reserved fields + extras (deep copy).
        A reserved claim that is explicitly null stays in `extra` so it round-trips.
        """
        data = copy.deepcopy(dict(data))
        reserved = {name: data.pop(name) for name in RESERVED_CLAIMS if data.get(name) is not None}
        return cls(**reserved, extra=data)

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping; unset reserved claims are omitted."""
        out = copy.deepcopy(self.extra)
        for name in RESERVED_CLAIMS:
            value = getattr(self, name)
            if value is not None:
                out[name] = copy.deepcopy(value)
        return out

    # ────────────────────────────────────────────────
    # Mapping-style access over the merged view
    # ────────────────────────────────────────────────
    def __getitem__(self, key: str) -> Any:
        if key in RESERVED_CLAIMS and getattr(self, key) is not None:
            return getattr(self, key)
        return self.extra[key]

    def __contains__(self, key: object) -> bool:
        if key in RESERVED_CLAIMS and getattr(self, key) is not None:
            return True
        return key in self.extra

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    @property
    def audiences(self) -> List[str]:
        """`aud` as a list, empty when absent."""
        if self.aud is None:
            return []
        if isinstance(self.aud, str):
            return [self.aud]
        return list(self.aud)
