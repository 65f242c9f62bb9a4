# src/token_kernel/config/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from token_kernel.core.options import SignOptions, VerifyOptions


class TokenSettings(BaseSettings):
    """
    Token issuing/verifying settings, read from TOKEN_* env vars or .env.

    TOKEN_SECRET            → HMAC secret (HS256/384/512)
    TOKEN_ALGORITHM         → HS256 (default) | HS384 | HS512 | RS256
    TOKEN_PRIVATE_KEY(_FILE)→ PEM private key, inline or path (RS256 signing)
    TOKEN_PUBLIC_KEY(_FILE) → PEM public key, inline or path (RS256 verifying)
    TOKEN_EXPIRES_IN        → default lifetime, e.g. 3600 or "1h"
    TOKEN_ISSUER            → iss to set and expect
    TOKEN_AUDIENCE          → comma separated aud values
    """

    secret: Optional[str] = None
    algorithm: str = "HS256"
    private_key: Optional[str] = None
    public_key: Optional[str] = None
    private_key_file: Optional[Path] = None
    public_key_file: Optional[Path] = None
    expires_in: Optional[str] = "1h"
    issuer: Optional[str] = None
    audience: Optional[str] = None
    clock_tolerance_sec: int = 5

    model_config = SettingsConfigDict(
        env_prefix="TOKEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def audiences(self) -> List[str]:
        if not self.audience:
            return []
        return [a.strip() for a in self.audience.split(",") if a.strip()]

    @property
    def expires_in_value(self) -> int | str | None:
        """Plain digits count as seconds."""
        if self.expires_in and self.expires_in.isdigit():
            return int(self.expires_in)
        return self.expires_in or None

    def _key(self, inline: Optional[str], path: Optional[Path]) -> Optional[str]:
        if inline:
            return inline
        if path:
            return path.read_text(encoding="utf-8")
        return None

    def sign_options(self, **overrides: Any) -> SignOptions:
        audiences = self.audiences
        values = dict(
            secret=self.secret,
            private_key=self._key(self.private_key, self.private_key_file),
            algorithm=self.algorithm,
            expires_in=self.expires_in_value,
            issuer=self.issuer,
            audience=audiences[0] if len(audiences) == 1 else (audiences or None),
        )
        values.update(overrides)
        return SignOptions(**values)

    def verify_options(self, **overrides: Any) -> VerifyOptions:
        values = dict(
            secret=self.secret,
            public_key=self._key(self.public_key, self.public_key_file),
            algorithm=self.algorithm,
            issuer=self.issuer,
            audience=self.audiences or None,
            clock_tolerance_sec=self.clock_tolerance_sec,
        )
        values.update(overrides)
        return VerifyOptions(**values)


@lru_cache(maxsize=1)
def get_settings() -> TokenSettings:
    return TokenSettings()
