# token_kernel/web/middleware.py
from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from starlette.requests import Request
from starlette.responses import JSONResponse

from token_kernel.core.claims import ClaimSet
from token_kernel.core.errors import TokenError
from token_kernel.logging import get_logger

logger = get_logger(__name__)

TokenExtractor = Callable[[Request], Optional[str]]
Verifier = Callable[[str], ClaimSet]


def bearer_token(request: Request) -> Optional[str]:
    """Default extractor: 'Authorization: Bearer <token>' (scheme is case-insensitive)."""
    auth = request.headers.get("authorization")
    if not auth:
        return None
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class TokenAuthMiddleware:
    """
    ASGI middleware that verifies a bearer token on every HTTP request.

    - Paths in `allowlist` bypass auth.
    - The token comes from `get_token(request)` (default: bearer_token).
    - `verifier(token)` must return a ClaimSet or raise.
    On success, sets request.state.claims (ClaimSet) and request.state.token.
    On failure, returns 401 JSON {"error": "<message>"}; TokenError messages
    are safe to expose, anything else becomes "Invalid token".
    """

    def __init__(
        self,
        app,
        *,
        verifier: Verifier,
        allowlist: Iterable[str] = (),
        get_token: Optional[TokenExtractor] = None,
        on_error: Optional[Callable[[Request, Exception], Any]] = None,
    ):
        self.app = app
        self.verifier = verifier
        self.allowlist = set(allowlist or ())
        self.get_token = get_token or bearer_token
        self.on_error = on_error

    async def _reject(self, scope, receive, send, message: str):
        return await JSONResponse({"error": message}, status_code=401)(scope, receive, send)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive)
        path = request.url.path
        if path in self.allowlist:
            return await self.app(scope, receive, send)

        token = self.get_token(request)
        if not token:
            logger.info("auth_rejected", path=path, code="NO_TOKEN")
            return await self._reject(scope, receive, send, "No token provided")

        try:
            claims = self.verifier(token)
        except Exception as e:
            if self.on_error:
                self.on_error(request, e)
            if isinstance(e, TokenError):
                logger.info("auth_rejected", path=path, code=e.code)
                return await self._reject(scope, receive, send, e.message)
            logger.warning("auth_verifier_failed", path=path, error_type=type(e).__name__)
            return await self._reject(scope, receive, send, "Invalid token")

        # request.state is backed by scope["state"], so this reaches route handlers
        request.state.claims = claims
        request.state.token = token
        return await self.app(scope, receive, send)
