# token_kernel/web/api.py
from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from fastapi import FastAPI
from starlette.requests import Request

from token_kernel.core.options import VerifyOptions
from token_kernel.core.verifier import verify
from token_kernel.logging import get_logger
from token_kernel.web.errors import add_error_handlers
from token_kernel.web.middleware import TokenAuthMiddleware, TokenExtractor

logger = get_logger(__name__)


def create_app(
    *,
    title: str = "App",
    verify_options: Optional[VerifyOptions] = None,
    token_service: Any = None,
    auth_allow_anonymous: Iterable[str] = (),
    get_token: Optional[TokenExtractor] = None,
    on_error: Optional[Callable[[Request, Exception], Any]] = None,
) -> FastAPI:
    """
    Create an app with bearer-token auth and a public-path allowlist.

    - verify_options: verify every request with these options, or
    - token_service: any object with verify(token) -> ClaimSet (e.g. TokenProvider).
    - auth_allow_anonymous: paths that bypass auth.
    With neither verify_options nor token_service, no auth middleware is attached.
    """
    app = FastAPI(title=title)

    if verify_options is not None:
        verifier = lambda token: verify(token, verify_options)  # noqa: E731
    elif token_service is not None:
        verifier = token_service.verify
    else:
        verifier = None

    if verifier is not None:
        app.add_middleware(
            TokenAuthMiddleware,
            verifier=verifier,
            allowlist=set(auth_allow_anonymous or ()),
            get_token=get_token,
            on_error=on_error,
        )

    add_error_handlers(app)
    logger.debug("app_created", title=title, auth=verifier is not None)
    return app
