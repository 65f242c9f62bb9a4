# token_kernel/web/errors.py
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from token_kernel.core.errors import TokenError
from token_kernel.logging import get_logger

logger = get_logger(__name__)


async def token_error_handler(request: Request, exc: TokenError) -> JSONResponse:
    # key material never reaches TokenError messages, details are claim names only
    logger.info("token_error", path=request.url.path, code=exc.code)
    return JSONResponse(exc.to_dict(), status_code=401, headers={"WWW-Authenticate": "Bearer"})


def add_error_handlers(app: FastAPI) -> None:
    """Map TokenError raised inside routes (e.g. TokenProvider.decode) to 401."""
    app.add_exception_handler(TokenError, token_error_handler)
    logger.debug("error_handlers_registered", app=app.title)
