# token_kernel/security/deps.py
from __future__ import annotations

from fastapi import HTTPException, Request, status

from token_kernel.core.claims import ClaimSet


def get_claims(request: Request) -> ClaimSet:
    """
    Access the verified ClaimSet injected by TokenAuthMiddleware.
    Raises 401 if not found (route is allowlisted or middleware is missing).
    """
    claims: ClaimSet | None = getattr(request.state, "claims", None)
    if claims is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return claims


def require_claim(name: str, *allowed):
    """
    Claim-based access helper for routes.

    Usage:
        from token_kernel.security.deps import require_claim
        @app.get("/admin", dependencies=[Depends(require_claim("role", "admin"))])

    With no `allowed` values, only presence of the claim is required.
    List-valued claims pass when any element is allowed.
    """
    allowed_set = set(allowed)

    def _check_claim(request: Request) -> ClaimSet:
        claims = get_claims(request)
        if name not in claims:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        if allowed_set:
            value = claims[name]
            values = set(value) if isinstance(value, (list, tuple)) else {value}
            if not values.intersection(allowed_set):
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return claims

    return _check_claim


def require_audience(*audiences: str):
    """Per-route audience gate on top of the middleware's own check."""
    wanted = set(audiences)

    def _check_audience(request: Request) -> ClaimSet:
        claims = get_claims(request)
        if not wanted.intersection(claims.audiences):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return claims

    return _check_audience
