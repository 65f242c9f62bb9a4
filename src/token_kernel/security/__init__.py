from .deps import get_claims, require_audience, require_claim
from .provider import TokenProvider, get_provider

__all__ = ["TokenProvider", "get_claims", "get_provider", "require_audience", "require_claim"]
