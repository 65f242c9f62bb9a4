from .api import create_app
from .errors import add_error_handlers
from .middleware import TokenAuthMiddleware, bearer_token

__all__ = [
    "TokenAuthMiddleware",
    "add_error_handlers",
    "bearer_token",
    "create_app",
]
