from .settings import TokenSettings, get_settings

__all__ = ["TokenSettings", "get_settings"]
