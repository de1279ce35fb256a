"""Core configuration and factory components."""

from snippetbox.core.config import Settings, get_settings
from snippetbox.core.factory import ComponentFactory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
]
