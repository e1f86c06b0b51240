"""Core configuration and factory components."""

from formbinder.core.config import Settings, get_settings
from formbinder.core.factory import ComponentFactory, get_factory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
    "get_factory",
]
