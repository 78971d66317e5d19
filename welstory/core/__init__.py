"""
Core module initialization.
Exports configuration, logging utilities and the error taxonomy.
"""

from welstory.core.config import (
    get_settings,
    setup_logging,
    Settings,
    TransportMode,
)
from welstory.core.exceptions import WelstoryError

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "TransportMode",
    "WelstoryError",
]
