"""Map data loading utilities for the pursuit game engine."""

from .loader import (
    SetupLoader,
    SetupLoadError,
    load_setup,
    load_default_setup,
    get_setup_stats,
)

__all__ = [
    "SetupLoader",
    "SetupLoadError",
    "load_setup",
    "load_default_setup",
    "get_setup_stats",
]
