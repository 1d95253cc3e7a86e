"""
Core module - Configuration and presets.
"""

from .config import (
    PRESETS,
    CodeConfig,
    ConfigValidationError,
    FECConfig,
    LoggingConfig,
    get_preset,
    list_presets,
)

__all__ = [
    "PRESETS",
    "CodeConfig",
    "ConfigValidationError",
    "FECConfig",
    "LoggingConfig",
    "get_preset",
    "list_presets",
]
