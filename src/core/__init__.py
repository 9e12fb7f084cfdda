"""Core package - Configuration, logging, exceptions.

This package provides foundational infrastructure used by all other layers.

Modules:
    - config: Environment and configuration management
    - logging: Structured JSON logging
    - exceptions: Custom exception hierarchy
"""

from src.core.exceptions import (
    ConfigurationError,
    DataFileError,
    TetherError,
    ValidationError,
)

__all__ = [
    "TetherError",
    "ConfigurationError",
    "ValidationError",
    "DataFileError",
]
