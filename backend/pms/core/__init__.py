# Core package initialization: configuration, logging, errors, validation
# and HTTP helpers shared across the application.

from . import config, exceptions, validation

__all__ = [
    "config",
    "exceptions",
    "validation",
]
