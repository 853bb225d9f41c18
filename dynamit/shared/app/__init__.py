"""Application runtime configuration and service wiring."""

from .runtime import MockConfig, RuntimeConfig

__all__ = [
    "MockConfig",
    "RuntimeConfig",
]
