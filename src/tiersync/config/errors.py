"""Errors raised while resolving configuration."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when the environment does not describe a usable setup.

    Raised once while configuration is resolved, never per provider call.
    """


class MissingConfigurationError(ConfigurationError):
    """Raised when a required setting is absent or blank."""

    def __init__(self, *names: str) -> None:
        super().__init__(f"Missing configuration for: {', '.join(names)}")
        self.names = names
