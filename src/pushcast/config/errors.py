"""Errors raised while loading pushcast settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a setting is present but unusable (bad number, negative retries, ...)."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required settings such as the gateway API key are absent or blank."""

    def __init__(self, names: list[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(f"Missing configuration for: {', '.join(self.names)}")
