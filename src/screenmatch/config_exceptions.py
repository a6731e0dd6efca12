"""Configuration exceptions.

This module contains exceptions raised while resolving match
configurations and settings.
"""

from .base_exceptions import ScreenMatchException


class ConfigurationException(ScreenMatchException):
    """Base exception for configuration errors."""

    pass


class ValidationError(ConfigurationException, ValueError):
    """Raised when a match configuration or call argument is malformed."""

    def __init__(self, config_key: str, reason: str, **kwargs) -> None:
        """Initialize with config details."""
        super().__init__(
            f"Invalid configuration for '{config_key}': {reason}",
            error_code="INVALID_CONFIG",
            context={"config_key": config_key, "reason": reason, **kwargs},
        )
        self.config_key = config_key
