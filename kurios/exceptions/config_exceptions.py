"""
Configuration Exceptions

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ConfigException(Exception):
    """
    Base exception for configuration errors.

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 1000
        self.context = context or {}

    def __str__(self) -> str:
        return f"[Error {self.error_code}] {self.message}"


class ConfigLoadError(ConfigException):
    """
    The configuration file could not be loaded.

    Example:
        >>> raise ConfigLoadError("Configuration file not found", path="config.json")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            error_code=1001,
            context=ctx
        )
        self.path = path


class ConfigValidationError(ConfigException):
    """Raised when a dot-notation key does not name a configuration field."""

    def __init__(
        self,
        key: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["key"] = key
        super().__init__(
            message=f"Invalid configuration key: {key}",
            error_code=1002,
            context=ctx
        )
        self.key = key
