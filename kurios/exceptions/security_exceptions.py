"""
Security Exceptions

Exceptions related to command permissions and role subscription.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class SecurityException(Exception):
    """
    Base exception for all security-related errors.

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
        self.error_code = error_code or 5000
        self.context = context or {}

    def __str__(self) -> str:
        return f"[Error {self.error_code}] {self.message}"


class PermissionDeniedError(SecurityException):
    """
    The caller's roles do not grant the requested command.

    Example:
        >>> raise PermissionDeniedError("save")
    """

    def __init__(
        self,
        command: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["command"] = command
        super().__init__(
            message="You do not have permission to use this command",
            error_code=5001,
            context=ctx
        )
        self.command = command


class RoleNotFoundError(SecurityException):
    """The role is not declared in the permission table."""

    def __init__(
        self,
        role: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["role"] = role
        super().__init__(
            message=f"Role \"{role}\" not found.",
            error_code=5002,
            context=ctx
        )
        self.role = role


class SubscriptionError(SecurityException):
    """
    A self-service role change was refused.

    Raised when subscribing to a role of equal or higher authority,
    subscribing twice, or unsubscribing from a role not held.
    """

    def __init__(
        self,
        message: str,
        role: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if role:
            ctx["role"] = role
        super().__init__(
            message=message,
            error_code=5003,
            context=ctx
        )
        self.role = role
