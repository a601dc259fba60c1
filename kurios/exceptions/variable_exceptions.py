"""
Variable Exceptions

Exceptions raised by the system variable store.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class VariableException(Exception):
    """
    Base exception for all variable store errors.

    Attributes:
        message: Human-readable error description
        name: Variable name associated with the error
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        name: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.name = name
        self.error_code = error_code or 3000
        self.context = context or {}
        if name:
            self.context["variable"] = name

    def __str__(self) -> str:
        return f"[Error {self.error_code}] {self.message}"


class VariableNotFoundError(VariableException):
    """The variable does not exist."""

    def __init__(self, name: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=f"The variable \"{name}\" does not exist.",
            name=name,
            error_code=3001,
            context=context
        )


class ImmutableVariableError(VariableException):
    """Attempted to overwrite an immutable variable."""

    def __init__(self, name: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=f"The variable \"{name}\" is immutable.",
            name=name,
            error_code=3002,
            context=context
        )


class VariableExistsError(VariableException):
    """Attempted to create a variable whose name is taken."""

    def __init__(self, name: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=f"The variable \"{name}\" already exists.",
            name=name,
            error_code=3003,
            context=context
        )


class ProtectedVariableError(VariableException):
    """
    Attempted to delete a protected variable.

    Immutable variables and the clock variable are protected.
    """

    def __init__(self, name: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=f"The variable \"{name}\" is protected and cannot be deleted.",
            name=name,
            error_code=3004,
            context=context
        )


class InvalidFormatError(VariableException):
    """
    A value does not match its expected format.

    Example:
        >>> raise InvalidFormatError("tomorrow", expected="YYYY-MM-DD HH:MM:SS")
    """

    def __init__(
        self,
        value: str,
        expected: Optional[str] = None,
        name: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["value"] = value
        message = f"Invalid format \"{value}\"."
        if expected:
            ctx["expected"] = expected
            message = f"Invalid format \"{value}\". Expected {expected}."
        super().__init__(
            message=message,
            name=name,
            error_code=3005,
            context=ctx
        )
        self.value = value
        self.expected = expected
