"""
Environment Exceptions

Exceptions raised while loading or saving an environment file.
A load that raises any of these leaves the live environment untouched.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class EnvironmentException(Exception):
    """
    Base exception for environment codec errors.

    Attributes:
        message: Human-readable error description
        source: File path or element path associated with the error
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.error_code = error_code or 2000
        self.context = context or {}
        if source:
            self.context["source"] = source

    def __str__(self) -> str:
        return f"[Error {self.error_code}] {self.message}"


class EnvironmentIOError(EnvironmentException):
    """
    The environment file could not be read or written.

    Example:
        >>> raise EnvironmentIOError("missing.json", operation="read")
    """

    def __init__(
        self,
        source: str,
        operation: str = "read",
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["operation"] = operation
        if reason:
            ctx["reason"] = reason
        verb = "save" if operation == "write" else "open"
        super().__init__(
            message=f"Could not {verb} the environment file \"{source}\".",
            source=source,
            error_code=2001,
            context=ctx
        )
        self.operation = operation
        self.reason = reason


class MalformedEnvironmentError(EnvironmentException):
    """
    The environment document is structurally invalid.

    Raised for unparsable JSON, a missing ``struct`` section, duplicate
    sibling names or a non-object where an object is required.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            source=source,
            error_code=2002,
            context=context
        )


class UnknownElementKindError(EnvironmentException):
    """
    An element of the ``struct`` tree declares an unknown type.

    Example:
        >>> raise UnknownElementKindError("/docs/link", kind="symlink")
    """

    def __init__(
        self,
        path: str,
        kind: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["kind"] = kind
        super().__init__(
            message=f"Unknown element type for {path}",
            source=path,
            error_code=2003,
            context=ctx
        )
        self.kind = kind
