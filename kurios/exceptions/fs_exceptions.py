"""
Filesystem Exceptions

Exceptions related to the virtual tree: path resolution, node lookup,
time-window gating and the lock protocol.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all filesystem-related errors.

    This is the parent class for all exceptions that occur while
    resolving, traversing or locking nodes of the virtual tree.

    Attributes:
        message: Human-readable error description
        path: Node path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path:
            base = f"{base} (path={self.path})"
        return base


class NodeNotFoundError(FileSystemException):
    """
    The specified file or directory does not exist.

    Example:
        >>> raise NodeNotFoundError("/docs/missing", kind="file")
    """

    def __init__(
        self,
        path: str,
        kind: str = "file",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        noun = "directory" if kind == "directory" else "file"
        super().__init__(
            message=f"Could not find the {noun} {path}.",
            path=path,
            error_code=4001,
            context=context
        )
        self.kind = kind


class NodeUnavailableError(FileSystemException):
    """
    The node exists but is outside its availability window.

    Raised for the first node on the traversal path whose window
    does not contain the current time.
    """

    def __init__(
        self,
        path: str,
        kind: str = "file",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        noun = "directory" if kind == "directory" else "file"
        super().__init__(
            message=f"The {noun} \"{path}\" is unavailable at the moment.",
            path=path,
            error_code=4002,
            context=context
        )
        self.kind = kind


class NodeLockedError(FileSystemException):
    """
    The node, or one of its ancestors, is locked.

    Example:
        >>> raise NodeLockedError("/docs", kind="directory")
    """

    def __init__(
        self,
        path: str,
        kind: str = "file",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        noun = "directory" if kind == "directory" else "file"
        super().__init__(
            message=f"The {noun} \"{path}\" is locked.",
            path=path,
            error_code=4003,
            context=context
        )
        self.kind = kind


class AlreadyLockedError(FileSystemException):
    """Attempted to lock a node that is already locked."""

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"\"{path}\" is already locked.",
            path=path,
            error_code=4004,
            context=context
        )


class NotLockedError(FileSystemException):
    """Attempted to unlock a node that is not locked."""

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"\"{path}\" is not locked.",
            path=path,
            error_code=4005,
            context=context
        )


class WrongKeyError(FileSystemException):
    """
    The key presented to unlock a node does not match.

    The stored key is never included in the error context.
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Unable to unlock \"{path}\". The key might be incorrect.",
            path=path,
            error_code=4006,
            context=context
        )


class InvalidPathError(FileSystemException):
    """
    Error resolving a raw path string.

    Common causes include:
    - Empty path
    - Parent traversal above the root directory

    Example:
        >>> raise InvalidPathError("..", reason="cannot go above root")
    """

    def __init__(
        self,
        path: str,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        message = f"Invalid path \"{path}\""
        if reason:
            message = f"{message}: {reason}."
        else:
            message = f"{message}."
        super().__init__(
            message=message,
            path=path,
            error_code=4007,
            context=ctx
        )
        self.reason = reason
