"""
KuriOS Exception Hierarchy

This module defines the exception hierarchy for the virtual filesystem engine.
Each area has its own base class carrying a message, a numeric error code and
a context dictionary.

Architecture:
    ConfigException
    ├── ConfigLoadError
    └── ConfigValidationError
    EnvironmentException
    ├── EnvironmentIOError
    ├── MalformedEnvironmentError
    └── UnknownElementKindError
    VariableException
    ├── VariableNotFoundError
    ├── ImmutableVariableError
    ├── VariableExistsError
    ├── ProtectedVariableError
    └── InvalidFormatError
    FileSystemException
    ├── NodeNotFoundError
    ├── NodeUnavailableError
    ├── NodeLockedError
    ├── AlreadyLockedError
    ├── NotLockedError
    ├── WrongKeyError
    └── InvalidPathError
    SecurityException
    ├── PermissionDeniedError
    ├── RoleNotFoundError
    └── SubscriptionError
"""

from .config_exceptions import (
    ConfigException,
    ConfigLoadError,
    ConfigValidationError,
)

from .environment_exceptions import (
    EnvironmentException,
    EnvironmentIOError,
    MalformedEnvironmentError,
    UnknownElementKindError,
)

from .variable_exceptions import (
    VariableException,
    VariableNotFoundError,
    ImmutableVariableError,
    VariableExistsError,
    ProtectedVariableError,
    InvalidFormatError,
)

from .fs_exceptions import (
    FileSystemException,
    NodeNotFoundError,
    NodeUnavailableError,
    NodeLockedError,
    AlreadyLockedError,
    NotLockedError,
    WrongKeyError,
    InvalidPathError,
)

from .security_exceptions import (
    SecurityException,
    PermissionDeniedError,
    RoleNotFoundError,
    SubscriptionError,
)

# Every error a command can report back to its caller
COMMAND_ERRORS = (
    EnvironmentException,
    VariableException,
    FileSystemException,
    SecurityException,
)

__all__ = [
    # Config exceptions
    "ConfigException",
    "ConfigLoadError",
    "ConfigValidationError",
    # Environment exceptions
    "EnvironmentException",
    "EnvironmentIOError",
    "MalformedEnvironmentError",
    "UnknownElementKindError",
    # Variable exceptions
    "VariableException",
    "VariableNotFoundError",
    "ImmutableVariableError",
    "VariableExistsError",
    "ProtectedVariableError",
    "InvalidFormatError",
    # Filesystem exceptions
    "FileSystemException",
    "NodeNotFoundError",
    "NodeUnavailableError",
    "NodeLockedError",
    "AlreadyLockedError",
    "NotLockedError",
    "WrongKeyError",
    "InvalidPathError",
    # Security exceptions
    "SecurityException",
    "PermissionDeniedError",
    "RoleNotFoundError",
    "SubscriptionError",
    "COMMAND_ERRORS",
]
