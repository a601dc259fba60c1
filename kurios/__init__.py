"""
KuriOS - A virtual filesystem driven by chat commands

This package provides a simulated folder tree with time windows and
key locks, system variables with a shiftable clock, and role-based
command permissions, all loaded from and saved to a JSON environment
file.
"""

__version__ = "0.0.1"
__author__ = "YSNRFD"

# Import main components for convenience
from .environment.environment import Environment
from .environment.codec import EnvironmentCodec, LoadedEnvironment
from .shell.shell import Shell, create_shell

__all__ = [
    'Environment',
    'EnvironmentCodec',
    'LoadedEnvironment',
    'Shell',
    'create_shell',
]
