"""
KuriOS Shell Module

Provides the command surface:
- Command parsing
- Built-in commands
- Permission checks for chat members
"""

from .parser import CommandParser, ParsedCommand
from .result import CommandResult, ResultStatus
from .builtins import BuiltinCommands, CommandContext
from .shell import Shell, create_shell

__all__ = [
    'CommandParser',
    'ParsedCommand',
    'CommandResult',
    'ResultStatus',
    'BuiltinCommands',
    'CommandContext',
    'Shell',
    'create_shell',
]
