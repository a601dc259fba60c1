"""
Command results returned to the caller's transport.
"""

from dataclasses import dataclass
from enum import Enum


class ResultStatus(Enum):
    """How a transport should present a result (e.g. message colour)."""
    PLAIN = "plain"
    SUCCESS = "success"
    NOTICE = "notice"
    ERROR = "error"


@dataclass
class CommandResult:
    """Outcome of one command."""
    status: ResultStatus
    message: str

    @property
    def ok(self) -> bool:
        return self.status != ResultStatus.ERROR

    def render(self) -> str:
        if self.status == ResultStatus.ERROR:
            return f"Error: {self.message}"
        return self.message

    @classmethod
    def plain(cls, message: str) -> 'CommandResult':
        return cls(ResultStatus.PLAIN, message)

    @classmethod
    def success(cls, message: str) -> 'CommandResult':
        return cls(ResultStatus.SUCCESS, message)

    @classmethod
    def notice(cls, message: str) -> 'CommandResult':
        return cls(ResultStatus.NOTICE, message)

    @classmethod
    def error(cls, message: str) -> 'CommandResult':
        return cls(ResultStatus.ERROR, message)
