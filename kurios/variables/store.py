"""
Variable Store Module

Named system variables with an immutability flag, plus the derived
``time`` variable that stores a clock offset instead of display text.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Iterator, Optional

from kurios.core import clock
from kurios.core.config_loader import VERSION
from kurios.exceptions import (
    VariableNotFoundError,
    ImmutableVariableError,
    VariableExistsError,
    ProtectedVariableError,
    InvalidFormatError,
)
from kurios.logger import get_logger


VERSION_VARIABLE = "version"
TIME_VARIABLE = "time"

# Value accepted by the clock variable to resynchronise with the wall clock
NOW_TOKEN = "now"


@dataclass
class Variable:
    """A plain text variable."""

    name: str
    immutable: bool = False
    value: str = ""

    @property
    def protected(self) -> bool:
        """Protected variables can never be deleted."""
        return self.immutable

    def read(self) -> str:
        return self.value

    def write(self, value: str) -> None:
        if self.immutable:
            raise ImmutableVariableError(self.name)
        self.value = value


@dataclass
class ClockVariable(Variable):
    """
    A variable displaying a shifted wall clock.

    ``value`` holds the signed offset in whole seconds between the real
    time and the displayed time. Reading applies the offset; writing a
    timestamp recomputes it, and writing ``now`` resets it to zero.
    """

    name: str = TIME_VARIABLE
    value: str = "0"

    @property
    def protected(self) -> bool:
        return True

    @property
    def offset(self) -> int:
        try:
            return int(self.value)
        except ValueError:
            return 0

    def read(self) -> str:
        return clock.format_timestamp(clock.now() - timedelta(seconds=self.offset))

    def write(self, value: str) -> None:
        if value == NOW_TOKEN:
            self.value = "0"
            return

        moment = clock.parse_timestamp(value)
        if moment is None:
            raise InvalidFormatError(value, expected=clock.TIME_FORMAT_HINT, name=self.name)

        self.value = str(int((clock.now() - moment).total_seconds()))

    def restore(self, raw_offset: str) -> None:
        """
        Restore a previously saved offset.

        Raises:
            InvalidFormatError: If ``raw_offset`` is not an integer
        """
        try:
            self.value = str(int(raw_offset))
        except (TypeError, ValueError):
            raise InvalidFormatError(str(raw_offset), expected="an integer offset", name=self.name)


class VariableStore:
    """
    The system variable table.

    Always contains ``version`` (immutable) and ``time`` (clock).

    Example:
        >>> store = VariableStore()
        >>> store.create('greeting', 'hello')
        >>> store.get('greeting')
        'hello'
        >>> store.set('time', '2024-01-01 00:00:00')
    """

    def __init__(self, version: Optional[str] = None):
        self._version = version or VERSION
        self._variables: dict[str, Variable] = {}
        self._logger = get_logger('variables')
        self.reset()

    def reset(self) -> None:
        """Drop every variable and re-seed the built-in ones."""
        self._variables = {
            VERSION_VARIABLE: Variable(VERSION_VARIABLE, immutable=True, value=self._version),
            TIME_VARIABLE: ClockVariable(),
        }

    def exists(self, name: str) -> bool:
        return name in self._variables

    def _lookup(self, name: str) -> Variable:
        variable = self._variables.get(name)
        if variable is None:
            raise VariableNotFoundError(name)
        return variable

    def get(self, name: str) -> str:
        """
        Read a variable's display value.

        Raises:
            VariableNotFoundError: If the variable does not exist
        """
        return self._lookup(name).read()

    def set(self, name: str, value: str) -> None:
        """
        Overwrite an existing variable.

        Raises:
            VariableNotFoundError: If the variable does not exist
            ImmutableVariableError: If the variable is immutable
            InvalidFormatError: If the clock is given a malformed timestamp
        """
        self._lookup(name).write(value)
        self._logger.debug("Variable updated", context={'name': name})

    def create(self, name: str, value: str) -> None:
        """
        Create a new mutable variable.

        Raises:
            VariableExistsError: If the name is taken
        """
        if name in self._variables:
            raise VariableExistsError(name)
        self._variables[name] = Variable(name, immutable=False, value=value)
        self._logger.debug("Variable created", context={'name': name})

    def delete(self, name: str) -> None:
        """
        Remove a variable.

        Raises:
            VariableNotFoundError: If the variable does not exist
            ProtectedVariableError: If the variable is immutable or the clock
        """
        if self._lookup(name).protected:
            raise ProtectedVariableError(name)
        del self._variables[name]
        self._logger.debug("Variable deleted", context={'name': name})

    @property
    def clock(self) -> ClockVariable:
        return self._variables[TIME_VARIABLE]

    def items(self) -> Iterator[Variable]:
        """All variables in name order."""
        for name in sorted(self._variables):
            yield self._variables[name]

    def mutable_items(self) -> Iterator[Variable]:
        """Variables that are persisted on save."""
        return (variable for variable in self.items() if not variable.immutable)

    def __len__(self) -> int:
        return len(self._variables)

    def __contains__(self, name: str) -> bool:
        return self.exists(name)
