"""
Command Parser Module

Splits a chat or console line into a command and its arguments.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Optional, List


@dataclass
class ParsedCommand:
    """A parsed command line."""
    command: str
    args: List[str] = field(default_factory=list)


class CommandParser:
    """
    Parses command lines.

    Handles:
    - Command and arguments separated by whitespace
    - Single and double quoted arguments
    - Backslash escapes

    Example:
        >>> parser = CommandParser()
        >>> cmd = parser.parse('set motd "hello world"')
        >>> cmd.args
        ['motd', 'hello world']
    """

    def __init__(self, history_size: int = 1000):
        self._history: List[str] = []
        self._history_size = history_size

    def parse(self, line: str) -> Optional[ParsedCommand]:
        """
        Parse a command line.

        Args:
            line: Command line string

        Returns:
            ParsedCommand or None if empty

        Raises:
            ValueError: If a quote is left open
        """
        line = line.strip()

        if not line or line.startswith('#'):
            return None

        self._history.append(line)
        if len(self._history) > self._history_size:
            self._history = self._history[-self._history_size:]

        tokens = self._tokenize(line)

        if not tokens:
            return None

        return ParsedCommand(command=tokens[0], args=tokens[1:])

    def _tokenize(self, line: str) -> List[str]:
        """Convert a line into word tokens."""
        tokens = []
        current = ""
        in_token = False
        in_quote = None
        i = 0

        while i < len(line):
            char = line[i]

            # Handle quotes
            if char in ('"', "'") and in_quote is None:
                in_quote = char
                in_token = True
                i += 1
                continue

            if char == in_quote:
                in_quote = None
                i += 1
                continue

            # Handle escape
            if char == '\\' and i + 1 < len(line):
                current += line[i + 1]
                in_token = True
                i += 2
                continue

            # Inside quotes, just add character
            if in_quote:
                current += char
                i += 1
                continue

            # Handle whitespace
            if char.isspace():
                if in_token:
                    tokens.append(current)
                    current = ""
                    in_token = False
                i += 1
                continue

            # Regular character
            current += char
            in_token = True
            i += 1

        if in_quote:
            raise ValueError(f"unterminated {in_quote} quote")

        # Don't forget last token; "" is a valid quoted argument
        if in_token:
            tokens.append(current)

        return tokens

    def get_history(self) -> List[str]:
        """Get command history."""
        return self._history

    def clear_history(self) -> None:
        """Clear command history."""
        self._history.clear()
