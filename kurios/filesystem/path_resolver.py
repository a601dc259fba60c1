"""
Path Resolver Module

Turns raw, possibly relative, path strings into absolute paths.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Callable, List

from kurios.exceptions import InvalidPathError


PARENT_MARKER = '..'
HOME_MARKER = '~'
CURRENT_MARKER = '.'
SEPARATOR = '/'


@dataclass
class ParsedPath:
    """A parsed absolute path with its components."""
    components: List[str]

    def __str__(self) -> str:
        return SEPARATOR + SEPARATOR.join(self.components)


class PathResolver:
    """
    Resolves raw paths against a current folder.

    Rules, checked in order against the raw string:
    - a ``..`` anywhere triggers a segment walk where each ``..`` pops
      one level by looking up the accumulated directory's parent path
    - a leading ``~`` makes the remainder absolute
    - a leading ``.`` appends the remainder to the current path
    - a leading ``/`` is already absolute
    - anything else is appended to the current path

    Empty segments are left in place; lookup ignores them.
    """

    @staticmethod
    def parse(path: str) -> ParsedPath:
        """
        Split an absolute path into non-empty components.

        Args:
            path: Path string to parse

        Returns:
            ParsedPath with components
        """
        components = [c for c in path.split(SEPARATOR) if c]
        return ParsedPath(components=components)

    @staticmethod
    def join(base: str, tail: str) -> str:
        """Append ``tail`` to ``base`` with exactly one separator between them."""
        if not tail:
            return base
        return base.rstrip(SEPARATOR) + SEPARATOR + tail.lstrip(SEPARATOR)

    @staticmethod
    def resolve(
        path: str,
        cwd: str,
        parent_of: Callable[[str], str]
    ) -> str:
        """
        Resolve a path relative to a current working directory.

        Args:
            path: Raw path as typed by the caller
            cwd: Absolute path of the caller's current folder
            parent_of: Looks up the directory at an absolute path and
                returns its parent path; lookup errors propagate

        Returns:
            Absolute path

        Raises:
            InvalidPathError: If the path is empty or climbs above root
        """
        if not path or not path.strip():
            raise InvalidPathError(path, reason="empty path")

        if PARENT_MARKER in path:
            return PathResolver._walk(path, cwd, parent_of)

        if path.startswith(HOME_MARKER):
            return PathResolver.join(SEPARATOR, path[1:])

        if path.startswith(CURRENT_MARKER):
            return PathResolver.join(cwd, path[1:])

        if path.startswith(SEPARATOR):
            return path

        return PathResolver.join(cwd, path)

    @staticmethod
    def _walk(
        path: str,
        cwd: str,
        parent_of: Callable[[str], str]
    ) -> str:
        """Resolve a path containing parent markers segment by segment."""
        if path.startswith(HOME_MARKER):
            accumulated = SEPARATOR
            path = path[1:]
        elif path.startswith(SEPARATOR):
            accumulated = SEPARATOR
        else:
            accumulated = cwd

        for segment in path.split(SEPARATOR):
            if not segment or segment == CURRENT_MARKER:
                continue

            if segment == PARENT_MARKER:
                if PathResolver.is_root(accumulated):
                    raise InvalidPathError(path, reason="cannot go above the root directory")
                accumulated = parent_of(accumulated)
                continue

            accumulated = PathResolver.join(accumulated, segment)

        return accumulated

    @staticmethod
    def is_root(path: str) -> bool:
        """Check whether a path names the root directory."""
        return not PathResolver.parse(path).components
