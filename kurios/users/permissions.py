"""
Permission Table Module

Maps role names to the commands they may run, and keeps the declared
role order as a priority list (first declared = highest authority).

Author: YSNRFD
Version: 1.0.0
"""

from typing import Iterable, Iterator, List, Optional, Tuple


# Token granting every command
ALL_COMMANDS = "*"

# Role implicitly held by every caller
EVERYONE_ROLE = "everyone"


class PermissionTable:
    """
    Role-based command permissions.

    Example:
        >>> table = PermissionTable()
        >>> table.declare('admin', ['*'])
        >>> table.declare('everyone', ['ls', 'cd', 'cat'])
        >>> table.has_permission({'admin'}, 'save')
        True
        >>> table.priority('everyone')
        1
    """

    def __init__(self):
        self._permissions: dict[str, set[str]] = {}
        self._priority: List[str] = []

    def declare(self, role: str, tokens: Iterable[str]) -> None:
        """
        Add a role with its permission tokens.

        Declaring a role again replaces its tokens but keeps its rank.
        """
        if role not in self._permissions:
            self._priority.append(role)
        self._permissions[role] = {str(token) for token in tokens}

    def tokens(self, role: str) -> set[str]:
        return set(self._permissions.get(role, ()))

    def has_role(self, role: str) -> bool:
        return role in self._permissions

    def grants(self, role: str, command: str) -> bool:
        tokens = self._permissions.get(role)
        if not tokens:
            return False
        return command in tokens or ALL_COMMANDS in tokens

    def has_permission(self, roles: Iterable[str], command: str) -> bool:
        """
        Check whether any of ``roles``, or the everyone role, grants ``command``.
        """
        if self.grants(EVERYONE_ROLE, command):
            return True
        return any(self.grants(role, command) for role in roles)

    @property
    def priority_list(self) -> List[str]:
        """Role names, highest authority first."""
        return list(self._priority)

    def priority(self, role: str) -> int:
        """Rank of a role (0 is highest), or -1 if it is not declared."""
        try:
            return self._priority.index(role)
        except ValueError:
            return -1

    def highest_role(self, roles: Iterable[str]) -> Optional[str]:
        """
        The caller's role with the highest authority.

        Falls back to the everyone role when the caller holds no
        declared role, and to None when that is not declared either.
        """
        ranked = [role for role in roles if self.priority(role) >= 0]
        if ranked:
            return min(ranked, key=self.priority)
        if self.has_role(EVERYONE_ROLE):
            return EVERYONE_ROLE
        return None

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        """Roles in priority order with their sorted tokens."""
        for role in self._priority:
            yield role, sorted(self._permissions[role])

    def __len__(self) -> int:
        return len(self._permissions)

    def __contains__(self, role: str) -> bool:
        return self.has_role(role)
