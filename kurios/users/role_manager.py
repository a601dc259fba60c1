"""
Role Manager Module

Self-service role subscription on top of an external identity system.

The identity system (the chat platform's member/role API) is only seen
through the RoleDirectory interface. InMemoryRoleDirectory backs the
local console and the tests.

Author: YSNRFD
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Hashable

from kurios.exceptions import RoleNotFoundError, SubscriptionError
from kurios.logger import get_logger
from .permissions import PermissionTable


class RoleDirectory(ABC):
    """Boundary to the system that owns role membership."""

    @abstractmethod
    def roles_of(self, member: Hashable) -> set[str]:
        """Role names currently held by ``member``."""

    @abstractmethod
    def add_role(self, member: Hashable, role: str) -> None:
        """Grant ``role`` to ``member``."""

    @abstractmethod
    def remove_role(self, member: Hashable, role: str) -> None:
        """Revoke ``role`` from ``member``."""


class InMemoryRoleDirectory(RoleDirectory):
    """Role membership kept in a dictionary."""

    def __init__(self):
        self._members: dict[Hashable, set[str]] = defaultdict(set)

    def roles_of(self, member: Hashable) -> set[str]:
        return set(self._members.get(member, ()))

    def add_role(self, member: Hashable, role: str) -> None:
        self._members[member].add(role)

    def remove_role(self, member: Hashable, role: str) -> None:
        self._members[member].discard(role)


class RoleManager:
    """
    Applies the subscription rules.

    A caller may subscribe only to a role ranked strictly below their
    own highest role, and may drop any role they hold.

    Example:
        >>> manager = RoleManager(directory)
        >>> manager.subscribe(table, 'alice', 'reader')
    """

    def __init__(self, directory: RoleDirectory):
        self._directory = directory
        self._logger = get_logger('roles')

    @property
    def directory(self) -> RoleDirectory:
        return self._directory

    def subscribe(self, table: PermissionTable, member: Hashable, role: str) -> None:
        """
        Give ``member`` a lower-ranked role.

        Raises:
            RoleNotFoundError: If the role is not declared
            SubscriptionError: If the role outranks the caller or is already held
        """
        new_rank = table.priority(role)
        if new_rank == -1:
            raise RoleNotFoundError(role)

        held = self._directory.roles_of(member)
        current = table.highest_role(held)
        current_rank = table.priority(current) if current else -1

        if current_rank == -1 or new_rank <= current_rank:
            raise SubscriptionError(
                "You do not have permission to subscribe to this role.",
                role=role
            )

        if role in held:
            raise SubscriptionError("You are already subscribed to this role.", role=role)

        self._directory.add_role(member, role)
        self._logger.info("Subscribed to role", context={'member': member, 'role': role})

    def unsubscribe(self, member: Hashable, role: str) -> None:
        """
        Remove a role held by ``member``.

        Raises:
            SubscriptionError: If the member does not hold the role
        """
        if role not in self._directory.roles_of(member):
            raise SubscriptionError("You are not subscribed to this role.", role=role)

        self._directory.remove_role(member, role)
        self._logger.info("Unsubscribed from role", context={'member': member, 'role': role})
