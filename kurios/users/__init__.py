"""
KuriOS Users Module

Role-based command permissions and role subscription.
"""

from .permissions import PermissionTable, ALL_COMMANDS, EVERYONE_ROLE
from .role_manager import RoleDirectory, InMemoryRoleDirectory, RoleManager

__all__ = [
    'PermissionTable',
    'ALL_COMMANDS',
    'EVERYONE_ROLE',
    'RoleDirectory',
    'InMemoryRoleDirectory',
    'RoleManager',
]
