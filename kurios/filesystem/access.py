"""
Access Gate Module

Evaluates time availability and lock status of a node during traversal.

Author: YSNRFD
Version: 1.0.0
"""

from datetime import datetime
from typing import Optional

from kurios.core import clock
from kurios.exceptions import NodeUnavailableError, NodeLockedError
from .node import Node


class AccessGate:
    """
    Per-node access checks applied at every level of a lookup.

    Wildcard window endpoints are resolved against the current time on
    each call, so ``("*", "*")`` is always open. A malformed literal
    endpoint makes the node unavailable.

    Example:
        >>> AccessGate.is_available("*", "*")
        True
        >>> AccessGate.is_available("not a time", "*")
        False
    """

    @staticmethod
    def is_available(
        start: str,
        end: str,
        moment: Optional[datetime] = None
    ) -> bool:
        """
        Check whether ``moment`` (default: now) lies inside a window.

        Both ends are inclusive.
        """
        current = moment or clock.now()

        if start == clock.WILDCARD:
            start_time = current - clock.WILDCARD_TOLERANCE
        else:
            start_time = clock.parse_timestamp(start)

        if end == clock.WILDCARD:
            end_time = current + clock.WILDCARD_TOLERANCE
        else:
            end_time = clock.parse_timestamp(end)

        if start_time is None or end_time is None:
            return False

        return start_time <= current <= end_time

    @classmethod
    def node_available(cls, node: Node, moment: Optional[datetime] = None) -> bool:
        start, end = node.available_between
        return cls.is_available(start, end, moment)

    @classmethod
    def check(cls, node: Node, moment: Optional[datetime] = None) -> None:
        """
        Check a node's window, then its lock.

        Raises:
            NodeUnavailableError: If outside the availability window
            NodeLockedError: If the node is locked
        """
        if not cls.node_available(node, moment):
            raise NodeUnavailableError(node.absolute_path, kind=node.kind)
        if node.locked:
            raise NodeLockedError(node.absolute_path, kind=node.kind)

    @classmethod
    def is_accessible(cls, node: Node, moment: Optional[datetime] = None) -> bool:
        return cls.node_available(node, moment) and not node.locked
