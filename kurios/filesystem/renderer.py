"""
Tree Renderer Module

Draws a bounded-depth listing of a folder for the ``ls`` command.

Author: YSNRFD
Version: 1.0.0
"""

from typing import List

from .access import AccessGate
from .node import Folder, Node


BRANCH = '├── '
LAST_BRANCH = '└── '
PIPE = '│   '
SPACE = '    '
MORE_MARKER = '...'


class TreeRenderer:
    """
    Renders a folder as a box-drawing tree.

    Example output for ``render(docs, 1)``::

        /docs
        ├── notes/
        │   └── ...
        ├── vault/ [locked]
        └── readme
    """

    @staticmethod
    def annotate(node: Node) -> str:
        """Label for one child line, with access annotations."""
        label = node.name + ('/' if node.is_directory else '')
        if not AccessGate.node_available(node):
            label += ' [unavailable]'
        if node.locked:
            label += ' [locked]'
        return label

    @classmethod
    def render(cls, folder: Folder, max_depth: int) -> str:
        """
        Render ``folder`` and up to ``max_depth`` levels of children.

        Locked or unavailable children are listed but never expanded.
        """
        lines = [folder.absolute_path]
        cls._render_children(folder, '', max(max_depth, 1), lines)
        return '\n'.join(lines)

    @classmethod
    def _render_children(
        cls,
        folder: Folder,
        prefix: str,
        remaining: int,
        lines: List[str]
    ) -> None:
        children = folder.sorted_children()

        for index, child in enumerate(children):
            last = index == len(children) - 1
            lines.append(prefix + (LAST_BRANCH if last else BRANCH) + cls.annotate(child))

            if not isinstance(child, Folder) or not child.has_children():
                continue
            if not AccessGate.is_accessible(child):
                continue

            child_prefix = prefix + (SPACE if last else PIPE)
            if remaining > 1:
                cls._render_children(child, child_prefix, remaining - 1, lines)
            else:
                lines.append(child_prefix + LAST_BRANCH + MORE_MARKER)
