"""
KuriOS Filesystem Module

The simulated folder tree:
- Folder and file nodes with availability windows and locks
- Path resolution (.., ~, ., /)
- Access checks on every folder along a path
- Tree rendering
"""

from .node import Node, Folder, File, NodeType, ALWAYS_OPEN, new_root
from .path_resolver import PathResolver, ParsedPath
from .access import AccessGate
from .vfs import VirtualFileSystem
from .renderer import TreeRenderer

__all__ = [
    # Nodes
    'Node',
    'Folder',
    'File',
    'NodeType',
    'ALWAYS_OPEN',
    'new_root',
    # Paths
    'PathResolver',
    'ParsedPath',
    # Access
    'AccessGate',
    'VirtualFileSystem',
    # Rendering
    'TreeRenderer',
]
