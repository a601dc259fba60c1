"""
Node Module

Implements the two node kinds of the virtual tree, folders and files,
together with their per-node access attributes and the lock protocol.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Tuple, Union

from kurios.core.clock import WILDCARD
from kurios.exceptions import (
    AlreadyLockedError,
    NotLockedError,
    WrongKeyError,
    InvalidFormatError,
)
from kurios.logger import Logger, get_logger


class NodeType(Enum):
    """Kinds of nodes, as written in the environment file."""
    FOLDER = "folder"
    FILE = "file"


ALWAYS_OPEN: Tuple[str, str] = (WILDCARD, WILDCARD)


@dataclass
class Node:
    """
    Common attributes of folders and files.

    ``path`` is the absolute path of the parent folder with a trailing
    slash, so ``path + name`` is the node's own absolute path.

    The availability window is a ``(start, end)`` pair of literal
    timestamps or wildcards; it is evaluated by the access gate at
    traversal time, never here.
    """

    name: str
    path: str = "/"
    available_between: Tuple[str, str] = ALWAYS_OPEN
    locked: bool = False
    key: str = field(default="", repr=False)

    node_type = NodeType.FILE

    @property
    def absolute_path(self) -> str:
        """The node's own absolute path ("/" for the root folder)."""
        if not self.name:
            return self.path
        return self.path + self.name

    @property
    def is_directory(self) -> bool:
        return self.node_type == NodeType.FOLDER

    @property
    def kind(self) -> str:
        return "directory" if self.is_directory else "file"

    @property
    def always_open(self) -> bool:
        return tuple(self.available_between) == ALWAYS_OPEN

    def lock(self, key: str) -> None:
        """
        Lock the node with a key.

        No previous key is required. Descendants are not touched;
        the lock takes effect on them at traversal time.

        Raises:
            AlreadyLockedError: If the node is already locked
            InvalidFormatError: If the key is empty
        """
        if self.locked:
            raise AlreadyLockedError(self.absolute_path)
        if not key:
            raise InvalidFormatError(key, expected="a non-empty key")

        self.key = key
        self.locked = True
        _logger().info(f"Locked {self.kind}", context={'path': self.absolute_path})

    def unlock(self, key: str) -> None:
        """
        Unlock the node if ``key`` matches the stored key exactly.

        Raises:
            NotLockedError: If the node is not locked
            WrongKeyError: If the key does not match
        """
        if not self.locked:
            raise NotLockedError(self.absolute_path)

        if self.key != key:
            _logger().warning(
                f"Rejected unlock of {self.kind}",
                context={'path': self.absolute_path}
            )
            raise WrongKeyError(self.absolute_path)

        self.locked = False
        self.key = ""
        _logger().info(f"Unlocked {self.kind}", context={'path': self.absolute_path})


@dataclass
class File(Node):
    """
    A file holding either inline text or a reference to cached content.

    ``cache`` is a path to externally stored content. When both could
    exist, inline ``data`` wins.
    """

    data: str = field(default="", repr=False)
    cache: str = ""

    node_type = NodeType.FILE

    @property
    def is_cached(self) -> bool:
        return not self.data and bool(self.cache)


@dataclass
class Folder(Node):
    """
    A folder with independently keyed child folders and files.

    A name may appear at most once per level across both maps.
    """

    folders: dict[str, 'Folder'] = field(default_factory=dict, repr=False)
    files: dict[str, File] = field(default_factory=dict, repr=False)

    node_type = NodeType.FOLDER

    @property
    def is_root(self) -> bool:
        return self.name == "" and self.path == "/"

    @property
    def child_path(self) -> str:
        """Path prefix carried by this folder's children."""
        absolute = self.absolute_path
        return absolute if absolute.endswith("/") else absolute + "/"

    def has_children(self) -> bool:
        return bool(self.folders) or bool(self.files)

    def get_folder(self, name: str) -> Optional['Folder']:
        return self.folders.get(name)

    def get_file(self, name: str) -> Optional[File]:
        return self.files.get(name)

    def add(self, node: Union['Folder', File]) -> None:
        """
        Attach a child node, fixing up its path prefix.

        Raises:
            ValueError: If the name is already used at this level
        """
        if node.name in self.folders or node.name in self.files:
            raise ValueError(f"Duplicate name at {self.child_path}: {node.name}")

        _reparent(node, self.child_path)
        if isinstance(node, Folder):
            self.folders[node.name] = node
        else:
            self.files[node.name] = node

    def sorted_children(self) -> List[Union['Folder', File]]:
        """Child folders then child files, each in lexicographic order."""
        children: List[Union[Folder, File]] = []
        children.extend(self.folders[name] for name in sorted(self.folders))
        children.extend(self.files[name] for name in sorted(self.files))
        return children


def new_root() -> Folder:
    """Create an empty root folder."""
    return Folder(name="", path="/")


def _reparent(node: Node, prefix: str) -> None:
    node.path = prefix
    if isinstance(node, Folder):
        for child in node.sorted_children():
            _reparent(child, node.child_path)


def _logger() -> Logger:
    return get_logger('lock')
