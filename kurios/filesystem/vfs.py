"""
Virtual File System (VFS) Module

Implements lookup over the folder/file tree with:
- Path resolution relative to a caller's current folder
- Availability and lock checks at every traversed level
- Lock target lookup for the lock/unlock protocol

Author: YSNRFD
Version: 1.0.0
"""

from typing import Union

from .access import AccessGate
from .node import Folder, File, new_root
from .path_resolver import PathResolver
from kurios.exceptions import NodeNotFoundError
from kurios.logger import get_logger


class VirtualFileSystem:
    """
    Read access to one loaded tree.

    The root folder is always reachable. Every other folder on a path
    is checked by the access gate before descending, so a locked or
    unavailable ancestor hides everything beneath it.

    Example:
        >>> vfs = VirtualFileSystem(root)
        >>> readme = vfs.get_file('readme', cwd='/docs')
        >>> docs = vfs.get_directory('..', cwd='/docs/notes')
    """

    def __init__(self, root: Folder = None):
        self._root = root if root is not None else new_root()
        self._logger = get_logger('vfs')

    @property
    def root(self) -> Folder:
        return self._root

    def resolve(self, path: str, cwd: str = '/') -> str:
        """Resolve a raw path against ``cwd`` into an absolute path."""
        return PathResolver.resolve(path, cwd, self._parent_of)

    def _parent_of(self, path: str) -> str:
        """Parent path of the directory at ``path``, used by ``..`` segments."""
        return self.lookup(path, want_file=False).path

    def lookup(
        self,
        path: str,
        want_file: bool,
        check_target: bool = True
    ) -> Union[Folder, File]:
        """
        Walk an absolute path from the root.

        Args:
            path: Absolute path
            want_file: Whether the final segment must name a file
            check_target: Whether the final node itself is access checked;
                ancestors are always checked

        Returns:
            The folder or file at ``path``

        Raises:
            NodeNotFoundError: If any segment is missing
            NodeUnavailableError: If a node on the path is out of its window
            NodeLockedError: If a node on the path is locked
        """
        kind = "file" if want_file else "directory"
        components = PathResolver.parse(path).components

        if not components:
            if want_file:
                raise NodeNotFoundError(path, kind=kind)
            return self._root

        current = self._root
        for component in components[:-1]:
            folder = current.get_folder(component)
            if folder is None:
                raise NodeNotFoundError(path, kind=kind)
            AccessGate.check(folder)
            current = folder

        name = components[-1]
        target = current.get_file(name) if want_file else current.get_folder(name)
        if target is None:
            raise NodeNotFoundError(path, kind=kind)

        if check_target:
            AccessGate.check(target)

        self._logger.debug(f"Resolved {kind}", context={'path': target.absolute_path})
        return target

    def get_file(self, path: str, cwd: str = '/') -> File:
        """Resolve and look up a readable file."""
        return self.lookup(self.resolve(path, cwd), want_file=True)

    def get_directory(self, path: str, cwd: str = '/') -> Folder:
        """Resolve and look up an enterable folder."""
        if path == '/':
            return self._root
        return self.lookup(self.resolve(path, cwd), want_file=False)

    def get_lock_target(self, path: str, cwd: str = '/') -> Union[Folder, File]:
        """
        Find the node a lock or unlock command applies to.

        Files are tried before folders. The target's own lock and window
        are not checked, otherwise a locked node could never be unlocked.
        """
        absolute = self.resolve(path, cwd)
        try:
            return self.lookup(absolute, want_file=True, check_target=False)
        except NodeNotFoundError:
            pass
        return self.lookup(absolute, want_file=False, check_target=False)
