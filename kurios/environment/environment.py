"""
Environment Module

The single explicitly owned value holding the whole simulated world:
the folder tree, the variable store, the permission table, and the
current folder of every caller context (chat channel).

Author: YSNRFD
Version: 1.0.0
"""

from pathlib import Path
from typing import Optional, Union

from kurios.core.config_loader import get_config
from kurios.exceptions import EnvironmentIOError, InvalidPathError
from kurios.filesystem.node import Folder, File, new_root
from kurios.filesystem.vfs import VirtualFileSystem
from kurios.logger import get_logger
from kurios.users.permissions import PermissionTable
from kurios.variables.store import VariableStore
from .codec import EnvironmentCodec, LoadedEnvironment


class Environment:
    """
    Live environment state.

    A load swaps the tree and both stores wholesale and points every
    caller back at the new root. A failed load changes nothing.

    Example:
        >>> env = Environment()
        >>> env.load_file('directory.json')
        >>> env.change_directory('default', 'docs')
        >>> env.read_file('default', 'readme')
        'hello'
    """

    def __init__(self, codec: Optional[EnvironmentCodec] = None):
        config = get_config()
        self._codec = codec or EnvironmentCodec(
            default_lock_key=config.environment.default_lock_key,
            version=config.kernel.version,
        )
        self._logger = get_logger('environment')
        self._vfs = VirtualFileSystem(new_root())
        self._variables = VariableStore(config.kernel.version)
        self._permissions = PermissionTable()
        self._current: dict[str, Folder] = {}

    @property
    def root(self) -> Folder:
        return self._vfs.root

    @property
    def vfs(self) -> VirtualFileSystem:
        return self._vfs

    @property
    def variables(self) -> VariableStore:
        return self._variables

    @property
    def permissions(self) -> PermissionTable:
        return self._permissions

    # Current folders

    def current_folder(self, channel: str) -> Folder:
        """The caller's current folder, starting at the root."""
        return self._current.setdefault(channel, self.root)

    def current_path(self, channel: str) -> str:
        return self.current_folder(channel).absolute_path

    def change_directory(self, channel: str, path: str) -> Folder:
        """Move the caller to the folder at ``path``."""
        folder = self._vfs.get_directory(path, self.current_path(channel))
        self._current[channel] = folder
        self._logger.debug("Changed directory", channel=channel, context={'path': folder.absolute_path})
        return folder

    def redirect_to_root(self, channel: Optional[str] = None) -> None:
        """Send one caller, or every caller, back to the root folder."""
        if channel is None:
            for name in self._current:
                self._current[name] = self.root
        else:
            self._current[channel] = self.root

    # Tree access

    def get_file(self, channel: str, path: str) -> File:
        return self._vfs.get_file(path, self.current_path(channel))

    def get_directory(self, channel: str, path: str) -> Folder:
        return self._vfs.get_directory(path, self.current_path(channel))

    def read_file(self, channel: str, path: str, cache_dir: Optional[str] = None) -> str:
        """
        Return a file's content.

        Cached files are read from disk relative to ``cache_dir``.

        Raises:
            EnvironmentIOError: If the cached content cannot be read
        """
        file = self.get_file(channel, path)
        if not file.is_cached:
            return file.data

        base = Path(cache_dir if cache_dir is not None else get_config().environment.cache_dir)
        cache_path = base / file.cache
        try:
            return cache_path.read_text(encoding='utf-8')
        except OSError as e:
            raise EnvironmentIOError(file.cache, operation="read", reason=str(e))

    def lock(self, channel: str, path: str, key: str) -> Union[Folder, File]:
        """Lock the node at ``path``; the caller is sent back to the root."""
        node = self._vfs.get_lock_target(path, self.current_path(channel))
        if isinstance(node, Folder) and node.is_root:
            raise InvalidPathError(path, reason="the root directory cannot be locked")
        node.lock(key)
        self.redirect_to_root(channel)
        return node

    def unlock(self, channel: str, path: str, key: str) -> Union[Folder, File]:
        node = self._vfs.get_lock_target(path, self.current_path(channel))
        node.unlock(key)
        return node

    # Persistence

    def install(self, loaded: LoadedEnvironment) -> None:
        """Replace the live state with a loaded environment."""
        self._vfs = VirtualFileSystem(loaded.root)
        self._variables = loaded.variables
        self._permissions = loaded.permissions
        self.redirect_to_root()

    def load_text(self, source: str, origin: Optional[str] = None) -> None:
        self.install(self._codec.load(source, origin))

    def dump_text(self) -> str:
        return self._codec.save(self.root, self._variables, self._permissions)

    def load_file(self, path: str) -> None:
        """
        Load an environment file.

        Raises:
            EnvironmentIOError: If the file cannot be read
            MalformedEnvironmentError: If the document is invalid
            UnknownElementKindError: If an element has an unknown type
        """
        try:
            source = Path(path).read_text(encoding='utf-8')
        except OSError as e:
            raise EnvironmentIOError(path, operation="read", reason=str(e))

        self.load_text(source, origin=path)
        self._logger.info(
            "Loaded environment",
            context={'path': path, 'variables': len(self._variables), 'roles': len(self._permissions)}
        )

    def save_file(self, path: str) -> None:
        """
        Write the environment to ``path``.

        Raises:
            EnvironmentIOError: If the file cannot be written
        """
        text = self.dump_text()
        try:
            Path(path).write_text(text, encoding='utf-8')
        except OSError as e:
            raise EnvironmentIOError(path, operation="write", reason=str(e))
        self._logger.info("Saved environment", context={'path': path})
