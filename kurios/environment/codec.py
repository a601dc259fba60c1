"""
Environment Codec

Reads and writes the environment file: a JSON document with a ``vars``
section (mutable variables), a ``perms`` section (role -> commands, in
priority order) and a ``struct`` section (the folder/file tree).

Loading is lenient about optional node attributes (bad windows and
missing lock keys are logged and replaced by safe defaults) and strict
about structure (unknown element types, duplicate names and a missing
``struct`` abort the load).

Author: YSNRFD
Version: 1.0.0
"""

import json
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from kurios.core import clock
from kurios.exceptions import (
    MalformedEnvironmentError,
    UnknownElementKindError,
    VariableException,
)
from kurios.filesystem.node import Folder, File, NodeType, ALWAYS_OPEN, new_root
from kurios.logger import get_logger
from kurios.users.permissions import PermissionTable
from kurios.variables.store import VariableStore, TIME_VARIABLE


VARS_SECTION = "vars"
PERMS_SECTION = "perms"
STRUCT_SECTION = "struct"

DEFAULT_LOCK_KEY = "admin"


@dataclass
class LoadedEnvironment:
    """Everything a successful load produces."""
    root: Folder
    variables: VariableStore
    permissions: PermissionTable

    @property
    def priority_list(self) -> List[str]:
        return self.permissions.priority_list


def _reject_duplicates(pairs: List[Tuple[str, Any]]) -> dict[str, Any]:
    """JSON object hook refusing repeated keys at one level."""
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise MalformedEnvironmentError(f"Duplicate name \"{key}\" in the environment file.")
        result[key] = value
    return result


class EnvironmentCodec:
    """
    Converts between environment text and in-memory state.

    Example:
        >>> codec = EnvironmentCodec()
        >>> loaded = codec.load(text)
        >>> text = codec.save(loaded.root, loaded.variables, loaded.permissions)
    """

    def __init__(
        self,
        default_lock_key: str = DEFAULT_LOCK_KEY,
        version: Optional[str] = None
    ):
        self._default_lock_key = default_lock_key
        self._version = version
        self._logger = get_logger('codec')

    # Loading

    def load(self, source: str, origin: Optional[str] = None) -> LoadedEnvironment:
        """
        Parse environment text.

        Args:
            source: The JSON document
            origin: File name used in error messages

        Returns:
            A fresh LoadedEnvironment

        Raises:
            MalformedEnvironmentError: On invalid JSON or structure
            UnknownElementKindError: On an element whose type is not folder/file
        """
        try:
            document = json.loads(source, object_pairs_hook=_reject_duplicates)
        except json.JSONDecodeError as e:
            raise MalformedEnvironmentError(
                f"The environment file is not valid JSON: {e.msg} (line {e.lineno}).",
                source=origin
            )
        except MalformedEnvironmentError as e:
            e.source = origin
            raise

        if not isinstance(document, dict):
            raise MalformedEnvironmentError("The environment file must contain a JSON object.", source=origin)

        struct = document.get(STRUCT_SECTION)
        if struct is None:
            raise MalformedEnvironmentError(
                "Could not find the directory structure. "
                "The environment file might be corrupted or invalid.",
                source=origin
            )

        variables = self._load_variables(document.get(VARS_SECTION))
        permissions = self._load_permissions(document.get(PERMS_SECTION))

        root = new_root()
        self._load_children(struct, root)

        return LoadedEnvironment(root=root, variables=variables, permissions=permissions)

    def _load_variables(self, section: Any) -> VariableStore:
        store = VariableStore(self._version)
        if section is None:
            return store
        if not isinstance(section, dict):
            self._logger.warning("Ignoring \"vars\" section that is not an object")
            return store

        for name, value in section.items():
            if name == TIME_VARIABLE:
                try:
                    store.clock.restore(value)
                except VariableException:
                    self._logger.warning(
                        "Invalid saved clock offset. Skipping it.",
                        context={'variable': name, 'value': value}
                    )
                continue

            try:
                store.create(name, value if isinstance(value, str) else json.dumps(value))
            except VariableException:
                self._logger.warning(
                    f"Exception encountered while loading variable \"{name}\". Skipping it.",
                    context={'variable': name}
                )

        return store

    def _load_permissions(self, section: Any) -> PermissionTable:
        table = PermissionTable()
        if section is None:
            return table
        if not isinstance(section, dict):
            self._logger.warning("Ignoring \"perms\" section that is not an object")
            return table

        for role, tokens in section.items():
            if not isinstance(tokens, list):
                self._logger.warning(
                    f"Permissions for role \"{role}\" are not a list. Skipping it.",
                    context={'role': role}
                )
                continue
            table.declare(role, tokens)

        return table

    def _load_children(self, element: Any, parent: Folder) -> None:
        """Populate ``parent`` from a ``{name: node}`` mapping."""
        if not isinstance(element, dict):
            raise MalformedEnvironmentError(
                f"Expected an object of children at {parent.child_path}."
            )

        for name, value in element.items():
            path = parent.child_path + name
            if not isinstance(value, dict):
                raise MalformedEnvironmentError(f"Expected an object for element {path}.")

            kind = value.get("type")
            window = self._load_window(value, path)
            locked, key = self._load_lock(value, path)

            if kind == NodeType.FOLDER.value:
                folder = Folder(
                    name=name,
                    path=parent.child_path,
                    available_between=window,
                    locked=locked,
                    key=key,
                )
                self._load_children(value.get("children", {}), folder)
                parent.add(folder)

            elif kind == NodeType.FILE.value:
                file = File(
                    name=name,
                    path=parent.child_path,
                    available_between=window,
                    locked=locked,
                    key=key,
                )
                # An empty "data" next to "cache" still means cached content
                if value.get("data"):
                    file.data = str(value["data"])
                elif value.get("cache"):
                    file.cache = str(value["cache"])
                parent.add(file)

            else:
                raise UnknownElementKindError(path, kind=kind)

    def _load_window(self, value: dict[str, Any], path: str) -> Tuple[str, str]:
        if "availableBetween" not in value:
            return ALWAYS_OPEN

        raw = value["availableBetween"]
        if not isinstance(raw, list) or len(raw) != 2:
            self._logger.warning(
                f"Exception encountered while loading \"{path}\". Invalid availableBetween "
                f"argument. Setting default value [\"*\", \"*\"].",
                context={'path': path}
            )
            return ALWAYS_OPEN

        window = []
        for endpoint in raw:
            endpoint = str(endpoint)
            if endpoint != clock.WILDCARD and not clock.is_valid_timestamp(endpoint):
                # Kept as is; the access gate treats it as closed
                self._logger.warning(
                    f"Exception encountered while loading time \"{endpoint}\". "
                    f"Invalid time format. Expected {clock.TIME_FORMAT_HINT}.",
                    context={'path': path}
                )
            window.append(endpoint)

        return window[0], window[1]

    def _load_lock(self, value: dict[str, Any], path: str) -> Tuple[bool, str]:
        locked = value.get("locked", False)
        if not isinstance(locked, bool):
            self._logger.warning(
                f"Exception encountered while loading \"{path}\". Invalid locked "
                f"argument. Setting default value false.",
                context={'path': path}
            )
            return False, ""
        if not locked:
            return False, ""

        key = value.get("key")
        if not key:
            self._logger.warning(
                f"Exception encountered while loading \"{path}\". Invalid lock key. "
                f"Setting default value \"{self._default_lock_key}\".",
                context={'path': path}
            )
            key = self._default_lock_key

        return True, str(key)

    # Saving

    def save(
        self,
        root: Folder,
        variables: VariableStore,
        permissions: PermissionTable
    ) -> str:
        """
        Serialize state to environment text.

        Immutable variables are omitted. Roles are written in priority
        order and children in sorted order, so saving an unchanged
        environment twice gives identical output.
        """
        document = {
            VARS_SECTION: {variable.name: variable.value for variable in variables.mutable_items()},
            PERMS_SECTION: {role: tokens for role, tokens in permissions.items()},
            STRUCT_SECTION: self._dump_children(root),
        }
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"

    def _dump_children(self, folder: Folder) -> dict[str, Any]:
        children: dict[str, Any] = {}
        for child in folder.sorted_children():
            if isinstance(child, Folder):
                children[child.name] = self._dump_folder(child)
            else:
                children[child.name] = self._dump_file(child)
        return children

    def _dump_folder(self, folder: Folder) -> dict[str, Any]:
        element: dict[str, Any] = {"type": NodeType.FOLDER.value}
        self._dump_access(folder, element)
        element["children"] = self._dump_children(folder)
        return element

    def _dump_file(self, file: File) -> dict[str, Any]:
        element: dict[str, Any] = {"type": NodeType.FILE.value}
        self._dump_access(file, element)
        if file.is_cached:
            element["cache"] = file.cache
        else:
            element["data"] = file.data
        return element

    @staticmethod
    def _dump_access(node, element: dict[str, Any]) -> None:
        if not node.always_open:
            element["availableBetween"] = list(node.available_between)
        if node.locked:
            element["locked"] = True
            element["key"] = node.key
