"""Namespaced key/value store persisted as a single properties file.

Each public operation resolves the path, reloads the file from disk and, for
mutations, rewrites the whole file. Nothing is cached between calls, so two
`Vars` instances over the same namespace always see each other's writes.

Concurrent calls on one instance are serialized by a reader/writer lock:
`get`, `all` and `keys` share it, `set` and `unset` hold it exclusively for
the entire load-mutate-rewrite sequence. There is no locking across
instances or processes.
"""
from __future__ import annotations
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from vars_lib.editor import launch_editor
from vars_lib.errors import (
    CorruptPropertiesError,
    KeyNotFoundError,
    NotInitializedError,
    TooManyScopeLevels,
)
from vars_lib.storage.paths import PROPERTIES_FILE, PathResolver, target_name
from vars_lib.storage.properties import PropertiesSerializer, Serializer
from vars_lib.storage.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

DIR_MODE = 0o700
FILE_MODE = 0o600


class Vars:
    """Store for one namespace and optional single-level scope.

    `Vars("pomo")` maps to ``<root>/pomo/vars.properties`` and
    `Vars("pomo", "timer")` to ``<root>/pomo/timer/vars.properties``.
    Passing more than one scope raises `TooManyScopeLevels`. Name validation
    happens on each operation, before any filesystem access.
    """

    def __init__(
        self,
        namespace: str,
        *scope: str,
        resolver: Optional[PathResolver] = None,
        serializer: Optional[Serializer] = None,
    ) -> None:
        if len(scope) > 1:
            raise TooManyScopeLevels(len(scope))
        self._namespace = namespace
        self._scope = scope[0] if scope else ""
        self._resolver = resolver or PathResolver()
        self._serializer = serializer or PropertiesSerializer()
        self._lock = ReadWriteLock()

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def target(self) -> str:
        return target_name(self._namespace, self._scope)

    @property
    def directory(self) -> Path:
        return self._resolver.resolve(self._namespace, self._scope)

    @property
    def path(self) -> Path:
        return self.directory / PROPERTIES_FILE

    def init(self) -> None:
        """Create the directory and an empty properties file if missing.

        Existing content is never truncated, so calling this repeatedly is
        safe.
        """
        directory = self.directory
        os.makedirs(directory, mode=DIR_MODE, exist_ok=True)
        fd = os.open(directory / PROPERTIES_FILE, os.O_RDONLY | os.O_CREAT, FILE_MODE)
        os.close(fd)
        logger.info("Initialized vars for %s at %s", self.target, directory)

    def get(self, key: str) -> str:
        with self._lock.read():
            data = self._load()
        logger.debug("Get %s from %s", key, self.target)
        try:
            return data[key]
        except KeyError:
            raise KeyNotFoundError(key) from None

    def set(self, key: str, value: str) -> None:
        with self._lock.write():
            data = self._load(missing_ok=True)
            data[key] = value
            self._save(data)
        logger.info("Set %s in %s", key, self.target)

    def unset(self, key: str) -> None:
        with self._lock.write():
            data = self._load()
            removed = data.pop(key, None) is not None
            self._save(data)
        logger.info("Unset %s in %s (present=%s)", key, self.target, removed)

    def all(self) -> Dict[str, str]:
        with self._lock.read():
            return self._load()

    def keys(self) -> List[str]:
        with self._lock.read():
            return sorted(self._load())

    def edit(
        self,
        environ: Optional[Mapping[str, str]] = None,
        default_editor: str = "vi",
        runner: Optional[Callable[..., Any]] = None,
    ) -> None:
        """Open the properties file in the user's editor and wait for it."""
        path = self.path
        if not path.is_file():
            raise NotInitializedError(self.target)
        launch_editor(path, environ=environ, default=default_editor, runner=runner)

    def _load(self, missing_ok: bool = False) -> Dict[str, str]:
        """Read and parse the properties file.

        A missing directory always means the store was never initialized.
        A missing file inside an existing directory is tolerated only when
        `missing_ok` is set (the write path), yielding an empty mapping.
        """
        directory = self.directory
        if not directory.is_dir():
            raise NotInitializedError(self.target)
        path = directory / PROPERTIES_FILE
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            if missing_ok:
                return {}
            raise NotInitializedError(self.target) from None
        logger.debug("Loaded %s (%d bytes)", path, len(raw))
        try:
            return self._serializer.load(raw)
        except UnicodeDecodeError as e:
            raise CorruptPropertiesError(str(path), str(e)) from e

    def _save(self, data: Mapping[str, str]) -> None:
        directory = self.directory
        if not directory.is_dir():
            raise NotInitializedError(self.target)
        path = directory / PROPERTIES_FILE
        # Temp name is unique per write, also across instances
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{PROPERTIES_FILE}.", suffix=".tmp")
        tmp = Path(tmp_name)
        try:
            os.fchmod(fd, FILE_MODE)
            with os.fdopen(fd, "wb") as f:
                f.write(self._serializer.dump(data))
                f.flush()
                os.fsync(f.fileno())
            tmp.replace(path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d entries to %s", len(data), path)
