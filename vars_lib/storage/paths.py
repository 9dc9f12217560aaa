"""Resolve and validate the on-disk location of a namespace/scope pair.

Layout: ``<state root>/<namespace>[/<scope>]/vars.properties``. The state
root is an explicit override when one is configured, else
``$XDG_STATE_HOME``, else ``~/.local/state``.
"""
from __future__ import annotations
import logging
import os
import re
from pathlib import Path
from typing import Callable, Mapping, Optional

from vars_lib.errors import (
    EmptyNamespaceError,
    InvalidNamespaceError,
    InvalidScopeError,
)

logger = logging.getLogger(__name__)

PROPERTIES_FILE = "vars.properties"
VALID_NAME = re.compile(r"[a-zA-Z0-9._-]+")
# Allowed by VALID_NAME but not usable as a directory level
RESERVED_NAMES = (".", "..")


def default_state_dir(
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Callable[[], Path]] = None,
) -> Path:
    env = os.environ if environ is None else environ
    xdg = env.get("XDG_STATE_HOME")
    if xdg:
        return Path(xdg)
    home_dir = (home or Path.home)()
    return Path(home_dir) / ".local" / "state"


def validate_namespace(namespace: str) -> None:
    if not namespace:
        raise EmptyNamespaceError()
    if not VALID_NAME.fullmatch(namespace) or namespace in RESERVED_NAMES:
        raise InvalidNamespaceError(namespace)


def validate_scope(scope: str) -> None:
    """Empty scope means "no scope" and is always accepted."""
    if not scope:
        return
    if "/" in scope or "\\" in scope or scope in RESERVED_NAMES:
        raise InvalidScopeError(scope, "nesting is not allowed")
    if not VALID_NAME.fullmatch(scope):
        raise InvalidScopeError(scope)


class PathResolver:
    """Compute the directory backing a namespace/scope pair.

    Parameters
    - state_dir: zero-argument callable returning the state root. Defaults
      to `default_state_dir`, which reads the process environment.
    - root: explicit state root; takes precedence over `state_dir`.

    Resolution is pure: nothing is created on disk.
    """

    def __init__(
        self,
        state_dir: Optional[Callable[[], Path]] = None,
        root: str | Path | None = None,
    ) -> None:
        self._state_dir = state_dir or default_state_dir
        self._root = Path(root) if root else None

    def state_root(self) -> Path:
        if self._root is not None:
            return self._root
        return Path(self._state_dir())

    def resolve(self, namespace: str, scope: str = "") -> Path:
        validate_namespace(namespace)
        validate_scope(scope)
        path = self.state_root() / namespace
        if scope:
            path = path / scope
        logger.debug("Resolved vars directory for %s: %s", target_name(namespace, scope), path)
        return path

    def properties_path(self, namespace: str, scope: str = "") -> Path:
        return self.resolve(namespace, scope) / PROPERTIES_FILE


def target_name(namespace: str, scope: str = "") -> str:
    """Human-readable `ns` or `ns/scope` label used in messages."""
    return f"{namespace}/{scope}" if scope else namespace
