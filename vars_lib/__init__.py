"""Persistent, namespaced key/value properties for command line applications."""

from vars_lib.errors import (
    CorruptPropertiesError,
    EditorLaunchError,
    EmptyNamespaceError,
    InvalidNamespaceError,
    InvalidScopeError,
    KeyNotFoundError,
    NotInitializedError,
    TooManyScopeLevels,
    ValidationError,
    VarsError,
)
from vars_lib.storage import PathResolver, Vars

__all__ = [
    "Vars",
    "PathResolver",
    "VarsError",
    "ValidationError",
    "EmptyNamespaceError",
    "InvalidNamespaceError",
    "InvalidScopeError",
    "NotInitializedError",
    "KeyNotFoundError",
    "CorruptPropertiesError",
    "EditorLaunchError",
    "TooManyScopeLevels",
]
