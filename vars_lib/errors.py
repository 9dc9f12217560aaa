"""Error kinds raised by the vars store.

Filesystem failures are not wrapped: they surface as the `OSError` raised
by the underlying call.
"""
from __future__ import annotations


class VarsError(Exception):
    """Base class for recoverable store errors."""


class ValidationError(VarsError, ValueError):
    """A namespace or scope does not satisfy the naming rule."""


class EmptyNamespaceError(ValidationError):
    def __init__(self) -> None:
        super().__init__("namespace cannot be empty")


class InvalidNamespaceError(ValidationError):
    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        super().__init__(
            f"invalid namespace {namespace!r} (allowed characters: a-z A-Z 0-9 . _ -)"
        )


class InvalidScopeError(ValidationError):
    def __init__(self, scope: str, reason: str = "") -> None:
        self.scope = scope
        detail = reason or "allowed characters: a-z A-Z 0-9 . _ -"
        super().__init__(f"invalid scope {scope!r}: {detail}")


class NotInitializedError(VarsError):
    """The backing directory or property file has not been created yet."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"vars not initialized for {target!r} (run 'init' first)")


class KeyNotFoundError(VarsError, KeyError):
    """The store is initialized but holds no entry for `key`."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the argument
        return f"key not found: {self.key}"


class CorruptPropertiesError(VarsError):
    """The properties file exists but is not valid UTF-8 text."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot read {path}: {reason} (fix the file with 'edit')")


class EditorLaunchError(VarsError):
    def __init__(self, editor: str, reason: str) -> None:
        self.editor = editor
        super().__init__(f"editor {editor!r} failed: {reason}")


class TooManyScopeLevels(TypeError):
    """Raised at construction when more than one scope token is given.

    This is a caller bug rather than bad input, so it is not a `VarsError`
    and is not caught by the command line layer.
    """

    def __init__(self, count: int) -> None:
        super().__init__(
            f"vars: only a single level of scope is allowed (got {count} scope arguments)"
        )
