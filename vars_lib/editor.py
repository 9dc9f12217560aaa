"""Launch the user's text editor on a file and wait for it to exit."""
from __future__ import annotations
import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional

from vars_lib.errors import EditorLaunchError

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vi"


def _split_command(value: str) -> List[str]:
    try:
        return shlex.split(value)
    except ValueError as e:
        raise EditorLaunchError(value, f"cannot parse editor command: {e}") from e


def select_editor(
    environ: Optional[Mapping[str, str]] = None, default: str = DEFAULT_EDITOR
) -> List[str]:
    """Return the editor command as argv: $VISUAL, then $EDITOR, then `default`.

    The value is split shell-style so settings like ``code --wait`` work.
    Raises `EditorLaunchError` when the chosen value is not a valid command
    line (an unbalanced quote, for example).
    """
    env = os.environ if environ is None else environ
    for name in ("VISUAL", "EDITOR"):
        value = (env.get(name) or "").strip()
        if value:
            return _split_command(value)
    return _split_command(default) or [DEFAULT_EDITOR]


def launch_editor(
    path: str | Path,
    environ: Optional[Mapping[str, str]] = None,
    default: str = DEFAULT_EDITOR,
    runner: Optional[Callable[..., Any]] = None,
) -> None:
    """Run the editor on `path` with inherited stdio, blocking until it exits.

    Raises `EditorLaunchError` if the program cannot be started or exits with
    a non-zero status.
    """
    argv = select_editor(environ, default) + [str(path)]
    run = runner or subprocess.run
    logger.debug("Launching editor: %s", argv)
    try:
        result = run(argv, check=False)
    except OSError as e:
        raise EditorLaunchError(argv[0], str(e)) from e
    if result.returncode != 0:
        raise EditorLaunchError(argv[0], f"exited with status {result.returncode}")
