from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import BaseModel

from vars_lib.editor import DEFAULT_EDITOR

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.yml"


class VarsConfig(BaseModel):
    # Explicit state root; overrides $XDG_STATE_HOME when set
    state_dir: Optional[str] = None
    log_level: Optional[str] = None
    default_editor: str = DEFAULT_EDITOR


def default_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    base = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "vars" / CONFIG_FILE


def load_config(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> VarsConfig:
    """Load the YAML configuration file.

    A missing file gives the defaults. An unreadable or malformed file is
    logged and also gives the defaults, so a broken config never blocks
    access to stored values.
    """
    cfg_path = path or default_config_path(environ)
    if not cfg_path.exists():
        logger.debug("No config file at %s; using defaults", cfg_path)
        return VarsConfig()
    try:
        with cfg_path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"expected a mapping, got {type(raw).__name__}")
        cfg = VarsConfig(**raw)
    except Exception:
        logger.exception("Failed to load vars configuration from %s", cfg_path)
        return VarsConfig()
    logger.debug("Loaded config from %s", cfg_path)
    return cfg
