from __future__ import annotations
import logging
from typing import Optional

from vars_lib.config.config import VarsConfig

DEFAULT_LOG_LEVEL = logging.WARNING
LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s]: %(message)s'


def resolve_level(level: Optional[str], config: Optional[VarsConfig] = None) -> int:
    """Pick the level from `level`, then the config's `log_level`, else WARNING.

    Unknown level names fall back to the default.
    """
    name = level or (config.log_level if config else None)
    if isinstance(name, str):
        numeric = getattr(logging, name.upper(), None)
        if isinstance(numeric, int):
            return numeric
    return DEFAULT_LOG_LEVEL


def configure_logging(level: Optional[str] = None, config: Optional[VarsConfig] = None) -> logging.Logger:
    """Configure root logging for the command line tool.

    Diagnostics go to stderr; stdout is reserved for command output.
    Returns a module logger for the caller.
    """
    numeric = resolve_level(level, config)

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logger = logging.getLogger(__name__)
    logger.debug("Log level set to: %s", logging.getLevelName(numeric))
    return logger
