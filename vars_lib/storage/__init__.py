"""Storage package for vars: path resolution, codec, locking and the store."""

from .paths import PathResolver, default_state_dir
from .properties import PropertiesSerializer
from .rwlock import ReadWriteLock
from .store import Vars

__all__ = ["PathResolver", "default_state_dir", "PropertiesSerializer", "ReadWriteLock", "Vars"]
