"""Abstract blueprint and core utilities.

Import :class:`CloudStorageBlueprint` to type-hint your own code or to
provide an alternative implementation.
"""

from .storage import CloudStorageBlueprint
from .config import StorageConfig, validate_config
from .supported_methods import signable_methods, SIGNABLE_METHODS


__all__ = [
    "CloudStorageBlueprint",
    "StorageConfig",
    "validate_config",
    "signable_methods",
    "SIGNABLE_METHODS",
]
