"""Storage project factory.

Provides :func:`new_storage`, the single entry-point for connecting to a
Cloud Storage project.
"""

from storagekit.base import CloudStorageBlueprint, StorageConfig
from storagekit.base.config import validate_config
from storagekit.gcp.project import Project


def new_storage(config: dict | StorageConfig | None = None) -> CloudStorageBlueprint:
    """
    Create a storage project client.
    Args:
        config: Configuration dictionary (or model) accepted by StorageConfig.
            Missing values fall back to environment variables.
    Returns:
        A :class:`Project` connected to the configured project.
    Raises:
        pydantic.ValidationError: If the config is invalid.
    """
    return Project(validate_config(config))
