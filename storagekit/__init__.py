"""Storagekit: a client library for Google Cloud Storage projects.

Entry point for the library. Import :func:`new_storage` to connect to a
project, then work with its buckets, files and signed URLs::

    from storagekit import new_storage

    storage = new_storage({"project_id": "my-project"})
    url = storage.signed_url("my-todo-app", "avatars/heidi/400x400.png")
"""

from .base import CloudStorageBlueprint, StorageConfig
from .base.exceptions import (
    StoragekitError,
    StorageError,
    BucketNotFoundError,
    BucketAlreadyExistsError,
    ObjectNotFoundError,
    SigningUnavailableError,
    InvalidArgumentError,
)
from .gcp import Project, SignedUrlBuilder
from .factory import new_storage

__all__ = [
    "CloudStorageBlueprint",
    "StorageConfig",
    "StoragekitError",
    "StorageError",
    "BucketNotFoundError",
    "BucketAlreadyExistsError",
    "ObjectNotFoundError",
    "SigningUnavailableError",
    "InvalidArgumentError",
    "Project",
    "SignedUrlBuilder",
    "new_storage",
]
