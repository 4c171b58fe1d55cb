"""
Storagekit exception hierarchy.

Every error raised by the library inherits from :class:`StoragekitError`.
Remote failures surface as :class:`StorageError` subclasses; bad caller
input surfaces as :class:`InvalidArgumentError`.
"""


# ── Base ──────────────────────────────────────────────────────────────
class StoragekitError(Exception):
    """Root exception for all Storagekit errors."""


class InvalidArgumentError(StoragekitError, ValueError):
    """A caller-supplied argument is malformed or out of range."""


# ── Storage ───────────────────────────────────────────────────────────
class StorageError(StoragekitError):
    """Base exception for cloud storage operations."""


class BucketNotFoundError(StorageError):
    """Bucket not found."""


class BucketAlreadyExistsError(StorageError):
    """Bucket already exists."""


class ObjectNotFoundError(StorageError):
    """Object (file) not found."""


# ── Signing ───────────────────────────────────────────────────────────
class SigningUnavailableError(StorageError):
    """No usable signing credential could be resolved.

    Raised when the issuer email or the private key is missing, or when the
    key material cannot be parsed. Retrying with the same inputs cannot
    succeed.
    """
