from typing import Any, Callable

from google.cloud import storage as gcs
from google.api_core.exceptions import NotFound, Conflict
from google.cloud.exceptions import GoogleCloudError

from storagekit.base import CloudStorageBlueprint
from storagekit.base.async_support import AsyncMixin
from storagekit.base.config import StorageConfig, validate_config
from storagekit.base.exceptions import (
    InvalidArgumentError,
    StorageError,
    BucketNotFoundError,
    BucketAlreadyExistsError,
    ObjectNotFoundError,
)
from storagekit.base.logger import sk_logger
from storagekit.base.retry import retry
from storagekit.gcp.acl import bucket_acl_rule, default_acl_rule, storage_class_for
from storagekit.gcp.signer import DEFAULT_EXPIRES, SignedUrlBuilder


def _handle_error(e: Exception, message: str):
    """Raise a mapped exception or a generic StorageError."""
    if isinstance(e, NotFound):
        if "bucket" in str(e).lower():
            raise BucketNotFoundError(message) from e
        raise ObjectNotFoundError(message) from e
    if isinstance(e, Conflict):
        raise BucketAlreadyExistsError(message) from e
    raise StorageError(message) from e


class Project(CloudStorageBlueprint, AsyncMixin):
    """A Cloud Storage project: the buckets it owns and the files in them.

    Every public method also has an ``a``-prefixed coroutine twin
    (``asigned_url``, ``alist_buckets``, ...).
    """

    def __init__(self, config: StorageConfig | dict):
        """Initialize the Cloud Storage client.

        Args:
            config: :class:`StorageConfig` or a dict accepted by it.
        """
        self.config = validate_config(config)
        self.client = gcs.Client(
            project=self.config.project_id,
            credentials=self.config.credentials,
        )
        ambient = self.config.credentials
        if ambient is None:
            ambient = getattr(self.client, "_credentials", None)
        self.signer = SignedUrlBuilder(
            ambient,
            issuer=self.config.issuer,
            signing_key=self.config.signing_key,
            host=self.config.host,
            scheme=self.config.scheme,
        )

    def _call(self, fn: Callable, *args: Any, **kwargs: Any) -> Any:
        """Invoke a remote call, retrying transient failures."""
        return retry(
            max_attempts=self.config.retries,
            base_delay=self.config.retry_base_delay,
        )(fn)(*args, **kwargs)

    @property
    def project_id(self) -> str:
        """The project this client is connected to."""
        return self.config.project_id

    project = project_id

    # --- Bucket operations ---

    def list_buckets(
        self,
        prefix: str = "",
        max_results: int | None = None,
        project: str | None = None,
    ) -> list[str]:
        """List bucket names.

        Args:
            prefix: Only return buckets whose names begin with this prefix.
            max_results: Maximum number of buckets to return.
            project: List another project's buckets instead of this one.
                Bucket listing cannot be billed via ``user_project``.
        """
        try:
            return self._call(
                lambda: [
                    b.name
                    for b in self.client.list_buckets(
                        prefix=prefix or None,
                        max_results=max_results,
                        project=project,
                    )
                ]
            )
        except GoogleCloudError as e:
            _handle_error(e, "Failed to list buckets.")

    def bucket(
        self, bucket_name: str, skip_lookup: bool = False, user_project: str | None = None
    ) -> gcs.Bucket | None:
        """Retrieve a bucket by name, or None if it does not exist.

        With ``skip_lookup`` no request is made; calls on the returned
        handle fail later if the bucket is missing.
        """
        handle = self.client.bucket(bucket_name, user_project=user_project)
        if skip_lookup:
            return handle
        try:
            self._call(handle.reload)
        except NotFound:
            return None
        except GoogleCloudError as e:
            _handle_error(e, f"Failed to get bucket '{bucket_name}'.")
        return handle

    def create_bucket(
        self,
        bucket_name: str,
        acl: str | None = None,
        default_acl: str | None = None,
        location: str | None = None,
        storage_class: str | None = None,
        logging_bucket: str | None = None,
        logging_prefix: str | None = None,
        website_main: str | None = None,
        website_404: str | None = None,
        versioning: bool | None = None,
        requester_pays: bool | None = None,
        user_project: str | None = None,
    ) -> gcs.Bucket:
        """Create a new bucket.

        Args:
            bucket_name: Globally unique bucket name.
            acl: Predefined bucket ACL alias (e.g. ``private``, ``public``).
            default_acl: Predefined default object ACL alias (e.g. ``owner_full``).
            location: Bucket location (e.g. ``US``, ``EU``, ``ASIA``).
            storage_class: Storage class alias (e.g. ``nearline``).
            logging_bucket: Destination bucket for access logs.
            logging_prefix: Object name prefix for access logs.
            website_main: Index page for static website hosting.
            website_404: Not-found page for static website hosting.
            versioning: Enable object versioning.
            requester_pays: Bill requesters for access.
            user_project: Project billed for the request.

        Returns:
            The created bucket.

        Raises:
            InvalidArgumentError: On an unknown ACL alias, or a logging
                prefix without a logging bucket.
            BucketAlreadyExistsError: If the name is taken.
        """
        predefined_acl = bucket_acl_rule(acl)
        predefined_default_acl = default_acl_rule(default_acl)
        if logging_prefix is not None and logging_bucket is None:
            raise InvalidArgumentError("logging_prefix requires logging_bucket.")

        new_bucket = self.client.bucket(bucket_name, user_project=user_project)
        if storage_class is not None:
            new_bucket.storage_class = storage_class_for(storage_class)
        if logging_bucket is not None:
            new_bucket.enable_logging(logging_bucket, object_prefix=logging_prefix or "")
        if website_main is not None or website_404 is not None:
            new_bucket.configure_website(
                main_page_suffix=website_main, not_found_page=website_404
            )
        if versioning is not None:
            new_bucket.versioning_enabled = versioning
        if requester_pays is not None:
            new_bucket.requester_pays = requester_pays

        # Not retried: a retry after an unseen success would report a conflict.
        try:
            created = self.client.create_bucket(
                new_bucket,
                location=location,
                user_project=user_project,
                predefined_acl=predefined_acl,
                predefined_default_object_acl=predefined_default_acl,
            )
        except GoogleCloudError as e:
            _handle_error(e, f"Failed to create bucket '{bucket_name}'.")
        sk_logger.info(f"Created bucket '{bucket_name}'", operation="create_bucket")
        return created

    def delete_bucket(self, bucket_name: str) -> None:
        """Delete a bucket. Must be empty."""
        try:
            self._call(self.client.bucket(bucket_name).delete)
        except GoogleCloudError as e:
            _handle_error(e, f"Failed to delete bucket '{bucket_name}'.")
        sk_logger.info(f"Deleted bucket '{bucket_name}'", operation="delete_bucket")

    # --- File operations ---

    def upload_file(self, bucket_name: str, path: str, file_path: str) -> None:
        """Upload a local file."""
        blob = self.client.bucket(bucket_name).blob(path)
        try:
            self._call(blob.upload_from_filename, file_path)
        except GoogleCloudError as e:
            _handle_error(e, f"Failed to upload '{path}' to '{bucket_name}'.")

    def download_file(self, bucket_name: str, path: str, destination: str) -> None:
        """Download a file to a local path."""
        blob = self.client.bucket(bucket_name).blob(path)
        try:
            self._call(blob.download_to_filename, destination)
        except GoogleCloudError as e:
            _handle_error(e, f"Failed to download '{path}' from '{bucket_name}'.")

    def read_file(self, bucket_name: str, path: str) -> bytes:
        """Get the contents of a file as bytes."""
        blob = self.client.bucket(bucket_name).blob(path)
        try:
            return self._call(blob.download_as_bytes)
        except GoogleCloudError as e:
            _handle_error(e, f"Failed to read '{path}' from '{bucket_name}'.")

    def delete_file(self, bucket_name: str, path: str) -> None:
        """Delete a file."""
        blob = self.client.bucket(bucket_name).blob(path)
        try:
            self._call(blob.delete)
        except GoogleCloudError as e:
            _handle_error(e, f"Failed to delete '{path}' from '{bucket_name}'.")

    def list_files(self, bucket_name: str, prefix: str = "") -> list[str]:
        """List file paths in a bucket, optionally filtered by prefix."""
        try:
            return self._call(
                lambda: [
                    blob.name
                    for blob in self.client.list_blobs(bucket_name, prefix=prefix or None)
                ]
            )
        except GoogleCloudError as e:
            _handle_error(e, f"Failed to list files in '{bucket_name}'.")

    # --- Signed URLs ---

    def signed_url(
        self,
        bucket_name: str,
        path: str,
        method: str = "GET",
        expires: int = DEFAULT_EXPIRES,
        content_type: str | None = None,
        content_md5: str | None = None,
        headers: dict | None = None,
        issuer: str | None = None,
        client_email: str | None = None,
        signing_key: Any | None = None,
        private_key: Any | None = None,
        query: dict | None = None,
    ) -> str:
        """Generate a signed URL for a file.

        No request is made; the file need not exist (useful for ``PUT``).
        See :meth:`SignedUrlBuilder.signed_url` for the arguments.

        Raises:
            SigningUnavailableError: If no service account issuer and key are
                available from the arguments, the config or the credentials.
            InvalidArgumentError: On a bad verb, expiration, path or headers.
        """
        return self.signer.signed_url(
            bucket_name,
            path,
            method=method,
            expires=expires,
            content_type=content_type,
            content_md5=content_md5,
            headers=headers,
            issuer=issuer,
            client_email=client_email,
            signing_key=signing_key,
            private_key=private_key,
            query=query,
        )
