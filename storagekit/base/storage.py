"""Cloud storage project blueprint."""

from abc import ABC, abstractmethod
from typing import Any


class CloudStorageBlueprint(ABC):
    """Abstract interface for a storage project.

    A project owns buckets, buckets hold files. Defines bucket and file
    CRUD plus signed-URL generation.
    """

    # --- Bucket operations ---

    @abstractmethod
    def list_buckets(self, prefix: str = "", max_results: int | None = None) -> list[str]:
        """List bucket names owned by the project.

        Args:
            prefix: Only return buckets whose names begin with this prefix.
            max_results: Maximum number of buckets to return.

        Returns:
            A list of bucket name strings.
        """
        pass

    @abstractmethod
    def bucket(
        self, bucket_name: str, skip_lookup: bool = False, user_project: str | None = None
    ) -> Any:
        """Retrieve a bucket by name.

        Args:
            bucket_name: Name of the bucket.
            skip_lookup: Return a handle without checking that the bucket exists.
            user_project: Project billed for requester-pays access.

        Returns:
            The bucket, or None if it does not exist.
        """
        pass

    @abstractmethod
    def create_bucket(self, bucket_name: str, **options: Any) -> Any:
        """Create a new bucket.

        Args:
            bucket_name: Globally unique bucket name.
            **options: Provider-specific bucket attributes (acl, location, ...).

        Returns:
            The created bucket.
        """
        pass

    @abstractmethod
    def delete_bucket(self, bucket_name: str) -> None:
        """Delete an empty bucket.

        Args:
            bucket_name: Name of the bucket to delete.
        """
        pass

    # --- File operations ---

    @abstractmethod
    def upload_file(self, bucket_name: str, path: str, file_path: str) -> None:
        """Upload a local file to a bucket.

        Args:
            bucket_name: Target bucket.
            path: Destination file path in the bucket.
            file_path: Local filesystem path to upload.
        """
        pass

    @abstractmethod
    def download_file(self, bucket_name: str, path: str, destination: str) -> None:
        """Download a file to the local filesystem.

        Args:
            bucket_name: Source bucket.
            path: File path in the bucket.
            destination: Local path to write to.
        """
        pass

    @abstractmethod
    def read_file(self, bucket_name: str, path: str) -> bytes:
        """Read the contents of a file.

        Args:
            bucket_name: Bucket containing the file.
            path: File path in the bucket.

        Returns:
            The raw file bytes.
        """
        pass

    @abstractmethod
    def delete_file(self, bucket_name: str, path: str) -> None:
        """Delete a file from a bucket.

        Args:
            bucket_name: Bucket containing the file.
            path: File path to delete.
        """
        pass

    @abstractmethod
    def list_files(self, bucket_name: str, prefix: str = "") -> list[str]:
        """List file paths in a bucket.

        Args:
            bucket_name: Bucket to list.
            prefix: Optional path prefix filter.

        Returns:
            A list of file path strings.
        """
        pass

    # --- Signed URLs ---

    @abstractmethod
    def signed_url(
        self,
        bucket_name: str,
        path: str,
        method: str = "GET",
        expires: int = 300,
        **options: Any,
    ) -> str:
        """Generate a signed URL granting one HTTP operation on a file.

        Args:
            bucket_name: Name of the bucket.
            path: File path in the bucket. The file need not exist yet.
            method: HTTP verb the URL authorizes (GET, HEAD, PUT, DELETE).
            expires: Seconds from now until the URL expires.
            **options: content_type, content_md5, headers, issuer,
                client_email, signing_key, private_key, query.

        Returns:
            The signed URL string.
        """
        pass
