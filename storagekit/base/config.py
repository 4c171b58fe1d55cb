"""
Pydantic configuration model for a storage project.

Validates configuration at initialization time instead of silently
passing bad values to the SDK client. Environment lookups happen here,
once, so nothing downstream consults global state.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_HOST = "storage.googleapis.com"

_PROJECT_ENV_VARS = ("STORAGE_PROJECT", "GOOGLE_CLOUD_PROJECT", "GCLOUD_PROJECT")
_CREDENTIALS_ENV_VARS = ("STORAGE_CREDENTIALS", "GOOGLE_APPLICATION_CREDENTIALS")


class StorageConfig(BaseModel):
    """Configuration for a Cloud Storage project.

    Values are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (STORAGE_PROJECT, GOOGLE_CLOUD_PROJECT,
       GCLOUD_PROJECT for the project; STORAGE_CREDENTIALS,
       GOOGLE_APPLICATION_CREDENTIALS for the key file).
    3. If no credentials are found, ``credentials`` stays None so the SDK can
       fall back to Application Default Credentials (ADC).

    ``issuer`` and ``signing_key`` are explicit defaults for signed URLs and
    take precedence over whatever the credentials can sign with.
    """

    # Key material never appears in repr() or validation errors.
    model_config = ConfigDict(extra="forbid", hide_input_in_errors=True)

    project_id: str | None = Field(default=None, description="GCP project ID")
    credentials: Any | None = Field(default=None, description="google-auth credentials object")
    credentials_path: str | None = Field(
        default=None, description="Path to service account JSON key file"
    )
    issuer: str | None = Field(default=None, description="Service account email used to sign URLs")
    signing_key: Any | None = Field(
        default=None,
        repr=False,
        description="PEM private key (str/bytes) or google.auth.crypt.Signer",
    )
    host: str = Field(default=DEFAULT_HOST, description="Host embedded in signed URLs")
    scheme: Literal["https", "http"] = Field(default="https", description="Signed URL scheme")
    retries: int = Field(default=3, ge=1, description="Total attempts for remote calls")
    retry_base_delay: float = Field(default=1.0, ge=0, description="Initial retry backoff in seconds")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing config."""
        if not values.get("project_id"):
            values["project_id"] = next(
                (os.environ[var] for var in _PROJECT_ENV_VARS if os.environ.get(var)), None
            )
        if not values.get("credentials_path") and values.get("credentials") is None:
            values["credentials_path"] = next(
                (os.environ[var] for var in _CREDENTIALS_ENV_VARS if os.environ.get(var)), None
            )
        return values

    @model_validator(mode="after")
    def validate_project_and_credentials(self) -> StorageConfig:
        """Ensure project_id is set and load credentials from path if needed."""
        if self.project_id is None:
            raise ValueError(
                "GCP project_id is required. Set it explicitly or via "
                "STORAGE_PROJECT / GOOGLE_CLOUD_PROJECT / GCLOUD_PROJECT environment variable."
            )
        if self.credentials is None and self.credentials_path:
            path = Path(self.credentials_path)
            if not path.exists():
                raise ValueError(f"Credentials file not found: {self.credentials_path}")
            from google.oauth2 import service_account  # lazy import

            self.credentials = service_account.Credentials.from_service_account_file(
                str(path)
            )
        return self


def validate_config(config: dict | StorageConfig | None) -> StorageConfig:
    """Validate and return a typed config model.

    Args:
        config: Raw configuration dictionary, an existing model, or None.

    Returns:
        A validated :class:`StorageConfig`.

    Raises:
        pydantic.ValidationError: If the config is invalid.
    """
    if isinstance(config, StorageConfig):
        return config
    return StorageConfig(**(config or {}))


__all__ = [
    "DEFAULT_HOST",
    "StorageConfig",
    "validate_config",
]
