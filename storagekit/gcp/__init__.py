"""Google Cloud Storage implementation."""

from .project import Project
from .signer import SignedUrlBuilder, SigningCredential, SignableRequest

__all__ = [
    "Project",
    "SignedUrlBuilder",
    "SigningCredential",
    "SignableRequest",
]
