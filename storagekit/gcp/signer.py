"""Signed URL construction for Cloud Storage files.

A signed URL carries an RSA signature over a canonical description of one
request (verb, content hints, expiration, ``x-goog-`` headers, resource
path). Whoever holds the URL may perform exactly that request until it
expires, without authenticating to Cloud Storage.

The canonical string is::

    METHOD\\nCONTENT_MD5\\nCONTENT_TYPE\\nEXPIRES\\nCANONICAL_HEADERS/bucket/path

Absent content hints are empty lines, never dropped.
"""

from __future__ import annotations

import base64
import re
import time
from typing import Any, Callable, Mapping
from urllib.parse import quote, quote_plus

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from google.auth import crypt
from pydantic import BaseModel, ConfigDict

from storagekit.base.config import DEFAULT_HOST
from storagekit.base.exceptions import InvalidArgumentError, SigningUnavailableError
from storagekit.base.key_cache import KeyCache
from storagekit.base.logger import sk_logger
from storagekit.base.supported_methods import SIGNABLE_METHODS

DEFAULT_EXPIRES = 300
MAX_EXPIRES = 7 * 24 * 60 * 60
# Query names the signature itself occupies.
_RESERVED_QUERY_PARAMS = frozenset({"GoogleAccessId", "Expires", "Signature"})
EXTENSION_HEADER_PREFIX = "x-goog-"
# Customer-supplied encryption key headers are sent but never signed.
_UNSIGNED_HEADER_PREFIX = "x-goog-encryption-key"
_WHITESPACE = re.compile(r"\s+")
_UNSAFE_PATH_CHARS = re.compile(r"[\r\n]")

_key_cache = KeyCache()


def _parse_rsa_signer(key_material: bytes) -> crypt.Signer:
    try:
        private_key = serialization.load_pem_private_key(key_material, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningUnavailableError(
            "Signing key could not be parsed as a PEM RSA private key."
        ) from e
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise SigningUnavailableError(
            f"Signing key must be an RSA private key, got {type(private_key).__name__}"
        )
    return crypt.RSASigner(private_key)


def load_signer(signing_key: Any) -> crypt.Signer:
    """Convert key material into a signer, once, at the API boundary.

    Args:
        signing_key: A ``google.auth.crypt.Signer``, or a PEM-encoded RSA
            private key (PKCS#1 or PKCS#8) as ``str`` or ``bytes``.

    Returns:
        A signer producing RSA PKCS#1 v1.5 / SHA-256 signatures.

    Raises:
        SigningUnavailableError: If the key type is unsupported, the key
            cannot be parsed, or it is not an RSA key. Rejected keys are
            not cached.
    """
    if isinstance(signing_key, crypt.Signer):
        return signing_key
    if isinstance(signing_key, str):
        key_material = signing_key.encode("utf-8")
    elif isinstance(signing_key, bytes):
        key_material = signing_key
    else:
        raise SigningUnavailableError(
            f"Unsupported signing key type: {type(signing_key).__name__}"
        )
    return _key_cache.get_or_create(key_material, _parse_rsa_signer)


class SigningCredential(BaseModel):
    """Issuer identity plus the parsed private key that signs on its behalf."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    issuer: str
    signer: crypt.Signer

    @classmethod
    def resolve(
        cls,
        issuer: str | None = None,
        signing_key: Any | None = None,
        ambient: Any | None = None,
    ) -> SigningCredential:
        """Resolve a credential from explicit values, falling back to *ambient*.

        Explicit ``issuer``/``signing_key`` always win; each missing part is
        taken from the ambient credentials (anything exposing ``signer_email``
        and ``signer``, e.g. service account credentials). Presence is checked
        before any key is parsed.

        Raises:
            SigningUnavailableError: If the issuer or the key cannot be resolved.
        """
        if not issuer:
            issuer = getattr(ambient, "signer_email", None)
        if signing_key is None:
            signing_key = getattr(ambient, "signer", None)
        if not issuer or signing_key is None:
            missing = "issuer email" if not issuer else "private key"
            raise SigningUnavailableError(
                f"Cannot sign URL: no {missing} available. Pass issuer and "
                "signing_key, or use service account credentials."
            )
        return cls(issuer=issuer, signer=load_signer(signing_key))


class SignableRequest(BaseModel):
    """The signable fields of one request. ``query`` is carried but unsigned."""

    model_config = ConfigDict(frozen=True)

    http_method: str
    resource_path: str
    expiration: int
    content_md5: str = ""
    content_type: str = ""
    extension_headers: tuple[str, ...] = ()
    query: dict[str, str] = {}

    def canonical_string(self) -> str:
        return "\n".join(
            [
                self.http_method,
                self.content_md5,
                self.content_type,
                str(self.expiration),
                "".join(self.extension_headers) + self.resource_path,
            ]
        )


def canonicalize_extension_headers(headers: Mapping[str, Any] | None) -> tuple[str, ...]:
    """Return sorted ``name:value\\n`` lines for the signable ``x-goog-`` headers.

    Names are lower-cased, so differently-cased duplicates merge. Multiple
    values are joined with ``,`` and whitespace runs collapse to one space.
    """
    if not headers:
        return ()
    if not isinstance(headers, Mapping):
        raise InvalidArgumentError("Headers must be given as a mapping.")
    merged: dict[str, list[str]] = {}
    for name, value in headers.items():
        key = str(name).strip().lower()
        if not key.startswith(EXTENSION_HEADER_PREFIX) or key.startswith(_UNSIGNED_HEADER_PREFIX):
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        merged.setdefault(key, []).extend(
            _WHITESPACE.sub(" ", str(v)).strip() for v in values
        )
    return tuple(f"{key}:{','.join(merged[key])}\n" for key in sorted(merged))


def _resource_path(bucket_name: str, object_path: str) -> str:
    if not isinstance(bucket_name, str) or not bucket_name or "/" in bucket_name:
        raise InvalidArgumentError(f"Invalid bucket name: {bucket_name!r}")
    if not isinstance(object_path, str) or not object_path:
        raise InvalidArgumentError("Object path must be a non-empty string.")
    if _UNSAFE_PATH_CHARS.search(bucket_name) or _UNSAFE_PATH_CHARS.search(object_path):
        raise InvalidArgumentError("Bucket and object path may not contain CR or LF.")
    return f"/{quote(bucket_name, safe='')}/{quote(object_path, safe='/~')}"


class SignedUrlBuilder:
    """Builds V2 query-parameter signed URLs.

    Credentials resolve per call, most explicit first: call arguments, then
    the ``issuer``/``signing_key`` configured here, then the ambient
    ``credentials``.

    ``expires`` is always relative: seconds from ``clock()``.
    """

    def __init__(
        self,
        credentials: Any | None = None,
        *,
        issuer: str | None = None,
        signing_key: Any | None = None,
        host: str = DEFAULT_HOST,
        scheme: str = "https",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.credentials = credentials
        self.issuer = issuer
        self.signing_key = signing_key
        self.host = host
        self.scheme = scheme
        self.clock = clock

    def build_request(
        self,
        bucket_name: str,
        object_path: str,
        method: str = "GET",
        expires: int = DEFAULT_EXPIRES,
        content_type: str | None = None,
        content_md5: str | None = None,
        headers: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> SignableRequest:
        """Validate arguments and assemble the request to be signed."""
        if not isinstance(method, str) or method.upper() not in SIGNABLE_METHODS:
            raise InvalidArgumentError(
                f"Unsupported method {method!r}; expected one of {sorted(SIGNABLE_METHODS)}"
            )
        if (
            isinstance(expires, bool)
            or not isinstance(expires, int)
            or not 0 < expires <= MAX_EXPIRES
        ):
            raise InvalidArgumentError(
                f"expires must be between 1 and {MAX_EXPIRES} seconds, got {expires!r}"
            )
        extra_query = {str(k): str(v) for k, v in (query or {}).items()}
        reserved = _RESERVED_QUERY_PARAMS.intersection(extra_query)
        if reserved:
            raise InvalidArgumentError(
                f"Query parameters {sorted(reserved)} are reserved for the signature."
            )
        return SignableRequest(
            http_method=method.upper(),
            resource_path=_resource_path(bucket_name, object_path),
            expiration=int(self.clock()) + expires,
            content_md5=content_md5 or "",
            content_type=content_type or "",
            extension_headers=canonicalize_extension_headers(headers),
            query=extra_query,
        )

    @staticmethod
    def sign(request: SignableRequest, credential: SigningCredential) -> str:
        """Return the base64-encoded signature of the request's canonical string."""
        raw = credential.signer.sign(request.canonical_string().encode("utf-8"))
        return base64.b64encode(raw).decode("ascii")

    def signed_url(
        self,
        bucket_name: str,
        object_path: str,
        method: str = "GET",
        expires: int = DEFAULT_EXPIRES,
        content_type: str | None = None,
        content_md5: str | None = None,
        headers: Mapping[str, Any] | None = None,
        issuer: str | None = None,
        client_email: str | None = None,
        signing_key: Any | None = None,
        private_key: Any | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> str:
        """Produce a signed URL for one file and one HTTP verb.

        Args:
            bucket_name: Name of the bucket.
            object_path: Path of the file; ``/`` separates segments and is kept.
            method: GET, HEAD, PUT or DELETE (case-insensitive).
            expires: Seconds from now until the URL stops working, at most
                ``MAX_EXPIRES`` (7 days). A URL that has already expired when
                used is not rejected here; the service rejects it.
            content_type: Content-Type the client must send.
            content_md5: Base64 MD5 digest the client must send.
            headers: ``x-goog-`` headers the client must send. Other headers
                are ignored.
            issuer, client_email: Service account email (aliases).
            signing_key, private_key: PEM private key or signer (aliases).
            query: Extra query parameters. They are NOT covered by the
                signature, so anyone holding the URL can change them. The
                names GoogleAccessId, Expires and Signature are reserved.

        Returns:
            ``{scheme}://{host}/{bucket}/{path}?GoogleAccessId=..&Expires=..&Signature=..``

        Raises:
            SigningUnavailableError: If no issuer or key can be resolved.
            InvalidArgumentError: On a bad verb, expiration, path, headers or
                reserved query name.
        """
        credential = SigningCredential.resolve(
            issuer=issuer or client_email or self.issuer,
            signing_key=_first_given(signing_key, private_key, self.signing_key),
            ambient=self.credentials,
        )
        request = self.build_request(
            bucket_name,
            object_path,
            method=method,
            expires=expires,
            content_type=content_type,
            content_md5=content_md5,
            headers=headers,
            query=query,
        )
        sk_logger.debug(
            f"Signing canonical string {request.canonical_string()!r}",
            operation="signed_url",
        )
        if request.query:
            sk_logger.debug(
                f"Query parameters {sorted(request.query)} are not covered by the signature",
                operation="signed_url",
            )

        url = (
            f"{self.scheme}://{self.host}{request.resource_path}"
            f"?GoogleAccessId={quote_plus(credential.issuer)}"
            f"&Expires={request.expiration}"
            f"&Signature={quote_plus(self.sign(request, credential))}"
        )
        for name, value in request.query.items():
            url += f"&{quote_plus(name)}={quote_plus(value)}"
        return url


def _first_given(*values: Any) -> Any:
    return next((v for v in values if v is not None), None)
