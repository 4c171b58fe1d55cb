"""Predefined ACL and storage class name mapping.

Accepts the friendly aliases callers tend to write (``public``,
``owner_full``, ``nearline``) and returns the names the JSON API expects.
"""

from __future__ import annotations

from storagekit.base.exceptions import InvalidArgumentError

_BUCKET_ACL_RULES: dict[str, str] = {
    "auth": "authenticatedRead",
    "auth_read": "authenticatedRead",
    "authenticated": "authenticatedRead",
    "authenticated_read": "authenticatedRead",
    "authenticatedRead": "authenticatedRead",
    "private": "private",
    "project_private": "projectPrivate",
    "projectPrivate": "projectPrivate",
    "public": "publicRead",
    "public_read": "publicRead",
    "publicRead": "publicRead",
    "public_write": "publicReadWrite",
    "publicReadWrite": "publicReadWrite",
}

_DEFAULT_ACL_RULES: dict[str, str] = {
    **{k: v for k, v in _BUCKET_ACL_RULES.items() if v != "publicReadWrite"},
    "owner_full": "bucketOwnerFullControl",
    "bucketOwnerFullControl": "bucketOwnerFullControl",
    "owner_read": "bucketOwnerRead",
    "bucketOwnerRead": "bucketOwnerRead",
}

_STORAGE_CLASSES: dict[str, str] = {
    "durable_reduced_availability": "DURABLE_REDUCED_AVAILABILITY",
    "dra": "DURABLE_REDUCED_AVAILABILITY",
    "durable": "DURABLE_REDUCED_AVAILABILITY",
    "nearline": "NEARLINE",
    "coldline": "COLDLINE",
    "archive": "ARCHIVE",
    "multi_regional": "MULTI_REGIONAL",
    "regional": "REGIONAL",
    "standard": "STANDARD",
}


def _lookup(rules: dict[str, str], name: str | None, kind: str) -> str | None:
    if name is None:
        return None
    try:
        return rules[str(name)]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown {kind} {name!r}; expected one of {sorted(rules)}"
        ) from None


def bucket_acl_rule(name: str | None) -> str | None:
    """Map a predefined bucket ACL alias to its API name."""
    return _lookup(_BUCKET_ACL_RULES, name, "predefined bucket ACL")


def default_acl_rule(name: str | None) -> str | None:
    """Map a predefined default object ACL alias to its API name."""
    return _lookup(_DEFAULT_ACL_RULES, name, "predefined default object ACL")


def storage_class_for(name: str | None) -> str | None:
    """Map a storage class alias; unknown values pass through unchanged."""
    if name is None:
        return None
    return _STORAGE_CLASSES.get(str(name).lower(), str(name))
