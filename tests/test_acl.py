import pytest

from storagekit.base.exceptions import InvalidArgumentError
from storagekit.gcp.acl import bucket_acl_rule, default_acl_rule, storage_class_for


class TestBucketAclRule:
    @pytest.mark.parametrize(
        "alias,expected",
        [
            ("auth", "authenticatedRead"),
            ("authenticated_read", "authenticatedRead"),
            ("private", "private"),
            ("project_private", "projectPrivate"),
            ("public", "publicRead"),
            ("public_read", "publicRead"),
            ("public_write", "publicReadWrite"),
            ("publicReadWrite", "publicReadWrite"),
        ],
    )
    def test_aliases(self, alias, expected):
        assert bucket_acl_rule(alias) == expected

    def test_none(self):
        assert bucket_acl_rule(None) is None

    def test_owner_rules_are_object_only(self):
        with pytest.raises(InvalidArgumentError):
            bucket_acl_rule("owner_full")

    def test_unknown(self):
        with pytest.raises(InvalidArgumentError, match="everyone"):
            bucket_acl_rule("everyone")


class TestDefaultAclRule:
    @pytest.mark.parametrize(
        "alias,expected",
        [
            ("authenticatedRead", "authenticatedRead"),
            ("owner_full", "bucketOwnerFullControl"),
            ("bucketOwnerFullControl", "bucketOwnerFullControl"),
            ("owner_read", "bucketOwnerRead"),
            ("private", "private"),
            ("projectPrivate", "projectPrivate"),
            ("public", "publicRead"),
        ],
    )
    def test_aliases(self, alias, expected):
        assert default_acl_rule(alias) == expected

    def test_public_write_not_allowed(self):
        with pytest.raises(InvalidArgumentError):
            default_acl_rule("public_write")


class TestStorageClassFor:
    @pytest.mark.parametrize(
        "alias,expected",
        [
            ("dra", "DURABLE_REDUCED_AVAILABILITY"),
            ("durable", "DURABLE_REDUCED_AVAILABILITY"),
            ("Nearline", "NEARLINE"),
            ("coldline", "COLDLINE"),
            ("archive", "ARCHIVE"),
            ("multi_regional", "MULTI_REGIONAL"),
            ("regional", "REGIONAL"),
            ("STANDARD", "STANDARD"),
        ],
    )
    def test_aliases(self, alias, expected):
        assert storage_class_for(alias) == expected

    def test_unknown_passes_through(self):
        assert storage_class_for("FUTURE_CLASS") == "FUTURE_CLASS"

    def test_none(self):
        assert storage_class_for(None) is None
