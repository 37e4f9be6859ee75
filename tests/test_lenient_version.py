"""Tests for lenient version parsing and ordering."""

import pytest

from common.errors import ParseError
from versioning.models import LenientVersion


def v(text):
    return LenientVersion.parse(text)


class TestParse:
    """Tolerant parsing."""

    def test_missing_minor_and_patch_default_to_zero(self):
        version = v("2")
        assert (version.major, version.minor, version.patch) == (2, 0, 0)
        assert str(v("2.0")) == "2.0.0"

    def test_tag_prefixes_are_ignored(self):
        assert v("v1.2.3") == v("1.2.3")
        assert v("release-1.2") == v("1.2.0")
        assert v("version_3").major == 3

    def test_original_text_is_preserved(self):
        version = v("v1.2")
        assert version.original_value() == "v1.2"
        assert str(version) == "1.2.0"

    def test_prerelease_and_extra_components(self):
        assert v("2.0rc1").prerelease == ("rc1",)
        assert v("2.0rc1").is_prerelease
        assert v("1.2.3.4").build == ("4",)
        assert not v("1.2.3.4").is_prerelease

    @pytest.mark.parametrize("text", ["", "   ", "nightly", "latest"])
    def test_no_numeric_major_fails(self, text):
        with pytest.raises(ParseError):
            v(text)

    def test_parse_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            v("abc")


class TestCleanOriginalValue:
    """Stripping a cosmetic leading ``v``."""

    @pytest.mark.parametrize("text,expected", [
        ("v2.0.0", "2.0.0"),
        ("2.0.0", "2.0.0"),
        ("v1", "1"),
        ("version-1.0", "version-1.0"),
        ("vv1.0", "vv1.0"),
        ("V1.0", "V1.0"),
    ])
    def test_clean(self, text, expected):
        assert v(text).clean_original_value() == expected


class TestOrdering:
    """Semver precedence."""

    def test_numeric_not_lexical(self):
        assert v("1.2.0") < v("1.10.0")
        assert v("0.9") < v("0.10")

    def test_prerelease_orders_before_release(self):
        assert v("1.0.0-rc.1") < v("1.0.0")
        assert v("1.0.0-alpha") < v("1.0.0-alpha.1") < v("1.0.0-beta.2") < v("1.0.0-beta.11")

    def test_max_of_mixed_prefixes(self):
        versions = [v("v0.2.0"), v("0.10.1"), v("release-0.9")]
        assert max(versions).original_value() == "0.10.1"


class TestIdentity:
    """Equality and hashing ignore the original text and build metadata."""

    def test_differently_prefixed_versions_are_equal(self):
        assert v("1.0") == v("v1.0.0")
        assert hash(v("1.0")) == hash(v("v1.0.0"))
        assert {v("1.0"): "a"}[v("v1.0.0")] == "a"

    def test_build_metadata_is_ignored(self):
        assert v("1.0.0+abc") == v("1.0.0")
        assert not v("1.0.0+abc") < v("1.0.0")
        assert not v("1.0.0") < v("1.0.0+abc")

    def test_prerelease_is_part_of_identity(self):
        assert v("1.0.0-rc1") != v("1.0.0")

    def test_not_equal_to_strings(self):
        assert v("1.0.0") != "1.0.0"
