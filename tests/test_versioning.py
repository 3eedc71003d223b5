"""Tests for the semantic version helpers."""

import pytest
import semver

from utils.versioning import (
    ReleaseType,
    VersionError,
    first_prerelease_identifier,
    parse_version,
    prerelease_identifiers,
    require_version,
    sort_versions_descending,
)


class TestParseVersion:
    def test_plain_version(self):
        assert parse_version("1.2.3") == semver.Version(1, 2, 3)

    def test_leading_v_and_whitespace(self):
        assert parse_version("  v2.0.0-beta.1\n") == semver.Version(2, 0, 0, prerelease="beta.1")

    @pytest.mark.parametrize("text", [None, "", "main", "1.2", "v", "release-1.0.0"])
    def test_not_a_version(self, text):
        assert parse_version(text) is None

    def test_require_version_names_source(self):
        with pytest.raises(VersionError, match="from the current-version input") as exc_info:
            require_version("latest", "the current-version input")
        assert exc_info.value.code == "INVALID_VERSION"


def test_prerelease_identifiers_convert_numbers():
    version = semver.Version.parse("1.0.0-beta.2.x7")
    assert prerelease_identifiers(version) == ["beta", 2, "x7"]
    assert prerelease_identifiers(semver.Version(1, 0, 0)) == []


def test_first_prerelease_identifier():
    assert first_prerelease_identifier(semver.Version.parse("2.0.0-beta")) == "beta"
    assert first_prerelease_identifier(semver.Version.parse("2.0.0-1.beta")) == "1"
    assert first_prerelease_identifier(semver.Version.parse("2.0.0")) is None


def test_sort_follows_semver_precedence():
    texts = ["1.0.0-alpha", "1.0.0", "1.0.0-alpha.10", "1.0.0-alpha.2", "0.9.9", "1.0.0-beta"]
    ordered = [str(v) for v in sort_versions_descending(semver.Version.parse(t) for t in texts)]
    assert ordered == ["1.0.0", "1.0.0-beta", "1.0.0-alpha.10", "1.0.0-alpha.2", "1.0.0-alpha", "0.9.9"]


def test_release_type_renders_as_value():
    assert str(ReleaseType.PRERELEASE) == "prerelease"
    assert f"{ReleaseType.MAJOR}" == "major"
