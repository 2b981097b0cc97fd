"""Unit tests for the image_parser module.

Covers image name and Artifactory path extraction and registry resolution for
reverse-proxy and proxy-less tag layouts.
"""

from __future__ import annotations

import pytest

from artidock.image_parser import InvalidReferenceError, image_name, image_path, resolve_registry_from_tag

# ---------------------------------------------------------------------------
# Image name
# ---------------------------------------------------------------------------


class TestImageName:
    """Tests for ``image_name``."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            pytest.param("registry.io/group/app:1.2", "app:1.2", id="tagged"),
            pytest.param("registry.io/group/app", "app:latest", id="untagged"),
            pytest.param("registry.io:5000/group/app", "app:latest", id="port-colon-before-slash"),
            pytest.param("registry.io:5000/app:2.0", "app:2.0", id="port-and-tag"),
            pytest.param("app", "app:latest", id="bare-no-tag"),
            pytest.param("app:7", "app:7", id="bare-with-tag"),
            pytest.param("registry.io/group/", ":latest", id="trailing-slash"),
            pytest.param("", ":latest", id="empty"),
        ],
    )
    def test_image_name(self, tag: str, expected: str) -> None:
        """Verify the name is the last segment, defaulting the tag to latest."""
        assert image_name(tag) == expected


# ---------------------------------------------------------------------------
# Image path
# ---------------------------------------------------------------------------


class TestImagePath:
    """Tests for ``image_path``."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            pytest.param("registry.io/group/app:1.2", "group/app/1.2", id="tagged"),
            pytest.param("registry.io/group/app", "group/app/latest", id="untagged"),
            pytest.param("registry.io/app:1.2", "app/1.2", id="single-segment"),
            pytest.param("registry.io:5000/group/app", "group/app/latest", id="port-colon-before-slash"),
            pytest.param("registry.io:5000/group/app:3", "group/app/3", id="port-and-tag"),
            pytest.param("registry.io//group//app:1.2", "group/app/1.2", id="duplicate-separators"),
            pytest.param("app:1.2", "app/1.2", id="no-slash-tagged"),
            pytest.param("app", "app/latest", id="no-slash-untagged"),
            pytest.param("", "latest", id="empty"),
            pytest.param("registry.io/../../etc/app:1", "etc/app/1", id="parent-segments-at-root"),
            pytest.param("registry.io/group/../app", "app/latest", id="parent-segment-inside"),
            pytest.param("registry.io/..:1", "1", id="only-parent-segment"),
        ],
    )
    def test_image_path(self, tag: str, expected: str) -> None:
        """Verify the path is the repository path joined with the tag."""
        assert image_path(tag) == expected

    def test_path_never_has_leading_slash(self) -> None:
        """Verify the registry separator is not carried into the path."""
        assert not image_path("registry.io/group/app:1.2").startswith("/")

    @pytest.mark.parametrize("tag", ["registry.io/../../etc/app:1", "registry.io/a/../../../b", "r/..//..:x"])
    def test_path_never_leaves_repository(self, tag: str) -> None:
        """Verify ``..`` segments cannot climb above the repository root."""
        assert not image_path(tag).startswith("..")


# ---------------------------------------------------------------------------
# Registry resolution
# ---------------------------------------------------------------------------


class TestResolveRegistryFromTag:
    """Tests for ``resolve_registry_from_tag``."""

    def test_reverse_proxy_single_slash(self) -> None:
        """Verify a single slash resolves to the host alone."""
        assert resolve_registry_from_tag("registry.io/app:1.2") == "registry.io"

    def test_proxy_less_two_slashes(self) -> None:
        """Verify two slashes resolve to host plus repository key."""
        assert resolve_registry_from_tag("registry.io/group/app:1.2") == "registry.io/group"

    def test_deep_path_stops_at_second_slash(self) -> None:
        """Verify only the first two segments make up the registry."""
        assert resolve_registry_from_tag("registry.io/group/sub/app:1.2") == "registry.io/group"

    def test_port_is_kept(self) -> None:
        """Verify a host:port registry is returned unchanged."""
        assert resolve_registry_from_tag("localhost:8081/app") == "localhost:8081"

    @pytest.mark.parametrize("tag", ["no-slash-here", "app:1.2", ""])
    def test_no_slash_raises(self, tag: str) -> None:
        """Verify tags without a slash are rejected."""
        with pytest.raises(InvalidReferenceError, match="does not include a slash"):
            resolve_registry_from_tag(tag)

    def test_invalid_reference_is_value_error(self) -> None:
        """Verify InvalidReferenceError can be caught as ValueError."""
        with pytest.raises(ValueError):
            resolve_registry_from_tag("app")
