"""Container image reference parser for Artidock.

Splits a Docker image tag into the pieces Artifactory cares about: the image
name (``app:1.2``), the repository-relative storage path (``group/app/1.2``)
and the registry host the image is pushed to.  All functions are pure and
total over their input, except :func:`resolve_registry_from_tag`.
"""

from __future__ import annotations

import posixpath

DEFAULT_TAG: str = "latest"


class InvalidReferenceError(ValueError):
    """Raised when no registry can be determined from an image tag."""


def _join(*segments: str) -> str:
    """Join path segments with single separators and no leading slash.

    Normalised as a rooted path so ``..`` cannot climb above the repository.
    """
    return posixpath.normpath("/" + posixpath.join(*segments)).lstrip("/")


def image_name(tag: str) -> str:
    """Return the image name with its tag, e.g. ``app:1.2``.

    A colon before the last slash belongs to a ``host:port`` segment, so the
    name gets the default ``:latest`` suffix in that case.
    """
    last_slash = tag.rfind("/")
    last_colon = tag.rfind(":")

    name = tag[last_slash + 1:]
    if last_colon < 0 or last_colon < last_slash:
        return f"{name}:{DEFAULT_TAG}"
    return name


def image_path(tag: str) -> str:
    """Return the Artifactory-relative path of an image, e.g. ``group/app/1.2``.

    Args:
        tag: Full image reference such as ``registry.io/group/app:1.2``.

    Returns:
        The repository path and tag joined as path segments.  Tags without a
        trailing ``:<tag>`` resolve to ``latest``.
    """
    first_slash = tag.find("/")
    last_colon = tag.rfind(":")
    start = first_slash + 1

    if last_colon < 0 or last_colon < first_slash:
        return _join(tag[start:], DEFAULT_TAG)
    return _join(tag[start:last_colon], tag[last_colon + 1:])


def resolve_registry_from_tag(tag: str) -> str:
    """Resolve the registry host an image tag is pushed to.

    Best-effort: ``registry/app:tag`` resolves to ``registry`` (reverse proxy),
    while ``registry/namespace/app:tag`` resolves to ``registry/namespace``,
    which covers proxy-less Artifactory where the repository key follows the
    host.  The two layouts cannot be told apart from the string alone.

    Raises:
        InvalidReferenceError: If the tag contains no slash.
    """
    first_slash = tag.find("/")
    if first_slash < 0:
        raise InvalidReferenceError(
            f"Invalid image tag received for pushing to Artifactory - tag does not include a slash: {tag!r}"
        )

    second_slash = tag.find("/", first_slash + 1)
    if second_slash < 0:
        return tag[:first_slash]
    return tag[:second_slash]
