"""Data models for Artidock image references and external command invocations."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import IO

from .image_parser import InvalidReferenceError, image_name, image_path, resolve_registry_from_tag

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_CONTAINER_TOOL: str = "docker"  # Any Docker-CLI compatible executable (docker, podman, ...).

PASSWORD_ENV_VAR: str = "DOCKER_PASS"  # noqa: S105  Environment variable the login shell reads the password from.

# cmd.exe login also reads registry and username from the environment so that none of them is parsed by cmd.
REGISTRY_ENV_VAR: str = "DOCKER_REGISTRY"
USERNAME_ENV_VAR: str = "DOCKER_USERNAME"

DEFAULT_COMMAND_TIMEOUT_SECONDS: float | None = None  # No timeout unless the caller asks for one.


class HostPlatform(str, Enum):
    """Shell family used to pipe the registry password into ``login``."""

    POSIX = "posix"
    WINDOWS = "windows"

    @classmethod
    def detect(cls) -> HostPlatform:
        """Return the platform of the running interpreter."""
        return cls.WINDOWS if os.name == "nt" else cls.POSIX


@dataclass(frozen=True)
class ImageReference:
    """A container image tag such as ``registry.example.com/group/app:1.2``.

    Derived fields are recomputed from ``tag`` on every access.
    """

    tag: str

    @property
    def name(self) -> str:
        return image_name(self.tag)

    @property
    def path(self) -> str:
        return image_path(self.tag)

    @property
    def registry(self) -> str:
        """Registry host resolved from the tag.

        Raises:
            InvalidReferenceError: If the tag contains no slash.
        """
        return resolve_registry_from_tag(self.tag)

    def to_dict(self) -> dict[str, str | None]:
        """Serialise the reference and its derived fields for JSON output.

        ``registry`` is ``None`` when it cannot be resolved.
        """
        try:
            registry: str | None = self.registry
        except InvalidReferenceError:
            registry = None
        return {"tag": self.tag, "name": self.name, "path": self.path, "registry": registry}


@dataclass(frozen=True)
class LoginCredentials:
    """Registry login triple.  The password is kept out of ``repr()``."""

    registry: str
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class CommandDescriptor:
    """Description of an external process invocation, without running it.

    Attributes:
        program: Executable to spawn.
        args: Arguments passed after the program, in order.
        env: Extra environment variables for the child.  Excluded from ``repr()``.
        stdout: Optional sink for standard output.  ``None`` means the caller decides.
        stderr: Optional sink for standard error.
    """

    program: str
    args: tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=dict, repr=False)
    stdout: IO[str] | None = None
    stderr: IO[str] | None = None

    @property
    def argv(self) -> list[str]:
        """Return the full argument vector, program first."""
        return [self.program, *self.args]
