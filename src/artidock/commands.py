"""Command builders for the external container tool.

Each command only describes the process to run (see :class:`CommandDescriptor`);
spawning it is left to a :class:`~artidock.executor.CommandExecutor`.
"""

from __future__ import annotations

import shlex
from abc import ABC, abstractmethod

from .models import (
    DEFAULT_CONTAINER_TOOL,
    PASSWORD_ENV_VAR,
    REGISTRY_ENV_VAR,
    USERNAME_ENV_VAR,
    CommandDescriptor,
    HostPlatform,
    ImageReference,
    LoginCredentials,
)


class ContainerCommand(ABC):
    """Base class for every container tool invocation."""

    def __init__(self, tool: str = DEFAULT_CONTAINER_TOOL) -> None:
        self.tool = tool

    @abstractmethod
    def describe(self) -> CommandDescriptor:
        """Build the descriptor of the process to run."""


class _ImageCommand(ContainerCommand):
    """Command operating on a single image; the raw tag is always the last argument."""

    def __init__(self, image: ImageReference, tool: str = DEFAULT_CONTAINER_TOOL) -> None:
        super().__init__(tool=tool)
        self.image = image

    @property
    @abstractmethod
    def subcommand(self) -> tuple[str, ...]:
        """Arguments placed before the image tag."""

    def describe(self) -> CommandDescriptor:
        return CommandDescriptor(program=self.tool, args=(*self.subcommand, self.image.tag))


class PushCommand(_ImageCommand):
    """``docker push <tag>``; output streams straight to the terminal."""

    @property
    def subcommand(self) -> tuple[str, ...]:
        return ("push",)


class GetImageIdCommand(_ImageCommand):
    """``docker images --format {{.ID}} --no-trunc <tag>``."""

    @property
    def subcommand(self) -> tuple[str, ...]:
        return ("images", "--format", "{{.ID}}", "--no-trunc")


class GetParentIdCommand(_ImageCommand):
    """``docker inspect --format {{.Parent}} <tag>``; empty output means a base image."""

    @property
    def subcommand(self) -> tuple[str, ...]:
        return ("inspect", "--format", "{{.Parent}}")


class LoginCommand(ContainerCommand):
    """Registry login that feeds the password to ``--password-stdin`` through a shell pipe.

    The password travels only in the child environment under
    :data:`PASSWORD_ENV_VAR` and is expanded by the shell, so it never shows up
    in the argument list. bash writes it with ``printf`` so values such as ``-n``
    are not taken as options. cmd also reads the registry and username from the
    environment, which keeps every user-supplied value away from its parser.

    Args:
        credentials: Registry, username and password.
        tool: Container tool executable.
        platform: Shell family to target.  Detected from the host when ``None``.
    """

    def __init__(
        self,
        credentials: LoginCredentials,
        tool: str = DEFAULT_CONTAINER_TOOL,
        platform: HostPlatform | None = None,
    ) -> None:
        super().__init__(tool=tool)
        self.credentials = credentials
        self.platform = platform or HostPlatform.detect()

    def _posix_descriptor(self) -> CommandDescriptor:
        login = shlex.join(
            [
                self.tool,
                "login",
                self.credentials.registry,
                f"--username={self.credentials.username}",
                "--password-stdin",
            ]
        )
        script = f"printf '%s\\n' \"${PASSWORD_ENV_VAR}\" | {login}"
        return CommandDescriptor(
            program="bash",
            args=("-c", script),
            env={PASSWORD_ENV_VAR: self.credentials.password},
        )

    def _windows_descriptor(self) -> CommandDescriptor:
        # Each side of a cmd pipe runs in a child cmd without delayed expansion, so each
        # side gets its own /V:ON shell; !VAR! values are substituted after parsing.
        echo = f"cmd /V:ON /C echo(!{PASSWORD_ENV_VAR}!"
        login = (
            f"cmd /V:ON /C {self.tool} login !{REGISTRY_ENV_VAR}! "
            f"--username=!{USERNAME_ENV_VAR}! --password-stdin"
        )
        return CommandDescriptor(
            program="cmd",
            args=("/C", f"{echo}| {login}"),
            env={
                PASSWORD_ENV_VAR: self.credentials.password,
                REGISTRY_ENV_VAR: self.credentials.registry,
                USERNAME_ENV_VAR: self.credentials.username,
            },
        )

    def describe(self) -> CommandDescriptor:
        if self.platform == HostPlatform.WINDOWS:
            return self._windows_descriptor()
        return self._posix_descriptor()
