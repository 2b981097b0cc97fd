"""High-level image operations for Artidock.

Builds the command for each operation and hands it to a
:class:`~artidock.executor.CommandExecutor`.  Errors from the executor and the
registry resolver propagate unchanged.
"""

from __future__ import annotations

import logging

from .commands import GetImageIdCommand, GetParentIdCommand, LoginCommand, PushCommand
from .executor import CommandExecutor, SubprocessExecutor
from .models import DEFAULT_CONTAINER_TOOL, HostPlatform, ImageReference, LoginCredentials


class ImageClient:
    """Push, inspect and log in through an external container tool.

    Args:
        executor: Executor that spawns the commands.  Defaults to a :class:`SubprocessExecutor`.
        tool: Container tool executable (``docker``, ``podman``, ...).
        platform: Shell family for ``login``.  Detected from the host when ``None``.
    """

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        tool: str = DEFAULT_CONTAINER_TOOL,
        platform: HostPlatform | None = None,
    ) -> None:
        self.logger = logging.getLogger(__name__)
        self._executor = executor or SubprocessExecutor()
        self._tool = tool
        self._platform = platform

    def push(self, image: ImageReference) -> None:
        """Push an image; the tool's progress output goes straight to the terminal."""
        self._executor.run(PushCommand(image, tool=self._tool).describe())

    def image_id(self, image: ImageReference) -> str:
        """Return the full local image ID, or ``""`` if the tool knows no such image."""
        output = self._executor.run_output(GetImageIdCommand(image, tool=self._tool).describe())
        return output.strip("\n")

    def parent_id(self, image: ImageReference) -> str:
        """Return the parent image ID, or ``""`` for a base image."""
        output = self._executor.run_output(GetParentIdCommand(image, tool=self._tool).describe())
        return output.strip("\n")

    def login(self, credentials: LoginCredentials) -> None:
        """Log in to ``credentials.registry`` with the password piped to stdin."""
        command = LoginCommand(credentials, tool=self._tool, platform=self._platform)
        self._executor.run(command.describe())
        self.logger.info(f"Logged in to {credentials.registry} as {credentials.username}")

    def login_for_image(self, image: ImageReference, username: str, password: str) -> str:
        """Log in to the registry an image tag points at.

        Returns:
            The registry resolved from the tag.

        Raises:
            InvalidReferenceError: If no registry can be resolved from the tag.
        """
        registry = image.registry
        self.login(LoginCredentials(registry=registry, username=username, password=password))
        return registry
