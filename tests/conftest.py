"""Shared pytest fixtures for the Artidock test suite."""

from __future__ import annotations

import pytest

from artidock.executor import CommandExecutor
from artidock.models import CommandDescriptor, ImageReference


class RecordingExecutor(CommandExecutor):
    """Fake executor that records descriptors instead of spawning processes.

    Attributes:
        calls: ``(method, descriptor)`` tuples in call order.
        output: Text returned by ``run_output``.
        error: Exception raised by every call when set.
    """

    def __init__(self, output: str = "") -> None:
        self.calls: list[tuple[str, CommandDescriptor]] = []
        self.output = output
        self.error: Exception | None = None

    def run(self, descriptor: CommandDescriptor) -> None:
        self.calls.append(("run", descriptor))
        if self.error:
            raise self.error

    def run_output(self, descriptor: CommandDescriptor) -> str:
        self.calls.append(("run_output", descriptor))
        if self.error:
            raise self.error
        return self.output


@pytest.fixture()
def recording_executor() -> RecordingExecutor:
    """Return a fresh :class:`RecordingExecutor` with empty output."""
    return RecordingExecutor()


@pytest.fixture()
def sample_image() -> ImageReference:
    """Return a proxy-less Artifactory image reference.

    Returns:
        ``ImageReference`` for ``registry.example.com/docker-local/app:1.2``.
    """
    return ImageReference("registry.example.com/docker-local/app:1.2")
