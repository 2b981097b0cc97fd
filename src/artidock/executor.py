"""Process execution for command descriptors.

Keeps every ``subprocess`` call behind :class:`CommandExecutor` so that command
building stays host-independent and tests can inject a fake executor.
"""

from __future__ import annotations

import logging
import os
import subprocess
from abc import ABC, abstractmethod

from .models import DEFAULT_COMMAND_TIMEOUT_SECONDS, CommandDescriptor


class ExecutionError(Exception):
    """Raised when an external command cannot be started or exits non-zero.

    Attributes:
        argv: Full argument vector of the failed command.
        returncode: Exit status, or ``None`` if the process never finished.
        stderr: Captured standard error, when available.
    """

    def __init__(self, argv: list[str], returncode: int | None, stderr: str = "", reason: str = "") -> None:
        self.argv = argv
        self.returncode = returncode
        self.stderr = stderr

        message = f"Command {argv[0]!r} {reason or f'exited with status {returncode}'}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)


class CommandExecutor(ABC):
    """Runs :class:`CommandDescriptor` instances."""

    @abstractmethod
    def run(self, descriptor: CommandDescriptor) -> None:
        """Run a command, letting its output reach the terminal or the descriptor's sinks."""

    @abstractmethod
    def run_output(self, descriptor: CommandDescriptor) -> str:
        """Run a command and return its captured standard output."""


class SubprocessExecutor(CommandExecutor):
    """Executor spawning real processes with :mod:`subprocess`.

    The child inherits the current environment overlaid with ``descriptor.env``.

    Args:
        timeout: Seconds to wait for each process, or ``None`` to wait forever.
    """

    def __init__(self, timeout: float | None = DEFAULT_COMMAND_TIMEOUT_SECONDS) -> None:
        self.logger = logging.getLogger(__name__)
        self._timeout = timeout

    @staticmethod
    def _child_env(descriptor: CommandDescriptor) -> dict[str, str]:
        env = dict(os.environ)
        env.update(descriptor.env)
        return env

    def _run(self, descriptor: CommandDescriptor, **kwargs) -> subprocess.CompletedProcess:
        argv = descriptor.argv
        # argv only: the environment may carry secrets
        self.logger.debug(f"Running: {' '.join(argv)}")
        try:
            result = subprocess.run(  # noqa: S603
                argv,
                env=self._child_env(descriptor),
                timeout=self._timeout,
                check=False,
                **kwargs,
            )
        except subprocess.TimeoutExpired as e:
            raise ExecutionError(argv, None, reason=f"timed out after {self._timeout} seconds") from e
        except OSError as e:
            raise ExecutionError(argv, None, reason=f"could not be started: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr if isinstance(result.stderr, str) else ""
            raise ExecutionError(argv, result.returncode, stderr=stderr)
        return result

    def run(self, descriptor: CommandDescriptor) -> None:
        self._run(descriptor, stdout=descriptor.stdout, stderr=descriptor.stderr)

    def run_output(self, descriptor: CommandDescriptor) -> str:
        result = self._run(descriptor, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, errors="replace")
        return result.stdout
