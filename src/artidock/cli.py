"""Artidock command-line interface.

Subcommands:

1. ``inspect``   - print the name, Artifactory path and registry of an image tag
2. ``push``      - push an image with the container tool
3. ``id``        - print the local image ID
4. ``parent-id`` - print the parent image ID
5. ``login``     - log in to a registry, reading the password from stdin or a prompt
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys

from .client import ImageClient
from .executor import ExecutionError, SubprocessExecutor
from .image_parser import InvalidReferenceError
from .models import DEFAULT_COMMAND_TIMEOUT_SECONDS, DEFAULT_CONTAINER_TOOL, ImageReference, LoginCredentials

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI usage. Only called from main()."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s : %(name)-13s : %(levelname)s :: %(message)s",
    )


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Argument list to parse.  Defaults to ``sys.argv[1:]``.

    Returns:
        Parsed namespace with a ``command`` attribute naming the subcommand.
    """
    parser = argparse.ArgumentParser(
        prog="artidock",
        description="Docker image helpers for Artifactory: reference parsing, push, ID lookup and registry login.",
    )
    parser.add_argument(
        "--tool",
        default=DEFAULT_CONTAINER_TOOL,
        help=f"Docker-compatible container tool to invoke (default: {DEFAULT_CONTAINER_TOOL})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_COMMAND_TIMEOUT_SECONDS,
        help="Seconds to wait for each container tool invocation (default: no timeout)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser("inspect", help="Show the parsed fields of an image tag as JSON")
    inspect_parser.add_argument("image", help="Image tag, e.g. registry.example.com/group/app:1.2")

    for name, help_text in (
        ("push", "Push an image"),
        ("id", "Print the local image ID"),
        ("parent-id", "Print the parent image ID"),
    ):
        image_command = subparsers.add_parser(name, help=help_text)
        image_command.add_argument("image", help="Image tag")

    login_parser = subparsers.add_parser("login", help="Log in to a registry")
    target = login_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--registry", help="Registry host to log in to")
    target.add_argument("--image", help="Image tag to resolve the registry from")
    login_parser.add_argument("--username", required=True, help="Registry username")
    login_parser.add_argument(
        "--password-stdin",
        action="store_true",
        help="Read the password from standard input instead of prompting",
    )

    return parser.parse_args(args)


def _read_password(from_stdin: bool) -> str:
    """Read the registry password from stdin or an interactive prompt."""
    if from_stdin:
        return sys.stdin.read().rstrip("\r\n")
    return getpass.getpass("Password: ")


def _login(client: ImageClient, args: argparse.Namespace) -> None:
    password = _read_password(from_stdin=args.password_stdin)
    if args.image:
        client.login_for_image(ImageReference(args.image), username=args.username, password=password)
    else:
        client.login(LoginCredentials(registry=args.registry, username=args.username, password=password))


def run_command(args: argparse.Namespace, client: ImageClient | None = None) -> int:
    """Execute the selected subcommand.

    Args:
        args: Parsed CLI arguments.
        client: Client to use.  Built from ``--tool`` and ``--timeout`` when ``None``.

    Returns:
        Process exit code (0 on success, 1 on failure).
    """
    if args.command == "inspect":
        print(json.dumps(ImageReference(args.image).to_dict(), indent=2))
        return 0

    if client is None:
        client = ImageClient(executor=SubprocessExecutor(timeout=args.timeout), tool=args.tool)

    try:
        if args.command == "push":
            client.push(ImageReference(args.image))
        elif args.command == "id":
            print(client.image_id(ImageReference(args.image)))
        elif args.command == "parent-id":
            print(client.parent_id(ImageReference(args.image)))
        elif args.command == "login":
            _login(client, args)
        else:
            logger.error(f"Unknown command: {args.command}")
            return 1
    except InvalidReferenceError as e:
        logger.error(f"Invalid image reference: {e}")
        return 1
    except ExecutionError as e:
        logger.error(f"{args.tool} failed: {e}")
        return 1

    return 0


def main() -> None:
    """CLI entry point for artidock."""
    try:
        parsed_args = parse_args()
        _setup_logging(verbose=parsed_args.verbose)
        sys.exit(run_command(args=parsed_args))
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
