"""Artidock — Docker image references and container tool commands for Artifactory.

Parse image tags into the name, path and registry Artifactory expects, and
build push, image-ID, parent-ID and login invocations of an external
Docker-compatible tool.
"""

import logging

from artidock._version import __version__
from artidock.client import ImageClient
from artidock.executor import ExecutionError
from artidock.image_parser import InvalidReferenceError
from artidock.models import CommandDescriptor, ImageReference, LoginCredentials

__all__ = [
    "CommandDescriptor",
    "ExecutionError",
    "ImageClient",
    "ImageReference",
    "InvalidReferenceError",
    "LoginCredentials",
    "__version__",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
