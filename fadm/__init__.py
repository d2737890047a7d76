"""fadm: local dependency manager for compiled binary artifacts."""

import logging
import sys

from fadm.config import ConfigError, FadmConfig, load_config
from fadm.engine import Engine
from fadm.errors import DescriptorError, IdentityError
from fadm.model import Architecture, Dependency, Project
from fadm.render import format_result, render
from fadm.repository import Repository
from fadm.result import Result, Status

__version__ = "0.1.0"

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(debug: bool = False) -> None:
    """Configure logging to stderr; DEBUG when ``debug`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


__all__ = [
    "__version__",
    "setup_logging",
    "Architecture",
    "ConfigError",
    "DescriptorError",
    "Dependency",
    "Engine",
    "FadmConfig",
    "IdentityError",
    "Project",
    "Repository",
    "Result",
    "Status",
    "format_result",
    "load_config",
    "render",
]
