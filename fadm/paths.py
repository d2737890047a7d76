"""Configuration and repository path helpers for fadm."""

import os
from pathlib import Path


def get_config_dir() -> Path:
    """Return XDG-compliant config directory: ~/.config/fadm"""
    return Path.home() / ".config" / "fadm"


def get_config_path() -> Path:
    """Return path to user config file.

    Priority:
    1. FADM_CONFIG environment variable (if set)
    2. ~/.config/fadm/config.json (default XDG location)
    """
    if "FADM_CONFIG" in os.environ:
        return Path(os.environ["FADM_CONFIG"])
    return get_config_dir() / "config.json"


def get_default_repository_path() -> Path:
    """Return the repository used when nothing else is configured.

    Priority:
    1. FADM_REPOSITORY environment variable (if set)
    2. ~/.config/fadm/repository
    """
    if "FADM_REPOSITORY" in os.environ:
        return Path(os.environ["FADM_REPOSITORY"]).expanduser()
    return get_config_dir() / "repository"
