"""Configuration loading and JSON preprocessing utilities."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from fadm.paths import get_config_path, get_default_repository_path

DEFAULT_PACKAGE_SOURCE = "https://api.nuget.org/v3-flatcontainer"
DEFAULT_DOWNLOAD_TIMEOUT = 120


class ConfigError(Exception):
    """Raised when config loading or parsing fails.

    Provides detailed error messages including line numbers,
    column positions, and caret indicators for syntax errors.
    """
    pass


@dataclass
class FadmConfig:
    """Settings threaded into the engine and its tasks."""
    repository: Path
    package_source: str | None = DEFAULT_PACKAGE_SOURCE
    download_timeout: int = DEFAULT_DOWNLOAD_TIMEOUT

    def __post_init__(self):
        if not isinstance(self.repository, Path):
            raise ValueError("repository must be a Path")
        if self.package_source is not None and (
            not isinstance(self.package_source, str) or not self.package_source.strip()
        ):
            raise ValueError("package_source must be a non-empty string or null")
        if (
            isinstance(self.download_timeout, bool)
            or not isinstance(self.download_timeout, int)
            or self.download_timeout <= 0
        ):
            raise ValueError("download_timeout must be a positive integer")


def validate_config(data: dict) -> FadmConfig:
    """Validate and convert raw dict to FadmConfig.

    Args:
        data: Raw dict from json.loads() containing config data

    Returns:
        FadmConfig with defaults filled in for missing keys

    Raises:
        ConfigError: If validation fails with clear field errors
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a JSON object, got {type(data).__name__}")

    repository = data.get("repository")
    if repository is not None and not isinstance(repository, str):
        raise ConfigError(
            f"repository must be a string or null, got {type(repository).__name__}"
        )

    package_source = data.get("package_source", DEFAULT_PACKAGE_SOURCE)
    if package_source is not None and not isinstance(package_source, str):
        raise ConfigError(
            f"package_source must be a string or null, got {type(package_source).__name__}"
        )

    try:
        return FadmConfig(
            repository=(
                Path(repository).expanduser()
                if repository
                else get_default_repository_path()
            ),
            package_source=package_source,
            download_timeout=data.get("download_timeout", DEFAULT_DOWNLOAD_TIMEOUT),
        )
    except ValueError as e:
        raise ConfigError(str(e))


def preprocess_jsonish(text: str) -> str:
    """
    Preprocess JSON-ish text into strict JSON.

    Handles:
    - // line comments (replaced with spaces)
    - Trailing commas before ] or } (replaced with space)
    - Properly handles strings (escaped quotes don't end strings)

    Replaces stripped characters with spaces to preserve line/column positions
    for error messages.
    """
    result = []
    i = 0
    n = len(text)

    NORMAL = 0
    IN_STRING = 1
    ESCAPE = 2
    SLASH = 3  # Saw '/', checking if next is '/' for comment
    IN_COMMENT = 4

    state = NORMAL

    while i < n:
        char = text[i]

        if state == IN_COMMENT:
            if char == "\n":
                result.append(char)
                state = NORMAL
            else:
                result.append(" ")
            i += 1

        elif state == ESCAPE:
            result.append(char)
            state = IN_STRING
            i += 1

        elif state == IN_STRING:
            if char == "\\":
                result.append(char)
                state = ESCAPE
            elif char == '"':
                result.append(char)
                state = NORMAL
            else:
                result.append(char)
            i += 1

        elif state == SLASH:
            if char == "/":
                result[-1] = " "
                result.append(" ")
                state = IN_COMMENT
            else:
                result.append(char)
                state = NORMAL
            i += 1

        else:  # state == NORMAL
            if char == '"':
                result.append(char)
                state = IN_STRING
            elif char == "/":
                result.append(char)
                state = SLASH
            elif char == ",":
                # Trailing if only whitespace and comments precede ] or }
                j = i + 1
                while j < n:
                    if text[j] in " \t\r\n":
                        j += 1
                    elif text[j] == "/" and j + 1 < n and text[j + 1] == "/":
                        j += 2
                        while j < n and text[j] != "\n":
                            j += 1
                    else:
                        break
                if j < n and text[j] in "]}":
                    result.append(" ")
                else:
                    result.append(char)
            else:
                result.append(char)
            i += 1

    return "".join(result)


def _format_syntax_error(original_text: str, error: json.JSONDecodeError) -> str:
    """Format a JSON syntax error with line, caret, and context."""
    lines = original_text.split('\n')
    line_num = error.lineno
    col_num = error.colno

    msg_parts = [
        f"Config syntax error at line {line_num}, col {col_num}: {error.msg}"
    ]

    if 1 <= line_num <= len(lines):
        msg_parts.append(lines[line_num - 1])
        msg_parts.append(' ' * (col_num - 1) + '^')

    return '\n'.join(msg_parts)


def parse_config_text(path_or_text: Path | str) -> dict:
    """Load and parse a JSON-ish config file or string.

    Raises:
        ConfigError: If the file cannot be read or contains syntax errors.
        TypeError: If path_or_text is neither Path nor str.
    """
    if isinstance(path_or_text, Path):
        file_path = path_or_text
        try:
            original_text = file_path.read_text(encoding='utf-8')
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {file_path}")
        except PermissionError:
            raise ConfigError(f"Permission denied reading config file: {file_path}")
        except UnicodeDecodeError:
            raise ConfigError(f"Config file is not valid UTF-8: {file_path}")
        except IOError as e:
            raise ConfigError(f"Error reading config file {file_path}: {e}")
    elif isinstance(path_or_text, str):
        original_text = path_or_text
    else:
        raise TypeError(f"path_or_text must be Path or str, got {type(path_or_text).__name__}")

    try:
        result = json.loads(preprocess_jsonish(original_text))
    except json.JSONDecodeError as e:
        raise ConfigError(_format_syntax_error(original_text, e)) from e

    if not isinstance(result, dict):
        raise ConfigError(f"Config must be a JSON object, got {type(result).__name__}")

    return result


def load_config(path: Path | None = None, repository: Path | None = None) -> FadmConfig:
    """Load the user configuration, falling back to defaults.

    A missing config file is not an error. ``repository`` (typically the
    ``--repository`` CLI option) overrides whatever the file and the
    environment say.
    """
    config_path = path if path is not None else get_config_path()
    if config_path.exists():
        config = validate_config(parse_config_text(config_path))
        if "FADM_REPOSITORY" in os.environ:
            config.repository = get_default_repository_path()
    else:
        config = FadmConfig(repository=get_default_repository_path())

    if repository is not None:
        config.repository = Path(repository).expanduser()
    return config


__all__ = [
    'ConfigError',
    'FadmConfig',
    'DEFAULT_PACKAGE_SOURCE',
    'DEFAULT_DOWNLOAD_TIMEOUT',
    'validate_config',
    'preprocess_jsonish',
    'parse_config_text',
    'load_config',
]
