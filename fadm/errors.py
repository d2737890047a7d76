"""Exceptions and error formatting shared across fadm.

Error Style Guide:
- User-facing errors use 'Error: ' prefix
- Quote paths and names with single quotes
- Use present tense: 'must be', 'is required'
- Include actionable hints where helpful
"""


class DescriptorError(Exception):
    """Raised when a fadm.xml descriptor is malformed or violates the schema."""
    pass


class IdentityError(Exception):
    """Raised when the name/version embedded in a binary cannot be read."""
    pass


def format_error(message: str) -> str:
    """Format an error message with consistent prefix.

    Examples:
        >>> format_error("file not found")
        'Error: file not found'
    """
    return f"Error: {message}"


def format_suggestion(message: str, suggestion: str) -> str:
    """Format an error message with a helpful suggestion.

    Examples:
        >>> format_suggestion("config file is invalid", "run 'fadm --debug install <path>' for details")
        "Error: config file is invalid. Hint: run 'fadm --debug install <path>' for details"
    """
    return f"{format_error(message)}. Hint: {suggestion}"


__all__ = [
    "DescriptorError",
    "IdentityError",
    "format_error",
    "format_suggestion",
]
