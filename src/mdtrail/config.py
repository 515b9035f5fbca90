"""Configuration for mdtrail.

This module contains all configurable constants for link discovery.
Magic numbers are documented here rather than scattered throughout the codebase.
"""

import os

from . import __version__
from .errors import ErrorCode, MdtrailError


class ConfigurationError(MdtrailError):
    """Raised when an environment override has an invalid value."""

    code = ErrorCode.CONFIGURATION


# =============================================================================
# Traversal
# =============================================================================

# Default number of hops explored from the root document
DEFAULT_MAX_DEPTH = 2

# File suffixes treated as markdown by the local discoverer
MARKDOWN_EXTENSIONS = (".md", ".markdown")

# Title used when neither a heading nor a path segment is available
UNTITLED = "Untitled"


# =============================================================================
# HTTP
# =============================================================================

# Client-side timeout applied to every request (seconds)
HTTP_TIMEOUT_SECONDS = 10.0

# Identifying client label sent with every request
USER_AGENT = f"mdtrail/{__version__}"

# Substrings of Content-Type accepted as text
TEXT_CONTENT_TYPE_MARKERS = ("text", "markdown", "plain")

# Bodies with more than this share of control characters
# (other than newline, carriage return, tab) are rejected as binary
BINARY_CONTROL_CHAR_RATIO = 0.1


# =============================================================================
# GitHub
# =============================================================================

GITHUB_RAW_README_TEMPLATE = (
    "https://raw.githubusercontent.com/{owner}/{repo}/refs/heads/{branch}/README.md"
)

# Branches tried, in order, for a repository README
GITHUB_README_BRANCHES = ("main", "master")


# =============================================================================
# Environment overrides
# =============================================================================


def get_default_max_depth() -> int:
    """Get the default traversal depth.

    Reads MDTRAIL_MAX_DEPTH, falling back to DEFAULT_MAX_DEPTH.

    Raises:
        ConfigurationError: If the override is not a non-negative integer.
    """
    raw = os.environ.get("MDTRAIL_MAX_DEPTH")
    if raw is None or not raw.strip():
        return DEFAULT_MAX_DEPTH
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"MDTRAIL_MAX_DEPTH must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigurationError(f"MDTRAIL_MAX_DEPTH must be non-negative, got {value}")
    return value


def get_http_timeout() -> float:
    """Get the HTTP request timeout in seconds.

    Reads MDTRAIL_HTTP_TIMEOUT, falling back to HTTP_TIMEOUT_SECONDS.

    Raises:
        ConfigurationError: If the override is not a positive number.
    """
    raw = os.environ.get("MDTRAIL_HTTP_TIMEOUT")
    if raw is None or not raw.strip():
        return HTTP_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"MDTRAIL_HTTP_TIMEOUT must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"MDTRAIL_HTTP_TIMEOUT must be positive, got {value}")
    return value
