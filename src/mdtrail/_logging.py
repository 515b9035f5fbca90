"""Logging configuration for mdtrail.

Usage in other modules:
    import logging
    log = logging.getLogger(__name__)

Per-document fetch failures during discovery are reported at WARNING;
traversal progress is reported at DEBUG.

The log level can be configured via the MDTRAIL_LOG_LEVEL environment variable
(DEBUG, INFO, WARNING, ERROR). Default is INFO.
"""

import logging
import os
import sys

_PACKAGE_LOGGER = "mdtrail"


def configure_logging() -> None:
    """Configure logging for the mdtrail package.

    Call this once at application startup (cli.py does).
    Subsequent calls are no-ops.
    """
    root_logger = logging.getLogger(_PACKAGE_LOGGER)

    if root_logger.handlers:
        return

    level_name = os.environ.get("MDTRAIL_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt="[%(levelname)s] %(name)s: %(message)s"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Prevent propagation to root logger (avoids duplicate messages)
    root_logger.propagate = False


def set_quiet_mode(quiet: bool) -> None:
    """Only show errors when quiet, otherwise restore the configured level."""
    root_logger = logging.getLogger(_PACKAGE_LOGGER)
    if quiet:
        level = logging.ERROR
    else:
        level_name = os.environ.get("MDTRAIL_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)
