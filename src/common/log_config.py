"""
Logging Configuration

Configures the `src` logger tree for the scripts:

- src.catalog.api_client: HTTP error statuses and network failures
- src.catalog.fetcher: per-page counts (DEBUG), load summary (INFO),
  truncated pagination warnings
- src.listing.session: failed and superseded loads, clipboard results

Output goes to stderr so stdout carries only the rendered product list,
which can then be piped or redirected as-is.
"""

import logging
import sys


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, set level to DEBUG (including HTTP connection logs)
        quiet: If True, set level to WARNING
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))

    logger = logging.getLogger("src")
    logger.setLevel(level)

    # Avoid duplicate handlers if called multiple times
    logger.handlers.clear()
    logger.addHandler(handler)

    # requests' connection pool is only interesting when debugging
    urllib3_logger = logging.getLogger("urllib3")
    urllib3_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    urllib3_logger.handlers.clear()
    if verbose:
        urllib3_logger.addHandler(handler)
