"""Logging setup for the command line - all logs go to stderr."""

import logging
import sys


def setup_logging(verbose: bool = False):
    """Setup logging to stderr. Use DEBUG level when verbose, WARNING otherwise."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr, force=True)
