"""Logging setup for the skyline command line.

Usage:
    from skyline.logging_config import setup_logging

    setup_logging()            # INFO to stderr
    setup_logging(debug=True)  # DEBUG to stderr
"""

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO, fmt: str = DEFAULT_FORMAT, *, debug: bool = False) -> None:
    """Configure the root logger. Call once at the start of the entry point.

    stdout is left alone so the ASCII preview can be piped cleanly.
    """
    if debug:
        level = logging.DEBUG

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    logging.basicConfig(level=level, format=fmt, handlers=handlers, force=True)

    if debug:
        logging.getLogger("skyline").debug("Debug logging enabled")
