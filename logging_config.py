"""
Logging configuration for the command line entry point.
"""

import logging
import sys

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(verbose: bool = False):
    """
    Send log records to stderr so they never mix with table output on stdout.
    Quiets pandas and numpy unless running verbose.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.set_name("tabstream")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "tabstream":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name in ("pandas", "numpy", "pyarrow", "openpyxl", "tables"):
        logging.getLogger(name).setLevel(logging.WARNING)
