from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO


def setup_logging(level: int = logging.WARNING, stream: Optional[TextIO] = None) -> None:
    """
    Send log records to stderr so they never mix with command output.

    Safe to call more than once: existing root handlers are replaced.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler(stream or sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    logging.captureWarnings(True)
