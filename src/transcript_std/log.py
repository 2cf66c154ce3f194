"""Logging setup for transcript-std.

All modules log through ``logging.getLogger(__name__)``.  The CLI calls
:func:`setup_logging` once; library users may configure logging however
they like.  Records use pipe-separated fields with ISO 8601 timestamps.
"""

from __future__ import annotations

import contextlib
import logging
import sys
import time
from collections.abc import Iterator
from typing import TextIO

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Marks the handler installed by setup_logging so repeat calls reuse it.
_HANDLER_ATTR = "_transcript_std_handler"


def _resolve_level(level: str) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value.

    Raises:
        ValueError: If *level* is not a standard logging level name.
    """
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Invalid log level: {level!r}")
    return numeric


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure the root logger for console output.

    Safe to call repeatedly: the handler installed by a previous call is
    updated in place instead of a second one being added.

    Args:
        level: A standard logging level name (``"DEBUG"``, ``"INFO"``,
            ``"WARNING"``, ...).  Case-insensitive.
        stream: Destination stream.  Defaults to ``sys.stderr`` so that
            log output never mixes with a document written to stdout.

    Raises:
        ValueError: If *level* is not a recognised logging level.
    """
    numeric_level = _resolve_level(level)

    root = logging.getLogger()
    root.setLevel(numeric_level)

    for handler in root.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            handler.setLevel(numeric_level)
            return

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger called *name* (normally the caller's ``__name__``)."""
    return logging.getLogger(name)


@contextlib.contextmanager
def log_stage(logger: logging.Logger, stage: str) -> Iterator[None]:
    """Log the start and completion of a pipeline stage at INFO.

    The completion record carries the elapsed wall-clock time.  If the
    stage raises, the exception propagates after a WARNING record naming
    the stage.

    Args:
        logger: Logger to write to.
        stage: Short human-readable stage name.
    """
    logger.info("%s: started", stage)
    started = time.monotonic()
    try:
        yield
    except Exception:
        logger.warning("%s: failed after %.3fs", stage, time.monotonic() - started)
        raise
    logger.info("%s: complete in %.3fs", stage, time.monotonic() - started)
