"""Logging configuration for the taskline command line."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """Configure root logging.

    - stderr handler at ``level``, so diagnostics never mix with the task
      output on stdout
    - optional file handler receiving everything from DEBUG up

    Call this once, before the session starts.

    Args:
        level: Level for the stderr handler, as an int or a level name
        log_file: Path of a log file to write, or None for no file
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
