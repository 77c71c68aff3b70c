from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def setup_logging(*, output_dir: Path | None = None, verbose: bool = True) -> logging.Logger:
    """
    Set up logging for costcompare.

    Args:
        output_dir: Optional directory to write costcompare.log to
        verbose: If True (default), show DEBUG level logs. If False, only show INFO and above.
    """
    logger = logging.getLogger("costcompare")
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)
    ch.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(ch)

    if output_dir is not None:
        attach_run_logfile(logger, output_dir)

    logger.propagate = False
    return logger


def attach_run_logfile(logger: logging.Logger, output_dir: Path) -> None:
    """
    Adds a logfile handler for the run if one is not already present.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    logfile = output_dir / "costcompare.log"
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and Path(h.baseFilename) == Path(os.path.abspath(logfile)):
            return

    fh = logging.FileHandler(logfile)
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(fh)
