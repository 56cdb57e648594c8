"""Logging configuration for cfgsync."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> None:
    """Attach handlers to the ``cfgsync`` logger.

    Nothing is configured unless ``-v`` or ``--log-file`` was given. One
    ``-v`` logs INFO to stderr, two or more log DEBUG. A log file receives
    the same records at the same level.

    Args:
        verbose: Number of ``-v`` flags
        log_file: Optional file to append log records to
    """
    handlers: list[logging.Handler] = []
    if verbose > 0:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    if not handlers:
        return

    level = logging.DEBUG if verbose >= 2 else logging.INFO
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger("cfgsync")
    logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    started = datetime.now(UTC).strftime(f"{DATE_FORMAT} UTC")
    logger.info("cfgsync starting | %s | level=%s", started, logging.getLevelName(level))
