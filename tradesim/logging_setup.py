"""Root logger setup for tradesim runs."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional


def teardown_logging(logger: Optional[logging.Logger] = None) -> None:
    """Detach and close every handler on `logger` (root by default)."""
    target = logger or logging.getLogger()
    for handler in list(target.handlers):
        target.removeHandler(handler)
        # The stream may already be closed (e.g. a swapped-out stderr).
        try:
            handler.flush()
        except (ValueError, OSError):
            pass
        try:
            handler.close()
        except (ValueError, OSError):
            pass


def setup_logging(
    log_level: str = "WARNING",
    logs_dir: Optional[Path] = None,
    console_output: bool = True,
) -> logging.Logger:
    """Configure the root logger.

    Console output goes to stderr so stdout carries only the report.
    A rotating `tradesim.log` is written only when `logs_dir` is given.
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)
    logger = logging.getLogger()
    logger.setLevel(level)

    # Repeated runs in one process must not stack handlers.
    teardown_logging(logger)

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if logs_dir is not None:
        logs_dir = Path(logs_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "tradesim.log",
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
            delay=True,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.debug("Logging initialized at %s level", log_level)
    return logger
