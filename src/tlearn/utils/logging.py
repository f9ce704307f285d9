"""Logging configuration.

Shell logs are written to ~/.tlearn/logs/tlearn.log so that they never
interleave with terminal output. With debug enabled, DEBUG records also go
to stderr.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

# Directory for log files
LOGS_DIR = Path.home() / ".tlearn" / "logs"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Module-level state
_file_handler: Optional[logging.FileHandler] = None


def get_log_path() -> Path:
    """Get the shell log file path, creating its directory."""
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    return LOGS_DIR / "tlearn.log"


def configure_logging(debug: bool = False, level: int = logging.INFO) -> Path:
    """Attach a file handler to the ``tlearn`` logger.

    Calling this again replaces the previous handler.

    Args:
        debug: Also log DEBUG records to stderr.
        level: Level for the file handler (DEBUG when debug is set).

    Returns:
        Path to the log file.
    """
    global _file_handler

    close_logging()

    if debug:
        level = logging.DEBUG
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)

    log_path = get_log_path()
    _file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    _file_handler.setLevel(level)
    _file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    shell_logger = logging.getLogger("tlearn")
    shell_logger.addHandler(_file_handler)
    shell_logger.setLevel(level)

    # httpx logs every request at INFO; keep it out of the terminal
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)

    return log_path


def close_logging() -> None:
    """Detach and close the file handler, if any."""
    global _file_handler

    if _file_handler is not None:
        logging.getLogger("tlearn").removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
