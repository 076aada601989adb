"""
logging_utils.py
----------------

Opt-in log output for applications and the CLI.

Library modules only create `logging.getLogger(__name__)` loggers under the
`roughstroke` namespace and never attach handlers. `configure_logging`
installs, on one named logger:

    - a colorama-colored console handler (`ColorFormatter`),
    - optionally a rotating plain-text file handler in `log_dir`.

Calling it again replaces (and closes) previously installed handlers.
"""

__all__ = ["configure_logging", "ColorFormatter", "console_handler", "file_handler"]

import os
import time
import logging
from typing import Optional, Union
from logging.handlers import RotatingFileHandler
from pathlib import Path

from colorama import Fore, Style, init as colorama_init

PathLike = Union[str, os.PathLike]

PACKAGE_PREFIX = "roughstroke."
DATEFMT = "%H:%M:%S"
FILE_FMT = "[%(asctime)s] [%(levelname)-7s] [%(name)s] %(message)s"
MAX_LOG_BYTES = 2_000_000
LOG_BACKUPS = 3

LEVEL_COLORS = {
    logging.DEBUG:    Fore.CYAN,
    logging.INFO:     Fore.GREEN,
    logging.WARNING:  Fore.YELLOW,
    logging.ERROR:    Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


class ColorFormatter(logging.Formatter):
    """Console formatter: time, colored level, module name, message.

    Logger names inside the package are shown without the package prefix
    (`roughstroke.shapes` -> `shapes`).
    """

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno, "")
        name = record.name
        if name.startswith(PACKAGE_PREFIX):
            name = name[len(PACKAGE_PREFIX):]
        text = (
            f"[{self.formatTime(record, self.datefmt)}] "
            f"[{color}{record.levelname:<7s}{Style.RESET_ALL}] "
            f"[{name}] "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


def console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter(datefmt=DATEFMT))
    return handler


def file_handler(log_dir: PathLike, run_prefix: str) -> RotatingFileHandler:
    """Rotating handler writing `<run_prefix>_PID<pid>_<timestamp>.log` in `log_dir`."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    stamp = time.strftime("%Y-%m-%d_%H%M%S")
    handler = RotatingFileHandler(
        log_dir / f"{run_prefix}_PID{os.getpid()}_{stamp}.log",
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
    )
    handler.setFormatter(logging.Formatter(FILE_FMT, DATEFMT))
    return handler


def configure_logging(level: int = logging.INFO,
                      log_dir: Optional[PathLike] = None,
                      name: str = "roughstroke",
                      run_prefix: str = "run") -> Optional[Path]:
    """Attach console (and optional file) output to logger `name`.

    Args:
        level: Level set on the logger.
        log_dir: Directory for a rotating log file; None logs to the console only.
        name: Logger to configure; the package root by default.
        run_prefix: File name prefix for the log file.

    Returns:
        Path of the log file, or None without `log_dir`.
    """
    colorama_init(strip=False, convert=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.addHandler(console_handler())
    log_path = None
    if log_dir is not None:
        fh = file_handler(log_dir, run_prefix)
        logger.addHandler(fh)
        log_path = Path(fh.baseFilename)

    logger.debug(f"Logging configured: level={logging.getLevelName(level)} file={log_path}")
    return log_path
