"""Logging configuration for the CLI.

Library modules only create module-level loggers; handlers are
installed once here when the CLI starts.
"""

import logging
from pathlib import Path

from rich.logging import RichHandler

from winprov.utils.formatting import err_console

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> None:
    """Install console and optional file handlers on the package logger.

    Console output goes to stderr through Rich. The log file, when
    given, receives every record at DEBUG level.

    Args:
        verbose: Show INFO records on the console.
        quiet: Only show ERROR records on the console.
        log_file: Optional path of a plain-text log file (appended to).

    Raises:
        RuntimeError: If the log file cannot be opened.
    """
    if quiet:
        console_level = logging.ERROR
    elif verbose:
        console_level = logging.INFO
    else:
        console_level = logging.WARNING

    logger = logging.getLogger("winprov")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console_handler = RichHandler(
        console=err_console,
        show_path=False,
        show_time=False,
        markup=False,
    )
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            msg = f"Cannot open log file {log_file}: {e}"
            raise RuntimeError(msg) from e
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
