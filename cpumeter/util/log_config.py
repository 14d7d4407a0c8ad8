"""
Logging configuration for the CPU meter.

Provides centralized logging setup with clean, concise terminal output.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = '[%(levelname)s] %(message)s'
FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s - %(message)s'


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[Path] = None
) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Calling it again for the same name replaces the handlers, so the CLI can
    re-run it with a log file once the configuration has been loaded.

    Args:
        name: Logger name (typically __name__)
        level: Logging level (default: INFO)
        log_file: Optional file path for log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            fmt=FILE_FORMAT,
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)
        # file handler wants DEBUG records even when the console is quieter
        logger.setLevel(logging.DEBUG)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def attach_log_file(log_file: Path, prefix: str = 'cpumeter') -> None:
    """
    Re-run setup_logger with a file handler for every logger already created
    under ``prefix``.

    Module loggers are created at import time, before the configuration that
    names the log file has been read.
    """
    for name, existing in list(logging.root.manager.loggerDict.items()):
        if not isinstance(existing, logging.Logger):
            continue
        if name == prefix or name.startswith(prefix + '.'):
            setup_logger(name, level=_console_level(existing), log_file=log_file)


def _console_level(logger: logging.Logger) -> int:
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            return handler.level
    return logging.INFO
