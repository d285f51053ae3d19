"""Logging setup shared by every budgetcart module."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILENAME = "budgetcart.log"
ROOT_LOGGER_NAME = "budgetcart"


class SafeStreamHandler(logging.StreamHandler):
    """Console handler that degrades to ASCII when the terminal cannot encode a message.

    It always writes to the current ``sys.stdout`` so redirected or captured
    output keeps working after the handler was created.
    """

    @property
    def stream(self):
        return sys.stdout

    @stream.setter
    def stream(self, value):
        pass

    def emit(self, record):
        try:
            msg = self.format(record)
            try:
                self.stream.write(msg + self.terminator)
            except UnicodeEncodeError:
                self.stream.write(msg.encode("ascii", "replace").decode("ascii") + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def log_dir() -> Path:
    return Path(os.getenv("BUDGETCART_LOG_DIR") or "logs")


def log_level() -> str:
    return (os.getenv("LOG_LEVEL") or "INFO").upper()


def _attach_handlers(logger: logging.Logger) -> None:
    level = log_level()
    directory = log_dir()
    directory.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(
        directory / LOG_FILENAME,
        maxBytes=1_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    console_handler = SafeStreamHandler()
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return *name*'s logger, wired to the console and the rotating log file once."""

    logger = logging.getLogger(name)
    logger.propagate = False
    if not logger.handlers:
        _attach_handlers(logger)
    return logger


def reconfigure_loggers() -> None:
    """Rebuild handlers of every budgetcart logger from the current environment.

    Module loggers are created at import time, before ``.env`` is loaded, so
    the CLI calls this once the environment is final.
    """

    for name, logger in list(logging.root.manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
            continue
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        _attach_handlers(logger)
