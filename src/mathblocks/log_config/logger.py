"""Logging for MathBlocks: root handler setup and a context-prefixing logger."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Any


_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FILE = "mathblocks.log"

# Web-stack loggers that flood the console at INFO.
_QUIET_LOGGERS = ("uvicorn.access", "engineio.server", "socketio.server")


def _install(root: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(handler)


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | None = "logs",
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """Route the root logger to the console and ``<log_dir>/mathblocks.log``.

    Re-running replaces the handlers from the previous call.  An unknown
    *log_level* falls back to INFO; ``log_dir=None`` skips the file.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(level)

    _install(root, logging.StreamHandler(), level)
    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        rotating = RotatingFileHandler(
            os.path.join(log_dir, _LOG_FILE),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        _install(root, rotating, level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class ContextualLogger:
    """Prefix every message with ``[key=value]`` pairs.

    Usage::

        log = ContextualLogger(get_logger(__name__), session="a1b2", op="division")
        log.info("Round started")  # => "[session=a1b2] [op=division] Round started"

    :meth:`bind` adds or replaces keys, e.g. after the player picks new
    settings.
    """

    def __init__(self, logger: logging.Logger, **context: Any) -> None:
        self._logger = logger
        self._context: dict[str, Any] = dict(context)

    @property
    def prefix(self) -> str:
        return " ".join(f"[{k}={v}]" for k, v in self._context.items())

    def bind(self, **context: Any) -> None:
        self._context.update(context)

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        prefix = self.prefix
        if prefix and args:
            # prefix is part of the %-format string here
            prefix = prefix.replace("%", "%%")
        text = f"{prefix} {msg}" if prefix else msg
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, text, *args, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, msg, *args, **kwargs)
