from __future__ import annotations

import logging
import sys
from typing import Iterable

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_number(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


class ModuleDebugFilter(logging.Filter):
    """
    Pass records at or above the console level, plus DEBUG records from the
    listed loggers and their children (e.g. "raven.scanner").
    """

    def __init__(self, level: int, debug_modules: Iterable[str] = ()):
        super().__init__()
        self.level = level
        self.debug_modules = tuple(debug_modules)

    def _debug_enabled(self, name: str) -> bool:
        return any(name == mod or name.startswith(mod + ".") for mod in self.debug_modules)

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.level or self._debug_enabled(record.name)


class ConsoleLog:
    """
    Console logging for the exporter.

    Normal runs print readings and lifecycle lines to stdout. Quiet runs
    print nothing to stdout but still send warnings and the fatal diagnostic
    to stderr, so a dying exporter never exits silently.
    """

    def __init__(self, level: str = "INFO", quiet: bool = False, debug_modules: Iterable[str] | None = None):
        self.level = _level_number(level)
        self.quiet = quiet
        self.debug_modules = list(debug_modules or [])

    def _handler(self) -> logging.Handler:
        if self.quiet:
            handler = logging.StreamHandler(sys.stderr)
            handler.setLevel(logging.WARNING)
        else:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(logging.DEBUG)
            handler.addFilter(ModuleDebugFilter(self.level, self.debug_modules))
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def setup(self) -> logging.Logger:
        root = logging.getLogger()
        for existing in list(root.handlers):
            root.removeHandler(existing)
        # Records always reach the handler; its filter decides what prints.
        root.setLevel(logging.DEBUG)
        root.addHandler(self._handler())
        return logging.getLogger("raven")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
