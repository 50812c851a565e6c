"""Thread-safe logging with contextual metadata.

``LOG`` is the package logger. Operations bracket their work with
``LOG.scope(op=..., file=...)`` so every record emitted inside carries the
same ``[op=..., file=...]`` prefix; scopes nest and restore the outer
context on exit.
"""

from __future__ import annotations
from typing import Any, Dict, Iterator
from contextlib import contextmanager, suppress
import threading
import logging
import logging.handlers
import sys

CONSOLE_FORMAT = "[%(levelname)s] %(context)s%(message)s"
FILE_FORMAT = "[%(asctime)s] [%(levelname)-8s] %(context)s%(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 10 * 1024 * 1024


class _ContextFilter(logging.Filter):
    """Copies the owning ``Log``'s thread-local context onto each record."""

    def __init__(self, owner: "Log"):
        super().__init__()
        self.owner = owner

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = self.owner._context_str()
        return True


class Log:
    """
    Thread-safe logger with contextual metadata.

    One instance per name. Console output goes to stderr at WARNING (DEBUG
    with ``set_level(logging.DEBUG)``); a rotating file under
    ``Cfg.LOG_DIR`` receives everything once the first record is logged.

    Thread-safe: Yes (context is thread-local)
    """

    _instances: Dict[str, "Log"] = {}
    _lock = threading.RLock()

    def __new__(cls, name: str) -> "Log":
        with cls._lock:
            if name not in cls._instances:
                inst = super().__new__(cls)
                inst._initialised = False
                cls._instances[name] = inst
            return cls._instances[name]

    def __init__(self, name: str):
        if getattr(self, "_initialised", False):
            return

        with self._lock:
            if getattr(self, "_initialised", False):
                return
            self._initialised = True
            self.name = name
            self._ctx = threading.local()
            self._file_ready = False

            self.log = logging.getLogger(name)
            self.log.setLevel(logging.INFO)
            self.log.handlers.clear()
            self.log.propagate = False
            self.log.addFilter(_ContextFilter(self))

            self.console = logging.StreamHandler(sys.stderr)
            self.console.setLevel(logging.WARNING)
            self.console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            self.log.addHandler(self.console)

    def _attach_file(self) -> None:
        """Add the rotating file handler on first use (needs ``Cfg.init()``)."""
        if self._file_ready:
            return
        with self._lock:
            if self._file_ready:
                return
            self._file_ready = True

            # Import here to avoid circular dependency
            from stig_viewer.core.config import Cfg

            # No writable app directory: console only
            with suppress(OSError, RuntimeError):
                Cfg.init()
                handler = logging.handlers.RotatingFileHandler(
                    str(Cfg.LOG_DIR / f"{self.name}.log"),
                    maxBytes=MAX_LOG_BYTES,
                    backupCount=Cfg.KEEP_LOGS,
                    encoding="utf-8",
                    delay=True,
                )
                handler.setLevel(logging.DEBUG)
                handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
                self.log.addHandler(handler)

    def set_level(self, level: int) -> None:
        """Set the logger level; DEBUG also opens the console, anything else keeps it at WARNING."""
        self.log.setLevel(level)
        self.console.setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)

    # ----------------------------------------------------------------- context
    def _data(self) -> Dict[str, Any]:
        if not hasattr(self._ctx, "data"):
            self._ctx.data = {}
        return self._ctx.data

    def ctx(self, **kw: Any) -> None:
        """Add key/value pairs to this thread's context."""
        self._data().update(kw)

    def clear(self) -> None:
        """Drop this thread's context."""
        self._data().clear()

    @contextmanager
    def scope(self, **kw: Any) -> Iterator["Log"]:
        """Add ``kw`` to the context for the duration of the block."""
        data = self._data()
        saved = dict(data)
        data.update(kw)
        try:
            yield self
        finally:
            data.clear()
            data.update(saved)

    def _context_str(self) -> str:
        data = getattr(self._ctx, "data", None)
        if data:
            return "[" + ", ".join(f"{k}={v}" for k, v in data.items()) + "] "
        return ""

    # ----------------------------------------------------------------- logging
    def _log(self, level: int, message: Any, exc: bool = False) -> None:
        self._attach_file()
        self.log.log(level, str(message), exc_info=exc)

    def d(self, msg: str) -> None:
        self._log(logging.DEBUG, msg)

    def i(self, msg: str) -> None:
        self._log(logging.INFO, msg)

    def w(self, msg: str) -> None:
        self._log(logging.WARNING, msg)

    def e(self, msg: str, exc: bool = False) -> None:
        self._log(logging.ERROR, msg, exc)

    def c(self, msg: str, exc: bool = False) -> None:
        self._log(logging.CRITICAL, msg, exc)


# Module-level logger instance
LOG = Log("stig_viewer")
