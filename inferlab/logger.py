"""Thread-safe logger writing to a file and to the console."""

from __future__ import annotations

import contextlib
import enum
import os
import sys
import threading
from datetime import datetime, timezone
from typing import Any, ClassVar, Iterator, Optional, TextIO

DEFAULT_LOG_PATH = "../custom.log"


class LogLevel(enum.IntEnum):
    """Severity of a log message."""

    DEBUG = 0
    INFO = 1
    NORMAL = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5


def _stream_text(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def format_message(fmt: str, *args: Any) -> str:
    """Replace each ``{}`` in ``fmt`` with the next argument, in order.

    Only the bare ``{}`` marker is recognised. Once no marker is left the
    rest of the text is kept and any remaining arguments are dropped.
    """
    parts: list[str] = []
    rest = fmt
    for arg in args:
        pos = rest.find("{}")
        if pos < 0:
            break
        parts.append(rest[:pos])
        parts.append(_stream_text(arg))
        rest = rest[pos + 2 :]
    parts.append(rest)
    return "".join(parts)


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%d %H:%M:%S") + f".{now.microsecond // 1000:03d} UTC"


class Logger:
    """Writes prefixed log lines to a file and to stdout or stderr.

    Every level is enabled at first, as are file output and stderr output.
    Error and critical messages go to stderr while it is enabled, everything
    else (and those too, once stderr is disabled) goes to stdout.
    """

    _instance: ClassVar[Optional["Logger"]] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, path: "str | os.PathLike[str]" = DEFAULT_LOG_PATH, append: bool = True) -> None:
        path = os.fspath(path)
        parent = os.path.dirname(path)
        if not parent or not os.path.exists(parent):
            raise FileNotFoundError(f"Invalid path provided: {path}")
        self._file: Optional[TextIO] = open(path, "a" if append else "w", encoding="utf-8")
        self._lock = threading.Lock()
        self._stderr_enabled = True
        self._file_output_enabled = True
        self._enabled = {level: True for level in LogLevel}

    @classmethod
    def get_instance(
        cls, path: "str | os.PathLike[str]" = DEFAULT_LOG_PATH, append: bool = True
    ) -> "Logger":
        """Return the shared logger; the arguments only matter on the first call."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls(path, append)
            return cls._instance

    @classmethod
    def _reset_instance(cls) -> None:
        with cls._instance_lock:
            if cls._instance is not None:
                cls._instance._close()
            cls._instance = None

    def _close(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._close()

    def _prefix(self, level: LogLevel) -> str:
        return f"{_utc_timestamp()} [{LogLevel(level).name}] [Thread:{threading.get_ident()}] "

    def _write(self, level: LogLevel, message: str) -> None:
        with self._lock:
            if not self.is_level_enabled(level):
                return
            if self._file_output_enabled and self._file is not None:
                self._file.write(message)
                self._file.flush()
            if level in (LogLevel.ERROR, LogLevel.CRITICAL) and self._stderr_enabled:
                sys.stderr.write(message)
            else:
                sys.stdout.write(message)

    def print_log(self, level: LogLevel, fmt: str, *args: Any) -> None:
        """Log ``fmt`` with its ``{}`` markers filled from ``args``."""
        if not self.is_level_enabled(level):
            return
        self._write(level, self._prefix(level) + format_message(fmt, *args) + "\n")

    def print_log_with_depth(self, level: LogLevel, depth: int, fmt: str, *args: Any) -> None:
        """Like :meth:`print_log`, indenting the message by two spaces per depth."""
        if not self.is_level_enabled(level):
            return
        indent = " " * (max(int(depth), 0) * 2)
        self._write(level, self._prefix(level) + indent + format_message(fmt, *args) + "\n")

    def set_level_enabled(self, level: LogLevel, enabled: bool) -> None:
        """Turn one level on or off; unknown levels are ignored."""
        try:
            key = LogLevel(level)
        except ValueError:
            return
        self._enabled[key] = bool(enabled)

    def is_level_enabled(self, level: LogLevel) -> bool:
        """True if messages at ``level`` are written; unknown levels never are."""
        try:
            key = LogLevel(level)
        except ValueError:
            return False
        return self._enabled[key]

    def disable_stderr(self) -> None:
        self._stderr_enabled = False

    def enable_stderr(self) -> None:
        self._stderr_enabled = True

    def is_stderr_enabled(self) -> bool:
        return self._stderr_enabled

    def set_file_output_enabled(self, enabled: bool) -> None:
        self._file_output_enabled = bool(enabled)

    def is_file_output_enabled(self) -> bool:
        return self._file_output_enabled

    @contextlib.contextmanager
    def suppress_stderr(self) -> Iterator["Logger"]:
        """Disable stderr output for the block, re-enabling it after if it was on."""
        was_enabled = self.is_stderr_enabled()
        self.disable_stderr()
        try:
            yield self
        finally:
            if was_enabled:
                self.enable_stderr()


def log_debug(fmt: str, *args: Any) -> None:
    Logger.get_instance().print_log(LogLevel.DEBUG, fmt, *args)


def log_info(fmt: str, *args: Any) -> None:
    Logger.get_instance().print_log(LogLevel.INFO, fmt, *args)


def log_normal(fmt: str, *args: Any) -> None:
    Logger.get_instance().print_log(LogLevel.NORMAL, fmt, *args)


def log_warning(fmt: str, *args: Any) -> None:
    Logger.get_instance().print_log(LogLevel.WARNING, fmt, *args)


def log_error(fmt: str, *args: Any) -> None:
    Logger.get_instance().print_log(LogLevel.ERROR, fmt, *args)


def log_critical(fmt: str, *args: Any) -> None:
    Logger.get_instance().print_log(LogLevel.CRITICAL, fmt, *args)