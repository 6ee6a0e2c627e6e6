"""Logging utilities with timing and input event tracking."""

from __future__ import annotations
import os
import sys
import time
from typing import Optional


class Logger:
    """Viewer logger with timestamps and input event counts."""

    def __init__(self, debug: bool = False):
        self._start_time: float = time.perf_counter()
        self._event: int = 0
        self.debug: bool = debug

    @property
    def event(self) -> int:
        """Number of input events handled so far."""
        return self._event

    def increment_event(self) -> None:
        """Increment input event counter."""
        self._event += 1

    @property
    def elapsed(self) -> float:
        """Seconds since logger was created."""
        return time.perf_counter() - self._start_time

    def log(self, msg: str) -> None:
        """Log a message with timestamp and event number."""
        line = f"[{self.elapsed:7.3f}s E{self._event:06d}] {msg}\n"
        try:
            sys.stdout.write(line)
            sys.stdout.flush()
        except Exception:
            try:
                sys.stderr.write(line)
                sys.stderr.flush()
            except Exception:
                pass

    def dbg(self, msg: str) -> None:
        """Log a message only when debug output is enabled."""
        if self.debug:
            self.log(msg)

    def __call__(self, msg: str) -> None:
        """Shorthand for log()."""
        self.log(msg)


# Global logger instance
_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get or create the global logger instance."""
    global _logger
    if _logger is None:
        _logger = Logger(debug=bool(os.environ.get("EINKVIEW_DEBUG")))
    return _logger


def log(msg: str) -> None:
    """Log a message using the global logger."""
    get_logger().log(msg)


def dbg(msg: str) -> None:
    """Log a debug message using the global logger."""
    get_logger().dbg(msg)


def set_debug(enabled: bool) -> None:
    """Enable or disable debug output."""
    get_logger().debug = enabled


def get_event() -> int:
    """Get current input event count."""
    return get_logger().event


def increment_event() -> None:
    """Increment input event counter."""
    get_logger().increment_event()
