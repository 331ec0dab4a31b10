"""
Logging for corpus generation.

One process-wide GenerationLogger sits on top of the stdlib ``symbolic_generation``
logger. Verbosity is a LogLevel rather than a stdlib level so a run can be
switched between silent batch mode and per-worker chatter from the command line.
"""

import logging
import sys
import time
from enum import Enum
from typing import Any, Dict, Optional, TextIO


class LogLevel(Enum):
    """Verbosity of a generation run"""
    SILENT = 0      # Critical errors only
    MINIMAL = 1     # Summary and warnings
    MODERATE = 2    # Milestones and throttled progress
    DETAILED = 3    # One line per chunk, operation histogram
    VERBOSE = 4     # Debug

    @classmethod
    def from_name(cls, name: str) -> 'LogLevel':
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None


LOGGER_NAME = 'symbolic_generation'
PROGRESS_INTERVAL = 2.0


class GenerationLogger:
    """Level-aware wrapper around the package logger"""

    def __init__(self, log_level: LogLevel = LogLevel.MODERATE,
                 stream: Optional[TextIO] = None,
                 log_file_path: Optional[str] = None):
        self.log_level = log_level
        self._last_progress = 0.0

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        # Reconfiguring replaces, never stacks, handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if log_level is LogLevel.SILENT and log_file_path is None:
            self.logger.addHandler(logging.StreamHandler(sys.stderr))
            self.logger.handlers[0].setLevel(logging.ERROR)
            return

        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s', datefmt='%H:%M:%S')
        handlers = [logging.StreamHandler(stream if stream is not None else sys.stdout)]
        if log_file_path is not None:
            handlers.append(logging.FileHandler(log_file_path, encoding='utf-8'))
        for handler in handlers:
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def enabled(self, level: LogLevel) -> bool:
        return level is not LogLevel.SILENT and self.log_level.value >= level.value

    def critical(self, message: str):
        """Shown at every level, including SILENT (on stderr)"""
        self.logger.error(f"CRITICAL: {message}")

    def info(self, message: str, level: LogLevel = LogLevel.MINIMAL):
        if self.enabled(level):
            self.logger.info(message)

    def warning(self, message: str):
        if self.enabled(LogLevel.MINIMAL):
            self.logger.warning(message)

    def milestone(self, message: str):
        if self.enabled(LogLevel.MODERATE):
            self.logger.info(f"MILESTONE: {message}")

    def progress(self, message: str, force: bool = False):
        """Throttled to one line every PROGRESS_INTERVAL seconds unless forced"""
        if not self.enabled(LogLevel.MODERATE):
            return
        now = time.monotonic()
        if force or now - self._last_progress >= PROGRESS_INTERVAL:
            self._last_progress = now
            self.logger.info(f"PROGRESS: {message}")

    def batch_step(self, chunk_id: int, amount: int, elapsed: float):
        if self.enabled(LogLevel.DETAILED):
            self.logger.info(f"Chunk {chunk_id:3d}: {amount} expressions ({elapsed:.3f}s)")

    def debug(self, message: str):
        if self.enabled(LogLevel.VERBOSE):
            self.logger.debug(f"DEBUG: {message}")

    def result_summary(self, results: Dict[str, Any]):
        """Aligned key/value table, floats to six places"""
        if not self.enabled(LogLevel.MINIMAL):
            return
        rule = "=" * 60
        lines = [rule, "GENERATION SUMMARY:", rule]
        for key, value in results.items():
            shown = f"{value:.6f}" if isinstance(value, float) else str(value)
            lines.append(f"{key:.<30} {shown}")
        for line in lines:
            self.logger.info(line)


_logger: Optional[GenerationLogger] = None


def get_logger() -> GenerationLogger:
    """Process-wide logger, created at MODERATE on first use"""
    global _logger
    if _logger is None:
        _logger = GenerationLogger()
    return _logger


def configure_logging(log_level: LogLevel = LogLevel.MODERATE,
                      stream: Optional[TextIO] = None,
                      log_file_path: Optional[str] = None) -> GenerationLogger:
    global _logger
    _logger = GenerationLogger(log_level, stream=stream, log_file_path=log_file_path)
    return _logger


def log_debug(message: str):
    get_logger().debug(message)
