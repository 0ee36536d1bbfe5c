"""
Structured logging for the Match Score engine.

Provides centralized logging with console and optional file output,
plus counters for monitoring how tasting records are being scored.
"""

import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks scoring metrics (records scored, unscoreable records, levels).
    """

    def __init__(
        self,
        name: str = "cupnote",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers
        self.logger.propagate = False

        self.metrics = {
            "scores_computed": 0,
            "unscoreable": 0,
            "matches_found": 0,
            "scores_by_level": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"cupnote_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if not self.logger.isEnabledFor(level):
            return
        if context:
            # Korean tokens stay readable in the log
            message = f"{message} | Context: {json.dumps(context, ensure_ascii=False, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_score(self, level: str):
        """Record a computed Match Score at the given level."""
        self.metrics["scores_computed"] += 1
        by_level = self.metrics["scores_by_level"]
        by_level[level] = by_level.get(level, 0) + 1

    def record_unscoreable(self):
        """Record a tasting record that had no roaster note to compare against."""
        self.metrics["unscoreable"] += 1

    def record_matches(self, count: int):
        """Add keyword/selection matches produced by one assignment run."""
        self.metrics["matches_found"] += count

    def get_metrics(self) -> dict:
        """Return current metrics, including the share of scoreable records."""
        metrics_copy = dict(self.metrics)
        metrics_copy["scores_by_level"] = dict(self.metrics["scores_by_level"])

        attempted = metrics_copy["scores_computed"] + metrics_copy["unscoreable"]
        metrics_copy["scoreable_rate"] = (
            round(metrics_copy["scores_computed"] / attempted, 3) if attempted else 0.0
        )
        return metrics_copy

    def log_metrics_summary(self):
        """Log current metrics as one DEBUG line."""
        self.debug("Session metrics", **self.get_metrics())


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "cupnote",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    File output is only enabled by default when CUPNOTE_LOG_DIR is set, so
    importing the engine never creates a logs/ directory on its own.

    Args:
        name: Logger name
        level: Log level (default: CUPNOTE_LOG_LEVEL or INFO)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        level = level or os.getenv("CUPNOTE_LOG_LEVEL", "INFO")
        log_dir = os.getenv("CUPNOTE_LOG_DIR")
        if "log_dir" not in kwargs and log_dir:
            kwargs["log_dir"] = Path(log_dir)
        kwargs.setdefault("enable_file", "log_dir" in kwargs)
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
