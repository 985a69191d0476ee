"""Status logging for normalization diagnostics."""

import logging
import sys
from typing import Optional


class StatusLogger:
    """Status logger with consistent, parseable prefixes.

    Diagnostics (value counts, ranges, outliers) go through ``info`` and can
    be silenced with ``verbose=False``; warnings and the final ``[OK]`` line
    are always emitted. Errors are raised, not logged.
    """

    def __init__(self, name: str = "grid_normalize", verbose: bool = True):
        """Initialize the status logger.

        Args:
            name: Logger name for Python logging integration
            verbose: If False, suppresses info messages
        """
        self.verbose = verbose
        self._logger = logging.getLogger(name)

        # Configure handler if not already configured
        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter('%(message)s'))
            self._logger.addHandler(handler)
            self._logger.setLevel(logging.DEBUG)

    def success(self, message: str, indent: int = 0) -> None:
        """Log a success message with [OK] prefix."""
        self._logger.info(f"{' ' * indent}[OK] {message}")

    def warning(self, message: str, indent: int = 0) -> None:
        """Log a warning message with [WARNING] prefix."""
        self._logger.warning(f"{' ' * indent}[WARNING] {message}")

    def info(self, message: str, indent: int = 0) -> None:
        """Log an info message (respects verbose setting).

        Args:
            message: The message to log
            indent: Number of spaces to indent
        """
        if self.verbose:
            self._logger.info(f"{' ' * indent}{message}")

    def stat(self, label: str, value, indent: int = 0) -> None:
        """Log a ``label: value`` diagnostic line (respects verbose setting).

        Args:
            label: Name of the quantity
            value: Value to print; floats use the general format
            indent: Number of spaces to indent
        """
        if isinstance(value, float):
            value = f"{value:g}"
        self.info(f"{label}: {value}", indent=indent)

    def set_verbose(self, verbose: bool) -> None:
        """Set verbose mode.

        Args:
            verbose: If False, info messages are suppressed
        """
        self.verbose = verbose


# Global default logger instance
_default_logger: Optional[StatusLogger] = None


def get_logger(verbose: bool = True) -> StatusLogger:
    """Get the default status logger instance.

    Args:
        verbose: If False, info messages are suppressed

    Returns:
        StatusLogger instance
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = StatusLogger(verbose=verbose)
    else:
        _default_logger.set_verbose(verbose)
    return _default_logger
