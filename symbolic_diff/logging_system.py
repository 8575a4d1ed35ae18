"""
Logging System for Symbolic Differentiation

This module provides a centralized logger with different verbosity levels so
that the engine can report what it does without cluttering the terminal.
"""

import logging
import sys
from typing import Optional
from enum import Enum
from datetime import datetime


class LogLevel(Enum):
    """Enumeration of logging levels for the differentiation engine"""
    SILENT = 0      # No output at all
    MINIMAL = 1     # Failures and warnings only
    MODERATE = 2    # Key milestones
    DETAILED = 3    # Per-call summaries such as tree growth
    VERBOSE = 4     # All information including debug details


class DifferentiationLogger:
    """
    Centralized logger for the differentiation engine with level-aware filtering
    """

    def __init__(self, log_level: LogLevel = LogLevel.MINIMAL,
                 log_to_file: bool = False, log_file_path: Optional[str] = None):
        self.log_level = log_level
        self.log_to_file = log_to_file

        self.logger = logging.getLogger('symbolic_diff')
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        # Close and remove handlers left by a previous configuration
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )

        if self.log_level != LogLevel.SILENT:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_to_file:
            if log_file_path is None:
                log_file_path = f"symbolic_diff_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
            file_handler = logging.FileHandler(log_file_path)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def _should_log(self, required_level: LogLevel) -> bool:
        """Check if message should be logged based on current log level"""
        return self.log_level.value >= required_level.value

    def info(self, message: str, required_level: LogLevel = LogLevel.MODERATE):
        """General information with configurable level"""
        if self._should_log(required_level):
            self.logger.info(message)

    def warning(self, message: str):
        """Warnings - shown from minimal level onwards"""
        if self._should_log(LogLevel.MINIMAL):
            self.logger.warning(message)

    def debug(self, message: str):
        """Debug information - only in verbose mode"""
        if self._should_log(LogLevel.VERBOSE):
            self.logger.debug(f"DEBUG: {message}")

    def derivative_summary(self, variable: str, input_size: int, output_size: int):
        """Report how much a derivative tree grew relative to its input"""
        if not self._should_log(LogLevel.DETAILED):
            return
        growth = output_size / input_size if input_size else float('inf')
        self.logger.info(f"d/d{variable}: {input_size} -> {output_size} nodes ({growth:.1f}x)")


# Global logger instance
_global_logger: Optional[DifferentiationLogger] = None


def get_logger() -> DifferentiationLogger:
    """Get or create the global logger instance"""
    global _global_logger
    if _global_logger is None:
        _global_logger = DifferentiationLogger()
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global logging level"""
    global _global_logger
    if _global_logger is None:
        _global_logger = DifferentiationLogger(log_level=level)
    else:
        _global_logger.log_level = level


def configure_logging(log_level: LogLevel = LogLevel.MINIMAL,
                      log_to_file: bool = False,
                      log_file_path: Optional[str] = None) -> DifferentiationLogger:
    """Configure the global logging system"""
    global _global_logger
    _global_logger = DifferentiationLogger(
        log_level=log_level,
        log_to_file=log_to_file,
        log_file_path=log_file_path
    )
    return _global_logger


def is_enabled(level: LogLevel) -> bool:
    """Whether messages at ``level`` would currently be emitted"""
    return get_logger()._should_log(level)


# Convenience functions for common operations
def log_info(message: str, level: LogLevel = LogLevel.MODERATE):
    get_logger().info(message, level)


def log_warning(message: str):
    get_logger().warning(message)


def log_debug(message: str):
    get_logger().debug(message)


def log_derivative_summary(variable: str, input_size: int, output_size: int):
    get_logger().derivative_summary(variable, input_size, output_size)
