"""
Logging configuration for the wall panel layout engine.

This module provides the logging setup with an extra TRACE level used for
per-pointer-event diagnostics during drags. It supports file and console output.
"""

import logging
import os
import sys
from datetime import datetime
from typing import Optional

class WallLayoutLogger:
    """
    Configures logging for the layout engine.

    Supports:
    - Standard levels (CRITICAL, ERROR, WARNING, INFO, DEBUG)
    - Custom TRACE level for pointer-move level detail
    - File and console output with different formats and levels
    """

    # Define custom TRACE level (between DEBUG and NOTSET)
    TRACE_LEVEL = 5
    logging.addLevelName(TRACE_LEVEL, "TRACE")

    @staticmethod
    def _add_trace_method():
        """Add the TRACE method to the Logger class if not already present."""
        if not hasattr(logging.Logger, 'trace'):
            def trace(self, message, *args, **kwargs):
                """Log a message with level TRACE."""
                if self.isEnabledFor(WallLayoutLogger.TRACE_LEVEL):
                    self._log(WallLayoutLogger.TRACE_LEVEL, message, args, **kwargs)
            logging.Logger.trace = trace

    @staticmethod
    def configure(
        debug_mode: bool = False,
        log_dir: str = "logs",
        console_only: bool = False,
    ) -> Optional[str]:
        """
        Configure the logging system for the entire application.

        Args:
            debug_mode: If True, sets DEBUG level for all loggers
            log_dir: Directory to store log files
            console_only: If True, no log file is written

        Returns:
            Path to the created log file, or None when console_only
        """
        WallLayoutLogger._add_trace_method()

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

        # Clear any existing handlers
        if root_logger.handlers:
            root_logger.handlers.clear()

        log_file = None
        if not console_only:
            os.makedirs(log_dir, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = os.path.join(log_dir, f"wall_layout_{timestamp}.log")

            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            file_handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)
            root_logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter('%(name)s - %(levelname)s: %(message)s')
        )
        console_handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)
        root_logger.addHandler(console_handler)

        return log_file

    @staticmethod
    def get_logger(name: str, level: Optional[int] = None):
        """
        Get a configured logger for a specific module.

        Args:
            name: Logger name, typically __name__
            level: Optional specific level for this logger

        Returns:
            A configured logger
        """
        WallLayoutLogger._add_trace_method()
        logger = logging.getLogger(name)
        if level:
            logger.setLevel(level)
        return logger

# For direct import convenience
def get_logger(name: str, level: Optional[int] = None):
    """
    Get a configured logger for a specific module.

    Convenience function that delegates to WallLayoutLogger.get_logger.
    """
    return WallLayoutLogger.get_logger(name, level)
