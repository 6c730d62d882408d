"""Shared utilities (logging)."""

from .logging_config import WallLayoutLogger, get_logger

__all__ = ["WallLayoutLogger", "get_logger"]
