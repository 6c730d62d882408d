# api/utils/config.py
import os
import logging

logger = logging.getLogger("wall_layout.api")


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not a number; using {default}")
        return default


class Config:
    """Application configuration loaded from environment variables"""

    # API authentication
    API_KEY = os.environ.get("API_KEY", "dev_key")

    # Application settings
    DEBUG = os.environ.get("DEBUG", "false").lower() == "true"

    # Wall size used when a layout is created without one
    DEFAULT_WALL_WIDTH = _env_float("DEFAULT_WALL_WIDTH", 144.0)
    DEFAULT_WALL_HEIGHT = _env_float("DEFAULT_WALL_HEIGHT", 108.0)

    @classmethod
    def validate(cls):
        """Validate critical configuration values"""
        if not cls.API_KEY or cls.API_KEY == "dev_key":
            logger.warning("Using development API key - not secure for production!")

        if cls.DEFAULT_WALL_WIDTH <= 0 or cls.DEFAULT_WALL_HEIGHT <= 0:
            logger.error("DEFAULT_WALL_WIDTH and DEFAULT_WALL_HEIGHT must be positive")
