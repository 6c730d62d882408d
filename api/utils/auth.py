# File: api/utils/auth.py
from fastapi import Header, HTTPException, status, Depends
from api.utils.config import Config
import logging

logger = logging.getLogger("wall_layout.api")


def _mask(key: str) -> str:
    return key[:4] + "..." + key[-4:] if len(key) > 8 else "***masked***"


async def get_api_key(x_api_key: str = Header(...)):
    """Validate API key from header."""
    if x_api_key == Config.API_KEY:
        logger.debug(f"Authenticated request with key {_mask(x_api_key)}")
        return {
            "key": x_api_key,
            "environment": "production" if Config.API_KEY != "dev_key" else "development",
        }

    logger.warning("Invalid API key provided")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid API Key"
    )


# Use this at the router level to ensure auth comes first
def auth_dependency():
    """Creates a dependency that requires authentication."""
    return Depends(get_api_key)
