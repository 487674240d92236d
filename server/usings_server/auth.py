"""
Organize Usings Server Authentication

API key authentication against the keys configured in the environment.
When no keys are configured the service runs open (local editor use).
"""

import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader, HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from typing import Optional

from .settings import settings

logger = logging.getLogger(__name__)

# Security headers
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


class UserContext(BaseModel):
    """
    Authenticated caller context.
    """
    api_key: Optional[str] = None
    authenticated: bool = False


def _extract_api_key(
    api_key: Optional[str],
    bearer: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    if bearer and bearer.scheme and bearer.scheme.lower() == "bearer":
        return bearer.credentials
    return api_key


async def get_current_user(
    api_key: Optional[str] = Depends(api_key_header),
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> UserContext:
    """
    Validate the API key if the server has keys configured.
    """
    if not settings.api_keys:
        return UserContext()

    raw_key = _extract_api_key(api_key, bearer)
    if not raw_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key. Provide X-API-Key header or Authorization: Bearer <token>.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if raw_key not in settings.api_keys:
        logger.info("Rejected request with unknown API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return UserContext(api_key=raw_key, authenticated=True)
