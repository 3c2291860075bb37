"""
Caller identity

Routes receive the owner id through get_current_owner_id; the trip service
never looks at request state itself. Swap this dependency to plug in a
different authentication provider.
"""

from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.core import config
from app.core.logging import get_logger

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)


def create_access_token(owner_id: str, expires_hours: int | None = None, **claims) -> str:
    """
    Issue a signed JWT whose subject is the owner id.

    Helper for tests and local development; the API itself only verifies
    tokens, issuing them is the identity provider's job.
    """
    hours = config.JWT_EXPIRATION_HOURS if expires_hours is None else expires_hours
    payload = {
        "sub": owner_id,
        "exp": datetime.now(timezone.utc) + timedelta(hours=hours),
        **claims,
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def get_current_owner_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """
    Resolve the owner id from the bearer token.
    Without a token, falls back to DEV_USER_ID when one is configured.
    """
    if credentials is None:
        if config.DEV_USER_ID:
            return config.DEV_USER_ID
        raise HTTPException(status_code=401, detail="No authentication token, access denied")

    try:
        payload = jwt.decode(
            credentials.credentials, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM]
        )
    except JWTError as e:
        logger.info("auth_token_rejected", error=str(e))
        raise HTTPException(status_code=401, detail="Token is invalid")

    owner_id = payload.get("sub")
    if not owner_id:
        raise HTTPException(status_code=401, detail="Token is invalid")
    return str(owner_id)
