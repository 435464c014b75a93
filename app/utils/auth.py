"""
Bearer token verification for author endpoints

Sessions are issued by the hosted auth provider; this service only checks
the signature and audience of the access token and reads its claims.
"""
import logging
from typing import Optional
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from app.config import settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class AuthUser(BaseModel):
    """Caller identity taken from access token claims"""
    id: UUID
    email: Optional[str] = None
    name: Optional[str] = None
    avatar_url: Optional[str] = None


def decode_access_token(token: str) -> AuthUser:
    """
    Verify an access token and build the caller identity

    Raises:
        HTTPException: 401 if the token is invalid, expired or has no usable subject
    """
    try:
        claims = jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE,
        )
        user_id = UUID(str(claims["sub"]))
    except (jwt.PyJWTError, KeyError, ValueError) as e:
        logger.warning(f"Rejected access token: {str(e)}")
        raise HTTPException(status_code=401, detail="Unauthorized")

    metadata = claims.get("user_metadata") or {}
    return AuthUser(
        id=user_id,
        email=claims.get("email"),
        name=metadata.get("full_name"),
        avatar_url=metadata.get("avatar_url"),
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> AuthUser:
    """FastAPI dependency: authenticated caller or 401"""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return decode_access_token(credentials.credentials)
