# agroscore/core/security.py
import logging
from typing import Any, Dict, Optional

import jwt
from fastapi import Header

from agroscore.core.config import settings
from agroscore.core.errors import UnauthenticatedError
from agroscore.schemas.user import AuthUser

logger = logging.getLogger(__name__)


def decode_token(token: str) -> Dict[str, Any]:
    options = {"require": ["sub", "exp"]}
    if settings.AUTH_JWT_AUDIENCE:
        return jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=settings.AUTH_JWT_ALGORITHMS,
            audience=settings.AUTH_JWT_AUDIENCE,
            options=options,
        )
    return jwt.decode(
        token,
        settings.AUTH_JWT_SECRET,
        algorithms=settings.AUTH_JWT_ALGORITHMS,
        options={**options, "verify_aud": False},
    )


def get_current_user(authorization: Optional[str] = Header(default=None)) -> AuthUser:
    """Resolve the bearer token of the request to a stable user id."""
    if not authorization:
        raise UnauthenticatedError()

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthenticatedError()

    try:
        payload = decode_token(token.strip())
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise UnauthenticatedError()
    except jwt.InvalidTokenError as e:
        logger.warning("Rejected invalid token: %s", e)
        raise UnauthenticatedError()

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthenticatedError()
    return AuthUser(id=str(user_id), email=payload.get("email"))
