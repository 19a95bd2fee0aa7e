import hmac
from typing import Optional

import structlog
from fastapi import Header, HTTPException, status

from catalog.config import settings

logger = structlog.get_logger()


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": "Unauthorized", "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_admin(authorization: Optional[str] = Header(None)) -> None:
    """
    Admin guard: "Authorization: Bearer <ADMIN_API_KEY>".
    Stand-in for the platform's auth service, which issues and checks real
    credentials.
    """
    if not authorization:
        logger.warning("Missing authorization header")
        raise _unauthorized("Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        logger.warning("Invalid authorization format")
        raise _unauthorized("Invalid Authorization header format. Use 'Bearer <token>'")

    if not hmac.compare_digest(token.strip(), settings.ADMIN_API_KEY):
        logger.warning("Invalid admin key")
        raise _unauthorized("Admin access required")
