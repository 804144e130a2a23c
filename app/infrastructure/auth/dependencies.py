"""
Authentication dependencies for FastAPI.
Turns a Firebase bearer token into the internal authenticated user.
"""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.domain.models.base import ValidationError
from app.domain.models.user import AuthenticatedUser
from app.domain.services.gateways import IdentityProvider, VerifiedIdentity
from app.infrastructure.db.database import get_db
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


# Security scheme; missing headers are reported by us, not by FastAPI
security = HTTPBearer(auto_error=False)


def _unauthorized(message: str, code: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": message, "code": code},
        headers={"WWW-Authenticate": "Bearer"},
    )


@lru_cache()
def get_identity_provider() -> IdentityProvider:
    """Dependency to get the identity provider. Overridden in tests."""
    from app.infrastructure.auth.firebase_auth import FirebaseAuthService
    return FirebaseAuthService()


async def get_verified_identity(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    identity_provider: Annotated[IdentityProvider, Depends(get_identity_provider)]
) -> VerifiedIdentity:
    """
    FastAPI dependency verifying the bearer token only.
    Used where the internal user may not exist yet (account sync).
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Missing authorization header", "MISSING_AUTH_HEADER")

    try:
        return identity_provider.verify_token(credentials.credentials)
    except ValidationError:
        raise _unauthorized("Invalid or expired token", "INVALID_TOKEN")


async def get_current_user(
    identity: Annotated[VerifiedIdentity, Depends(get_verified_identity)],
    session: Annotated[Session, Depends(get_db)]
) -> AuthenticatedUser:
    """
    FastAPI dependency to get the current authenticated user.

    Raises:
        HTTPException: 401 when the token is valid but no internal user exists
    """
    user = None
    if identity.email:
        user = SQLAlchemyUserRepository(session).find_by_email(identity.email)
    if user is None:
        raise _unauthorized("User not found in database", "USER_NOT_FOUND")
    return AuthenticatedUser.from_user(user)


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
