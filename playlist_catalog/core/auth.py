"""Authentication dependencies for the catalog API.

Public interface:
    ``require_auth``  -- returns AuthContext or raises 401. Guards every read.
    ``require_admin`` -- returns AuthContext, raises 403 unless role is admin.
                         Guards every mutation.

When ``settings.auth_enabled`` is False both dependencies return an
anonymous admin context so local development needs no tokens.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import settings
from .token_factory import decode_token
from ..database import get_db
from ..exceptions import AuthenticationError, ForbiddenError
from ..models.user import ROLE_ADMIN
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity and role of the caller."""

    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


_ANONYMOUS = AuthContext(username="anonymous", role=ROLE_ADMIN)


def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    """Require a valid bearer token for a known user.

    The role comes from the users table, not the token, so a demotion takes
    effect without waiting for tokens to expire.
    """
    if not settings.auth_enabled:
        return _ANONYMOUS

    if credentials is None:
        raise AuthenticationError("Authentication required")

    payload = decode_token(
        credentials.credentials, settings.jwt_secret_key, settings.jwt_algorithm
    )
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    user = UserRepository(db).get_by_username(payload.sub)
    if user is None:
        raise AuthenticationError("User not found")

    return AuthContext(username=user.username, role=user.role)


def require_admin(auth: AuthContext = Depends(require_auth)) -> AuthContext:
    """Require the authenticated user to be an admin. Raises 403 otherwise."""
    if not auth.is_admin:
        logger.warning("Admin action refused", extra={"username": auth.username})
        raise ForbiddenError("Admin access required")
    return auth
