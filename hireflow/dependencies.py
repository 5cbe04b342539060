import logging
from typing import NamedTuple

from fastapi import Depends, Query
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from hireflow.config import settings
from hireflow.core.errors import ForbiddenError, UnauthenticatedError
from hireflow.core.security import decode_access_token
from hireflow.database import get_db
from hireflow.models.user import User
from hireflow.repos.user_repo import get_by_id

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    """
    Resolve the bearer token to a User row.

    The role used for authorization is the one stored on the row, not the
    token's ``role`` claim.
    """
    if not credentials:
        logger.info("Auth failed: missing bearer credentials")
        raise UnauthenticatedError("Not authenticated")
    claims = decode_access_token(credentials.credentials)
    if not claims:
        logger.info("Auth failed: invalid or expired token")
        raise UnauthenticatedError("Invalid or expired token")
    user = get_by_id(db, claims["sub"])
    if not user:
        logger.info("Auth failed: user from token not found")
        raise UnauthenticatedError("User not found")
    if claims.get("role") and claims["role"] != user.role:
        logger.warning("Token role claim %s does not match stored role for user=%s", claims["role"], user.id)
    return user


def require_candidate(user: User = Depends(get_current_user)) -> User:
    if not user.is_candidate:
        raise ForbiddenError("Candidate access required")
    return user


def require_employer(user: User = Depends(get_current_user)) -> User:
    if not user.is_employer:
        raise ForbiddenError("Employer access required")
    return user


class Pagination(NamedTuple):
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def get_pagination(
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1),
) -> Pagination:
    size = page_size or settings.default_page_size
    return Pagination(page=page, page_size=min(size, settings.max_page_size))
