"""Shared API dependencies for authentication and error translation."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from contest_stage.core.security import decode_access_token
from contest_stage.db.session import get_db
from contest_stage.models import User
from contest_stage.services.errors import (
    ContestError,
    DuplicateSignal,
    IneligibleVideo,
    InvalidScope,
    NotFoundError,
    UnavailableError,
)

# Votes accept anonymous callers, so a missing header is not an error here.
bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]

_STATUS_BY_ERROR: dict[type[ContestError], int] = {
    InvalidScope: status.HTTP_400_BAD_REQUEST,
    IneligibleVideo: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateSignal: status.HTTP_409_CONFLICT,
    UnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(exc: ContestError) -> HTTPException:
    """Map a domain error onto the HTTP status the caller should see."""
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def _credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Return the authenticated user, or None for anonymous requests.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise _credentials_error()
    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_current_user(user: Annotated[User | None, Depends(get_optional_user)]) -> User:
    """Return the authenticated user or fail with 401."""
    if user is None:
        raise _credentials_error()
    return user


def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    """Allow only administrators."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Admin access required",
        )
    return user


def require_judge(user: Annotated[User, Depends(get_current_user)]) -> User:
    """Allow judges and administrators."""
    if not user.can_judge:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Judge access required",
        )
    return user


OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
AdminDep = Annotated[User, Depends(require_admin)]
JudgeDep = Annotated[User, Depends(require_judge)]
