# /app/core/deps.py

"""
Request dependencies that resolve the caller's identity once and gate
routes by role.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import BackendError
from app.models.user_model import Role, User
from app.services import user_service
from app.services.database_service import DatabaseService, get_db_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: DatabaseService = Depends(get_db_service),
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        user = user_service.resolve_identity(db, credentials.credentials)
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_role(role: Role):
    """Builds a dependency that only lets callers with `role` through."""
    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"This page is only available to {role.value}s.",
            )
        return current_user
    return _checker


get_current_demonstrator = require_role(Role.DEMONSTRATOR)
get_current_student = require_role(Role.STUDENT)
