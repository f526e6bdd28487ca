"""
API Dependencies Module

This module provides FastAPI dependency functions for authentication and authorization.
Requests carry a bearer token; the token resolves to a User, and developer-only
routes additionally require the developer role. Ownership of students and their
projects is checked in one place, ``ensure_student_access``.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from project_tracker.core.config import Settings
from project_tracker.core.context import AppContext
from project_tracker.core.exceptions import ForbiddenError, UnauthenticatedError
from project_tracker.core.security import decode_access_token
from project_tracker.db.session import get_db
from project_tracker.models.project import Project
from project_tracker.models.user import User, UserRole

# Configure OAuth2 scheme to use the login endpoint
# auto_error=False so a missing header becomes our own 401 response
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl="/api/auth/login",
    auto_error=False
)


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_settings(context: AppContext = Depends(get_context)) -> Settings:
    return context.settings


def get_current_user(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    token: Optional[str] = Depends(reusable_oauth2),
) -> User:
    """
    Dependency that retrieves and validates the current authenticated user.

    Raises:
        UnauthenticatedError: If the token is missing, invalid or expired,
            or if the user it was issued for no longer exists
    """
    if not token:
        raise UnauthenticatedError("Not authorized, no token")

    user_id = decode_access_token(token, settings)

    user = db.get(User, user_id)
    if not user:
        raise UnauthenticatedError("Not authorized, user not found")
    return user


def require_developer(
    current_user: User = Depends(get_current_user),
) -> User:
    """
    Dependency that requires the current user to be a developer.
    """
    if current_user.role != UserRole.DEVELOPER:
        raise ForbiddenError("Not authorized as a developer")
    return current_user


def owns_student(identity: User, student: User) -> bool:
    return student.assigned_developer_id is not None and student.assigned_developer_id == identity.id


def ensure_student_access(settings: Settings, identity: User, student: User) -> None:
    """
    Ownership check for per-ID student routes and project assignment.

    Only applied when ENFORCE_OWNERSHIP is on; otherwise the developer role
    alone grants access to any student.
    """
    if settings.ENFORCE_OWNERSHIP and not owns_student(identity, student):
        raise ForbiddenError("Not authorized to access this student")


def ensure_project_access(db: Session, settings: Settings, identity: User, project: Project) -> None:
    if not settings.ENFORCE_OWNERSHIP:
        return
    student = db.get(User, project.student_id)
    if student is None or not owns_student(identity, student):
        raise ForbiddenError("Not authorized to access this project")
