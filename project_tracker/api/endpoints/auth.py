"""
Authentication Endpoints Module

Developer registration, login for both roles, the public developer list and
the caller's own profile. Tokens are returned in the response body and sent
back as ``Authorization: Bearer <token>``.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from project_tracker.api import deps
from project_tracker.core.config import Settings
from project_tracker.core.exceptions import UnauthenticatedError, ValidationError
from project_tracker.core.security import create_access_token
from project_tracker.db.session import get_db
from project_tracker.models.user import User, UserRole
from project_tracker.schemas.auth import AuthResponse, LoginRequest, UserRegister
from project_tracker.schemas.user import UserRead
from project_tracker.services import identity

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(user: User, settings: Settings) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        name=user.name,
        username=user.username,
        role=user.role,
        token=create_access_token(user.id, settings),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_developer(
    user_in: UserRegister,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Register a new developer account.

    Only developers can register through this endpoint; students are created
    by their developer.

    Raises:
        ValidationError 400: If the password is shorter than MIN_PASSWORD_LENGTH
        DuplicateIdentityError 400: If the username is taken
    """
    if len(user_in.password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
        )

    user = identity.create_user(
        db,
        name=user_in.name,
        username=user_in.username,
        raw_password=user_in.password,
        role=UserRole.DEVELOPER,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
    return _auth_response(user, settings)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Authenticate a developer or a student and issue an access token.

    Raises:
        UnauthenticatedError 401: If the username is unknown or the password is wrong
    """
    user = identity.find_by_username(db, credentials.username)

    if not identity.verify_credential(user, credentials.password):
        logger.warning("Failed login for username %s", credentials.username)
        raise UnauthenticatedError("Invalid username or password")

    return _auth_response(user, settings)


@router.get("/developers", response_model=List[UserRead])
def list_developers(db: Session = Depends(get_db)):
    """Public list of developer accounts (password hashes excluded)."""
    return identity.list_developers(db)


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(deps.get_current_user)):
    """Get the current authenticated user's profile."""
    return current_user
