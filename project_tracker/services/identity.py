"""
Identity Store

Lookup, creation and partial update of User records, and credential checks.
"""
import logging
from typing import List, Optional

from sqlmodel import Session, select

from project_tracker.core.exceptions import DuplicateIdentityError, ValidationError
from project_tracker.core.security import get_password_hash, verify_password
from project_tracker.models.user import User, UserRole
from project_tracker.schemas.user import StudentUpdate

logger = logging.getLogger(__name__)

PATH_FIELDS = ("document_path", "pdf_path", "zip_path", "video_path")


def find_by_username(db: Session, username: str) -> Optional[User]:
    return db.exec(select(User).where(User.username == username)).first()


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def create_user(
    db: Session,
    *,
    name: str,
    username: str,
    raw_password: str,
    role: UserRole,
    assigned_developer_id: Optional[str] = None,
    bcrypt_rounds: int = 10,
    duplicate_message: str = "User already exists",
) -> User:
    """
    Create a user with a hashed password.

    Raises:
        DuplicateIdentityError: If the username is already taken
        ValidationError: If a developer is given an owning developer
    """
    if find_by_username(db, username):
        raise DuplicateIdentityError(duplicate_message)

    if role == UserRole.DEVELOPER and assigned_developer_id:
        raise ValidationError("Developers cannot be assigned to a developer")

    user = User(
        name=name,
        username=username,
        password=get_password_hash(raw_password, rounds=bcrypt_rounds),
        role=role,
        assigned_developer_id=assigned_developer_id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created %s account %s (%s)", role.value, user.username, user.id)
    return user


def verify_credential(user: Optional[User], raw_password: str) -> bool:
    if user is None:
        return False
    return verify_password(raw_password, user.password)


def list_developers(db: Session) -> List[User]:
    return db.exec(select(User).where(User.role == UserRole.DEVELOPER)).all()


def list_students_for(db: Session, developer: User) -> List[User]:
    """Students owned by ``developer``; ownership is part of the query."""
    statement = select(User).where(
        User.role == UserRole.STUDENT,
        User.assigned_developer_id == developer.id,
    )
    return db.exec(statement).all()


def update_student(
    db: Session,
    user: User,
    changes: StudentUpdate,
    bcrypt_rounds: int = 10,
) -> User:
    """
    Apply a partial update.

    name, username, password and assigned_developer_id are only replaced by a
    non-empty value. Path fields are replaced whenever they were sent, so an
    explicit null or "" clears the stored path.
    """
    sent = changes.model_fields_set

    if changes.name:
        user.name = changes.name

    if changes.username and changes.username != user.username:
        existing = find_by_username(db, changes.username)
        if existing and existing.id != user.id:
            raise DuplicateIdentityError("Username already taken")
        user.username = changes.username

    if changes.password:
        user.password = get_password_hash(changes.password, rounds=bcrypt_rounds)

    if changes.assigned_developer_id:
        _check_assignable(db, user, changes.assigned_developer_id)
        user.assigned_developer_id = changes.assigned_developer_id

    for field in PATH_FIELDS:
        if field in sent:
            setattr(user, field, getattr(changes, field) or "")

    user.touch()
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _check_assignable(db: Session, user: User, developer_id: str) -> None:
    if user.role != UserRole.STUDENT:
        raise ValidationError("Only students can be assigned to a developer")
    developer = get_user(db, developer_id)
    if developer is None or developer.role != UserRole.DEVELOPER:
        raise ValidationError("Assigned developer must be an existing developer")
