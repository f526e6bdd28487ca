"""
User Model Module

This module defines the User model and UserRole enumeration. Developers and
students share one table; a student is owned by the developer referenced in
``assigned_developer_id``.
"""
from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field
import uuid
from datetime import datetime, timezone


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserRole(str, Enum):
    """
    Roles known to the system.

    - DEVELOPER: manages students, assigns and bills their projects
    - STUDENT: owns nothing; sees the projects assigned to them
    """
    DEVELOPER = "developer"
    STUDENT = "student"


class User(SQLModel, table=True):
    """
    User model representing both developers and students.

    Attributes:
        id: Unique identifier (UUID) automatically generated for each user
        name: Display name
        username: Login name (required, unique, indexed)
        password: Hashed password (bcrypt), never returned by the API
        role: Either developer or student (default: student)
        assigned_developer_id: Owning developer; only ever set on students
        document_path, pdf_path, zip_path, video_path: Stored upload paths,
            each overwritten independently ("" when unset)
        created_at: ISO timestamp when the account was created
        updated_at: ISO timestamp of the last modification
    """
    __tablename__ = "users"

    # Primary key - auto-generated UUID for global uniqueness
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    name: str = Field(nullable=False)
    username: str = Field(unique=True, index=True, nullable=False)
    password: str = Field(nullable=False)  # Hashed password (bcrypt)

    role: UserRole = Field(default=UserRole.STUDENT)

    # Ownership - establishes which developer may manage this student
    assigned_developer_id: Optional[str] = Field(
        default=None, foreign_key="users.id", index=True
    )

    # Uploaded files
    document_path: str = ""
    pdf_path: str = ""
    zip_path: str = ""
    video_path: str = ""

    # Audit timestamps
    created_at: Optional[str] = Field(default_factory=utcnow_iso)
    updated_at: Optional[str] = Field(default_factory=utcnow_iso)

    @property
    def is_developer(self) -> bool:
        return self.role == UserRole.DEVELOPER

    def touch(self) -> None:
        self.updated_at = utcnow_iso()
