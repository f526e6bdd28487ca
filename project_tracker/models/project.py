"""
Project Model Module

This module defines the Project model: a piece of work a developer assigns to
one student, with its status and an embedded invoice document.
"""
from enum import Enum
from typing import Any, Dict, Optional
from sqlmodel import SQLModel, Field, JSON, Column

from project_tracker.models.user import utcnow_iso


class ProjectStatus(str, Enum):
    """
    Project progress labels, in their usual order.

    The order is informational only: any status may be written over any other.
    """
    PENDING = "Pending"
    PROCESS = "Process"
    START = "Start"
    BACKEND_WORK = "Backend Work"
    FRONTEND_WORK = "Frontend Work"
    DATABASE_WORK = "Database Work"
    COMPLETED = "Completed"


class Project(SQLModel, table=True):
    """
    Project model representing work assigned to a student.

    Attributes:
        id: Auto-incrementing primary key
        title: Project title (required)
        description: Project description (required)
        student_id: Foreign key to the student the project is assigned to
        submission_date: Due date in ISO format (YYYY-MM-DD)
        frontend, backend, database: Free-text technology labels
        amount: Agreed price; not validated for sign
        status: One of ProjectStatus (default: Pending)
        invoice_details: Embedded invoice document (see schemas.project.InvoiceDetails)
        created_at: ISO timestamp when the project was created
        updated_at: ISO timestamp when the project was last modified
    """
    __tablename__ = "projects"

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    title: str = Field(nullable=False)
    description: str = Field(nullable=False)

    student_id: str = Field(foreign_key="users.id", index=True, nullable=False)

    submission_date: str = Field(nullable=False)

    # Technology stack labels
    frontend: str = ""
    backend: str = ""
    database: str = ""

    amount: Optional[float] = 0

    status: ProjectStatus = Field(default=ProjectStatus.PENDING)

    # Stored as JSON; always replaced wholesale, never mutated in place
    invoice_details: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    # Audit timestamps - automatically managed
    created_at: Optional[str] = Field(default_factory=utcnow_iso)
    updated_at: Optional[str] = Field(default_factory=utcnow_iso)

    def touch(self) -> None:
        self.updated_at = utcnow_iso()
