"""
Project Store and Lifecycle

Project creation by assignment, partial field updates, and the invoice
draft/send workflow.

Status is a flat enumeration: any ProjectStatus may overwrite any other.
The invoice ``is_sent`` flag only ever moves from False to True; saving a
draft keeps whatever value is stored, sending forces True.
"""
import logging
from typing import List

from sqlmodel import Session, select

from project_tracker.core.exceptions import NotFoundError
from project_tracker.models.project import Project, ProjectStatus
from project_tracker.models.user import User, UserRole
from project_tracker.schemas.project import InvoiceDetails, ProjectAssign, ProjectUpdate

logger = logging.getLogger(__name__)

# Replaced only by a truthy value; "" and null leave the stored value alone.
TRUTHY_FIELDS = (
    "title",
    "description",
    "status",
    "frontend",
    "backend",
    "database",
    "submission_date",
)


def get_project(db: Session, project_id: int) -> Project:
    project = db.get(Project, project_id)
    if not project:
        raise NotFoundError("Project not found")
    return project


def get_student(db: Session, student_id: str) -> User:
    student = db.get(User, student_id)
    if not student or student.role != UserRole.STUDENT:
        raise NotFoundError("Student not found")
    return student


def list_projects_for_student(db: Session, student_id: str) -> List[Project]:
    return db.exec(select(Project).where(Project.student_id == student_id)).all()


def list_projects_for_students(db: Session, student_ids: List[str]) -> List[Project]:
    if not student_ids:
        return []
    return db.exec(select(Project).where(Project.student_id.in_(student_ids))).all()


def assign_project(db: Session, developer: User, data: ProjectAssign) -> Project:
    """Create a Pending project for ``data.student_id``."""
    project = Project(
        title=data.title,
        description=data.description,
        student_id=data.student_id,
        submission_date=data.submission_date,
        frontend=data.frontend,
        backend=data.backend,
        database=data.database,
        amount=data.amount,
        status=ProjectStatus.PENDING,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info(
        "Developer %s assigned project %s to student %s",
        developer.id, project.id, project.student_id,
    )
    return project


def update_project_fields(db: Session, project: Project, changes: ProjectUpdate) -> Project:
    """
    Apply a partial update.

    Fields in TRUTHY_FIELDS change only when sent with a truthy value.
    ``amount`` changes whenever it is sent; an explicit null stores 0.
    """
    for field in TRUTHY_FIELDS:
        value = getattr(changes, field)
        if value:
            setattr(project, field, value)

    if "amount" in changes.model_fields_set:
        project.amount = changes.amount if changes.amount is not None else 0

    project.touch()
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def _current_is_sent(project: Project) -> bool:
    return bool((project.invoice_details or {}).get("is_sent", False))


def _store_invoice(db: Session, project: Project, invoice: InvoiceDetails, is_sent: bool) -> Project:
    details = invoice.model_dump()
    details["is_sent"] = is_sent
    project.invoice_details = details
    project.touch()
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def save_invoice_draft(db: Session, project: Project, invoice: InvoiceDetails) -> Project:
    """Replace the invoice, keeping the stored ``is_sent`` flag."""
    return _store_invoice(db, project, invoice, is_sent=_current_is_sent(project))


def send_invoice(db: Session, project: Project, invoice: InvoiceDetails) -> Project:
    """Replace the invoice and mark it sent, whatever the request said."""
    project = _store_invoice(db, project, invoice, is_sent=True)
    logger.info("Invoice for project %s sent to student %s", project.id, project.student_id)
    return project
