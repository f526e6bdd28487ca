"""
Student & Project Endpoints Module

Developer-facing management of students, their projects, invoices and
uploaded files, plus the student-facing project list.

Listing endpoints are always scoped to the calling developer. Per-ID
endpoints and project assignment check the developer role, and check
ownership only when ENFORCE_OWNERSHIP is enabled (see deps.ensure_student_access).
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlmodel import Session

from project_tracker.api import deps
from project_tracker.core.config import Settings
from project_tracker.core.context import AppContext
from project_tracker.core.exceptions import NotFoundError
from project_tracker.db.session import get_db
from project_tracker.models.user import User, UserRole
from project_tracker.schemas.project import (
    GlobalStats,
    InvoiceDetails,
    ProjectAssign,
    ProjectRead,
    ProjectUpdate,
)
from project_tracker.schemas.user import (
    DeveloperSummary,
    StudentCreate,
    StudentDetail,
    StudentUpdate,
    UploadResult,
    UserRead,
    UserSummary,
)
from project_tracker.services import identity, projects, stats, uploads

router = APIRouter()


def _user_read(user: User, developer: Optional[User]) -> UserRead:
    read = UserRead.model_validate(user)
    if developer is not None:
        read.assigned_developer = DeveloperSummary.model_validate(developer)
    return read


def _get_user_or_404(db: Session, user_id: str) -> User:
    user = identity.get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_student(
    student_in: StudentCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
    current_user: User = Depends(deps.require_developer),
):
    """
    Create a student account owned by the calling developer.

    Raises:
        DuplicateIdentityError 400: If the username is taken
    """
    student = identity.create_user(
        db,
        name=student_in.name,
        username=student_in.username,
        raw_password=student_in.password,
        role=UserRole.STUDENT,
        assigned_developer_id=current_user.id,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
        duplicate_message="Student already exists",
    )
    return _user_read(student, current_user)


@router.get("", response_model=List[UserRead])
def list_students(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_developer),
):
    """List the students owned by the calling developer."""
    return [_user_read(s, current_user) for s in identity.list_students_for(db, current_user)]


@router.get("/stats/global", response_model=GlobalStats)
def read_global_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_developer),
):
    """Student count, project count and revenue for the calling developer."""
    return stats.global_stats(db, current_user)


@router.post("/assign-project", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def assign_project(
    project_in: ProjectAssign,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
    current_user: User = Depends(deps.require_developer),
):
    """
    Assign a new project to a student. The project starts as Pending.

    Raises:
        NotFoundError 404: If student_id is not a student
        ForbiddenError 403: If ownership is enforced and the student belongs to another developer
    """
    student = projects.get_student(db, project_in.student_id)
    deps.ensure_student_access(settings, current_user, student)
    return projects.assign_project(db, current_user, project_in)


@router.get("/my-projects", response_model=List[ProjectRead])
def read_my_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Projects assigned to the caller."""
    return projects.list_projects_for_student(db, current_user.id)


@router.put("/project/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    project_in: ProjectUpdate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
    current_user: User = Depends(deps.require_developer),
):
    """
    Update project fields or status.

    Raises:
        NotFoundError 404: If the project doesn't exist
    """
    project = projects.get_project(db, project_id)
    deps.ensure_project_access(db, settings, current_user, project)
    return projects.update_project_fields(db, project, project_in)


@router.put("/project/{project_id}/save-bill", response_model=ProjectRead)
def save_bill(
    project_id: int,
    invoice_in: InvoiceDetails,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
    current_user: User = Depends(deps.require_developer),
):
    """Save the invoice as a draft; a previously sent invoice stays sent."""
    project = projects.get_project(db, project_id)
    deps.ensure_project_access(db, settings, current_user, project)
    return projects.save_invoice_draft(db, project, invoice_in)


@router.put("/project/{project_id}/send-bill", response_model=ProjectRead)
def send_bill(
    project_id: int,
    invoice_in: InvoiceDetails,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
    current_user: User = Depends(deps.require_developer),
):
    """Save the invoice and send it to the student."""
    project = projects.get_project(db, project_id)
    deps.ensure_project_access(db, settings, current_user, project)
    return projects.send_invoice(db, project, invoice_in)


@router.get("/{student_id}", response_model=StudentDetail)
def read_student(
    student_id: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
    current_user: User = Depends(deps.require_developer),
):
    """
    Get a student together with their projects.

    Raises:
        NotFoundError 404: If the user doesn't exist
    """
    student = identity.get_user(db, student_id)
    if not student:
        raise NotFoundError("Student not found")
    deps.ensure_student_access(settings, current_user, student)

    developer = None
    if student.assigned_developer_id:
        developer = identity.get_user(db, student.assigned_developer_id)

    return StudentDetail(
        student=_user_read(student, developer),
        projects=[ProjectRead.model_validate(p) for p in projects.list_projects_for_student(db, student.id)],
    )


@router.put("/{student_id}", response_model=UserSummary)
def update_student(
    student_id: str,
    student_in: StudentUpdate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(deps.get_settings),
    current_user: User = Depends(deps.require_developer),
):
    """
    Update a student, including their password and stored file paths.

    Raises:
        NotFoundError 404: If the user doesn't exist
        DuplicateIdentityError 400: If the new username is taken
    """
    student = _get_user_or_404(db, student_id)
    deps.ensure_student_access(settings, current_user, student)
    return identity.update_student(db, student, student_in, bcrypt_rounds=settings.BCRYPT_ROUNDS)


@router.post("/{student_id}/upload", response_model=UploadResult)
def upload_student_file(
    student_id: str,
    document: UploadFile = File(...),
    db: Session = Depends(get_db),
    context: AppContext = Depends(deps.get_context),
    current_user: User = Depends(deps.require_developer),
):
    """
    Upload a file for a student.

    PDFs, ZIPs and videos land on their own path field; any other accepted
    extension is stored as the generic document.

    Raises:
        UnsupportedFileTypeError 400: If the extension is not accepted
        NotFoundError 404: If the user doesn't exist
    """
    uploads.check_file_type(document.filename, document.content_type)

    student = _get_user_or_404(db, student_id)
    deps.ensure_student_access(context.settings, current_user, student)

    path = uploads.attach_upload(
        db,
        student,
        context.upload_dir,
        document.filename,
        document.file,
    )
    return UploadResult(message="File uploaded successfully", path=path)
