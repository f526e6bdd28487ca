from pydantic import BaseModel
from typing import List, Optional
from project_tracker.models.user import UserRole
from project_tracker.schemas.project import ProjectRead


class DeveloperSummary(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


# Properties to receive via API on creation
class StudentCreate(BaseModel):
    name: str
    username: str
    password: str


# Properties to receive via API on update
class StudentUpdate(BaseModel):
    """
    Partial update of a student.

    name, username, password and assigned_developer_id are ignored when empty.
    The path fields apply whenever they are sent; null or "" clears them.
    """
    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    assigned_developer_id: Optional[str] = None
    document_path: Optional[str] = None
    pdf_path: Optional[str] = None
    zip_path: Optional[str] = None
    video_path: Optional[str] = None


# Properties to return to client
class UserRead(BaseModel):
    id: str
    name: str
    username: str
    role: UserRole
    assigned_developer_id: Optional[str] = None
    assigned_developer: Optional[DeveloperSummary] = None
    document_path: str = ""
    pdf_path: str = ""
    zip_path: str = ""
    video_path: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    """Returned after a student update."""
    id: str
    name: str
    username: str
    role: UserRole

    class Config:
        from_attributes = True


class StudentDetail(BaseModel):
    student: UserRead
    projects: List[ProjectRead]


class UploadResult(BaseModel):
    message: str
    path: str
