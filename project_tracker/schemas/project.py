from pydantic import BaseModel, field_validator
from typing import Any, Optional
from project_tracker.models.project import ProjectStatus


def blank_amount_as_zero(value: Any) -> Any:
    # An empty amount counts as 0, like a cleared numeric input
    if isinstance(value, str) and not value.strip():
        return 0
    return value


class ProjectAssign(BaseModel):
    title: str
    description: str
    student_id: str
    submission_date: str
    frontend: str = ""
    backend: str = ""
    database: str = ""
    amount: Optional[float] = None

    @field_validator("amount", mode="before")
    @classmethod
    def blank_amount(cls, value: Any) -> Any:
        return blank_amount_as_zero(value)


class ProjectUpdate(BaseModel):
    """
    Partial update of a project.

    Text fields and status apply only when truthy, so ``title: ""`` and
    ``status: ""`` are no-ops. ``amount`` applies whenever it is sent, so
    ``amount: 0`` does change it (and ``amount: ""`` stores 0).
    """
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    frontend: Optional[str] = None
    backend: Optional[str] = None
    database: Optional[str] = None
    submission_date: Optional[str] = None
    amount: Optional[float] = None

    @field_validator("amount", mode="before")
    @classmethod
    def blank_amount(cls, value: Any) -> Any:
        return blank_amount_as_zero(value)

    @field_validator("status", mode="before")
    @classmethod
    def blank_status_as_missing(cls, value: Any) -> Any:
        return value or None


class InvoiceDetails(BaseModel):
    """Snapshot of the bill for a project. Unknown keys are dropped."""
    invoice_no: Optional[str] = None
    date: Optional[str] = None
    company_name: Optional[str] = None
    company_address: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    frontend: Optional[str] = None
    backend: Optional[str] = None
    database: Optional[str] = None
    amount: Optional[str] = None
    payment_status: str = "Pending"
    payment_method: Optional[str] = None
    signatory: Optional[str] = None
    is_sent: bool = False

    @field_validator("invoice_no", "amount", mode="before")
    @classmethod
    def numbers_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class ProjectRead(BaseModel):
    id: int
    title: str
    description: str
    student_id: str
    submission_date: str
    frontend: str = ""
    backend: str = ""
    database: str = ""
    amount: Optional[float] = None
    status: ProjectStatus
    invoice_details: Optional[InvoiceDetails] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    class Config:
        from_attributes = True


class GlobalStats(BaseModel):
    total_students: int
    total_projects: int
    total_revenue: float
