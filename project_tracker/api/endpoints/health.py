from fastapi import APIRouter, Depends
from typing import Any
from sqlmodel import Session, text

from project_tracker.core.exceptions import InternalError
from project_tracker.db.session import get_db

router = APIRouter()

@router.get("", response_model=dict[str, Any])
def health_check(db: Session = Depends(get_db)) -> Any:
    """
    Health check endpoint. Fails with 500 when the database is unreachable.
    """
    try:
        db.exec(text("SELECT 1"))
    except Exception as exc:
        raise InternalError(f"Database unavailable: {exc}")
    return {"status": "ok", "database": "ok"}
