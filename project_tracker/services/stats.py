"""Dashboard aggregation for a developer."""
import math
from typing import Any, Iterable

from sqlmodel import Session

from project_tracker.models.user import User
from project_tracker.schemas.project import GlobalStats
from project_tracker.services.identity import list_students_for
from project_tracker.services.projects import list_projects_for_students


def coerce_amount(value: Any) -> float:
    """Numeric value of an amount; anything non-numeric counts as 0."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def total_revenue(amounts: Iterable[Any]) -> float:
    return sum(coerce_amount(amount) for amount in amounts)


def global_stats(db: Session, developer: User) -> GlobalStats:
    """Counts and revenue over the students owned by ``developer``."""
    students = list_students_for(db, developer)
    projects = list_projects_for_students(db, [s.id for s in students])
    return GlobalStats(
        total_students=len(students),
        total_projects=len(projects),
        total_revenue=total_revenue(p.amount for p in projects),
    )
