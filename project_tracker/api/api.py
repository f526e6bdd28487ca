from fastapi import APIRouter
from project_tracker.api.endpoints import auth, health, students

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Resource endpoints
api_router.include_router(students.router, prefix="/students", tags=["students"])
