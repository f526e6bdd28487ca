from pydantic import BaseModel

from project_tracker.models.user import UserRole


class UserRegister(BaseModel):
    name: str
    username: str
    password: str


class LoginRequest(BaseModel):
    username: str
    password: str


class AuthResponse(BaseModel):
    """Returned by register and login: the identity plus a bearer token."""
    id: str
    name: str
    username: str
    role: UserRole
    token: str
    token_type: str = "bearer"
