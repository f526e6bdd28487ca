"""
Domain Exceptions Module

Errors raised by the stores, the authorization gate and the project workflow.
Each carries the HTTP status it maps to; the handlers registered in
``project_tracker.main`` render them as ``{"message": ...}``.

Usage:
    from project_tracker.core.exceptions import NotFoundError

    if not project:
        raise NotFoundError("Project not found")
"""
from typing import Any, Dict, Optional


class TrackerError(Exception):
    """Base exception for all Project Tracker errors"""

    status_code: int = 500

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None):
        self.message = message
        self.headers = headers
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


# ============================================
# Authentication & Authorization Errors
# ============================================

class UnauthenticatedError(TrackerError):
    """Missing, invalid or expired token, or the token's user is gone"""

    status_code = 401

    def __init__(self, message: str = "Not authorized, token failed"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(TrackerError):
    """Authenticated, but the role or ownership check failed"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


# ============================================
# Resource Errors
# ============================================

class NotFoundError(TrackerError):
    status_code = 404


class DuplicateIdentityError(TrackerError):
    """Username already taken"""

    status_code = 400

    def __init__(self, message: str = "User already exists"):
        super().__init__(message)


# ============================================
# Input Errors
# ============================================

class ValidationError(TrackerError):
    status_code = 400


class UnsupportedFileTypeError(TrackerError):
    status_code = 400

    def __init__(self, message: str = "Error: Only ZIP, PDF, and Video files are allowed!"):
        super().__init__(message)


class InternalError(TrackerError):
    """Store or otherwise unexpected failure"""

    status_code = 500
