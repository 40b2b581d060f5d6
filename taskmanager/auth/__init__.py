"""
Task Manager - Authentication Package

Authentication with:
- Stateless JWT access tokens (30 minutes)
- Stateful refresh sessions recorded per user (10 days)
- bcrypt password hashing
"""

from taskmanager.auth.models import User, Session
from taskmanager.auth.dependencies import get_current_user_id, verify_session
from taskmanager.auth.tokens import create_access_token, verify_access_token

__all__ = [
    "User",
    "Session",
    "get_current_user_id",
    "verify_session",
    "create_access_token",
    "verify_access_token",
]
