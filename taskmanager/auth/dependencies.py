"""
Task Manager - Security Dependencies

FastAPI dependencies implementing the two request gates:

- get_current_user_id: stateless gate. Verifies the JWT in the
  x-access-token header and resolves the user ID without touching the
  database.
- verify_session: stateful gate. Validates the refresh token in
  x-refresh-token against the sessions of the user named in the _id
  header.

Usage:
    @router.get("/lists")
    async def get_lists(user_id: UUID = Depends(get_current_user_id)):
        ...
    
    @router.get("/users/me/access-token")
    async def refresh(context: SessionContext = Depends(verify_session)):
        ...
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request, status
from sqlmodel import Session as DBSession

from taskmanager.auth import sessions
from taskmanager.auth.models import User
from taskmanager.auth.tokens import InvalidTokenError, verify_access_token
from taskmanager.config import Settings
from taskmanager.database import get_db


logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "x-access-token"
REFRESH_TOKEN_HEADER = "x-refresh-token"
USER_ID_HEADER = "_id"


@dataclass
class SessionContext:
    """Identity resolved by the stateful gate."""
    user_id: UUID
    user: User
    refresh_token: str


def get_settings(request: Request) -> Settings:
    """Settings instance the application was built with."""
    return request.app.state.settings


async def get_current_user_id(
    x_access_token: Optional[str] = Header(None),
    config: Settings = Depends(get_settings),
) -> UUID:
    """
    Validate the access token and return the user ID it carries.
    
    Raises:
        HTTPException 401: Missing, malformed, tampered, or expired token
    """
    try:
        user_id = verify_access_token(x_access_token, config)
        return UUID(user_id)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"name": type(e).__name__, "message": str(e)},
        )
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"name": "InvalidTokenError", "message": "Malformed user id claim"},
        )


async def verify_session(
    request: Request,
    db: DBSession = Depends(get_db),
) -> SessionContext:
    """
    Validate the refresh token and resolve its user.
    
    Raises:
        HTTPException 401: User/token pair not found, or session expired
    """
    refresh_token = request.headers.get(REFRESH_TOKEN_HEADER)
    raw_user_id = request.headers.get(USER_ID_HEADER)
    
    try:
        user_id = UUID(raw_user_id or "")
    except ValueError:
        logger.info("Session check failed: malformed user id header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "User not found"},
        )
    
    try:
        user = await sessions.validate_session(db, user_id, refresh_token)
    except sessions.SessionNotFoundError as e:
        logger.info("Session check failed for user %s: not found", user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": str(e)},
        )
    except sessions.SessionExpiredError as e:
        logger.info("Session check failed for user %s: expired", user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": str(e)},
        )
    
    return SessionContext(
        user_id=user.id,
        user=user,
        refresh_token=refresh_token,
    )
