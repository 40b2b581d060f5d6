"""
Task Manager - Session Ledger

Server-side refresh sessions. Each login appends one Session row holding
a random refresh token and an absolute expiry. Rows are never updated;
expired ones are rejected at validation time rather than purged.

Appending is a single INSERT, so concurrent logins for the same user
cannot overwrite each other's sessions.
"""

import logging
import secrets
import time
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session as DBSession, select

from taskmanager.auth.models import Session, User
from taskmanager.config import Settings, settings
from taskmanager.errors import PersistenceError


logger = logging.getLogger(__name__)

# 64 random bytes, hex-encoded to 128 characters
REFRESH_TOKEN_BYTES = 64

SECONDS_PER_DAY = 24 * 60 * 60


class SessionNotFoundError(Exception):
    """Raised when no user holds the presented refresh token."""


class SessionExpiredError(Exception):
    """Raised when the refresh token matches but its session has expired."""


def generate_refresh_token() -> str:
    """Generate an opaque refresh token."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


def refresh_token_expiry(
    now: Optional[float] = None,
    config: Optional[Settings] = None,
) -> float:
    """
    Compute the expiry for a session issued at `now`.
    
    Returns:
        Seconds since epoch
    """
    config = config or settings
    now = time.time() if now is None else now
    return now + config.REFRESH_TOKEN_EXPIRE_DAYS * SECONDS_PER_DAY


def has_refresh_token_expired(expires_at: float, now: Optional[float] = None) -> bool:
    """A session is expired once `now` reaches `expires_at`."""
    now = time.time() if now is None else now
    return expires_at <= now


async def create_session(
    db: DBSession,
    user: User,
    config: Optional[Settings] = None,
    now: Optional[float] = None,
) -> str:
    """
    Append a new refresh session to a user.
    
    Args:
        db: Database session
        user: Session owner
        config: Settings carrying the refresh TTL
        now: Issue instant (epoch seconds), defaults to current time
        
    Returns:
        The raw refresh token; the client holds the only other copy
        
    Raises:
        PersistenceError: If the session could not be saved
    """
    token = generate_refresh_token()
    session = Session(
        user_id=user.id,
        token=token,
        expires_at=refresh_token_expiry(now, config),
    )
    
    try:
        db.add(session)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError(f"Failed to save session to database: {e}") from e
    
    # Pick up the new row on the user's ordered session list
    db.refresh(user)
    
    logger.info("Created session %s for user %s", session.id, user.id)
    return token


async def find_by_user_and_token(
    db: DBSession,
    user_id: UUID,
    token: str,
) -> Optional[User]:
    """
    Find a user holding a session with exactly this token.
    
    Expiry is not considered here.
    """
    if not token:
        return None
    
    statement = (
        select(User)
        .join(Session, Session.user_id == User.id)
        .where(User.id == user_id, Session.token == token)
    )
    return db.exec(statement).first()


async def get_user_sessions(db: DBSession, user_id: UUID) -> list[Session]:
    """All sessions for a user, oldest first, expired ones included."""
    statement = (
        select(Session)
        .where(Session.user_id == user_id)
        .order_by(Session.id)
    )
    return list(db.exec(statement).all())


async def validate_session(
    db: DBSession,
    user_id: UUID,
    token: str,
    now: Optional[float] = None,
) -> User:
    """
    Resolve a refresh token to its user.
    
    The token must match a session exactly and that session must not be
    expired. Expiry is checked here even for sessions the lookup found.
    
    Raises:
        SessionNotFoundError: No session of this user has the token
        SessionExpiredError: The matching session has expired
    """
    user = await find_by_user_and_token(db, user_id, token)
    
    if user is None:
        raise SessionNotFoundError("User not found")
    
    is_session_valid = any(
        session.token == token
        and not has_refresh_token_expired(session.expires_at, now)
        for session in await get_user_sessions(db, user.id)
    )
    
    if not is_session_valid:
        raise SessionExpiredError(
            "refresh token has expired or the session is invalid"
        )
    
    return user
