"""
Task Manager - Credential Store

Registration and password verification for user accounts.

The bcrypt hash is computed in exactly one place, set_password. Saving a
user without calling it never touches password_hash, so repeated saves
keep the stored hash byte-identical.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session as DBSession, select

from taskmanager.auth.models import User
from taskmanager.auth.password import hash_password, verify_password
from taskmanager.config import Settings, settings
from taskmanager.errors import (
    BadCredentialsError,
    DuplicateEmailError,
    PersistenceError,
    ValidationError,
)


logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

# bcrypt only accepts up to 72 bytes of input
MAX_PASSWORD_BYTES = 72

# Hashes checked for unknown emails, one per work factor, so both failure
# paths run bcrypt at the same cost
_dummy_hashes: dict[int, str] = {}


def normalize_email(email: str) -> str:
    """Trim an email; reject empty values. Case is preserved."""
    value = (email or "").strip()
    if not value:
        raise ValidationError("Email is required")
    return value


def dummy_hash(work_factor: int) -> str:
    if work_factor not in _dummy_hashes:
        _dummy_hashes[work_factor] = hash_password(
            "not-a-real-password", work_factor=work_factor
        )
    return _dummy_hashes[work_factor]


def validate_password(password: str) -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        )
    return password


def set_password(user: User, password: str, config: Optional[Settings] = None) -> User:
    """
    Replace the user's secret.
    
    The plaintext is hashed immediately and never stored on the record.
    """
    config = config or settings
    user.password_hash = hash_password(
        validate_password(password),
        work_factor=config.BCRYPT_WORK_FACTOR,
    )
    return user


def save_user(db: DBSession, user: User) -> User:
    """
    Persist a user record.
    
    Raises:
        DuplicateEmailError: Email already belongs to another user
        PersistenceError: Any other store failure
    """
    try:
        db.add(user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateEmailError("Email already registered") from e
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError(f"Failed to save user: {e}") from e
    
    db.refresh(user)
    return user


def get_user_by_email(db: DBSession, email: str) -> Optional[User]:
    statement = select(User).where(User.email == email)
    return db.exec(statement).first()


def register(
    db: DBSession,
    email: str,
    password: str,
    config: Optional[Settings] = None,
) -> User:
    """
    Create a new user account.
    
    Args:
        db: Database session
        email: Login identifier
        password: Plaintext secret
        config: Settings carrying the bcrypt work factor
        
    Returns:
        The persisted User
        
    Raises:
        ValidationError: Malformed email or short password
        DuplicateEmailError: Email already registered
    """
    email = normalize_email(email)
    
    if get_user_by_email(db, email):
        raise DuplicateEmailError("Email already registered")
    
    user = User(email=email, password_hash="")
    set_password(user, password, config)
    save_user(db, user)
    
    logger.info("Registered user %s", user.id)
    return user


def verify_credentials(
    db: DBSession,
    email: str,
    password: str,
    config: Optional[Settings] = None,
) -> User:
    """
    Authenticate an email/password pair.
    
    Unknown email and wrong password raise the same error with the same
    message, and both run a bcrypt comparison at the configured work factor.
    
    Raises:
        BadCredentialsError: Credentials do not authenticate
    """
    config = config or settings
    
    try:
        email = normalize_email(email)
    except ValidationError:
        email = None
    
    user = get_user_by_email(db, email) if email else None
    
    if user is None:
        verify_password(password or "", dummy_hash(config.BCRYPT_WORK_FACTOR))
        logger.info("Login failed: unknown email")
        raise BadCredentialsError("Invalid credentials")
    
    if not verify_password(password or "", user.password_hash):
        logger.info("Login failed for user %s: bad password", user.id)
        raise BadCredentialsError("Invalid credentials")
    
    return user
