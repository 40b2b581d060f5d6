"""
Task Manager - Authentication Database Models

SQLModel-based models for user accounts and refresh-token sessions.

Security:
- Passwords stored as bcrypt hashes only
- Sessions are owned by their user and deleted with it
- Session expiry is absolute epoch seconds
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Uuid
from sqlmodel import Field, Relationship, SQLModel


class User(SQLModel, table=True):
    """
    User account for authentication.
    
    Attributes:
        id: Unique identifier (UUIDv4)
        email: Login identifier (unique, indexed, trimmed)
        password_hash: bcrypt hash (never store plaintext)
        created_at: Account creation timestamp (UTC)
        sessions: Refresh sessions in issue order
    """
    __tablename__ = "users"
    
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        description="Unique user identifier"
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, index=True, nullable=False),
        description="User email address (login identifier)"
    )
    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="bcrypt password hash"
    )
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False, default=datetime.utcnow),
        description="Account creation timestamp"
    )
    
    # Relationships
    sessions: list["Session"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "Session.id",
            "passive_deletes": True,
        },
    )


class Session(SQLModel, table=True):
    """
    One outstanding refresh-token grant.
    
    Rows are appended on login and never updated. Expired rows stay in
    place and are rejected at validation time.
    
    Attributes:
        id: Surrogate key, increases with issue order
        user_id: Owning user
        token: Raw refresh token (128 hex characters)
        expires_at: Expiry instant in epoch seconds
    """
    __tablename__ = "sessions"
    
    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
    )
    user_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Reference to user"
    )
    token: str = Field(
        sa_column=Column(String(128), unique=True, index=True, nullable=False),
        description="Refresh token"
    )
    expires_at: float = Field(
        sa_column=Column(Float, nullable=False),
        description="Expiry, seconds since epoch"
    )
    
    # Relationships
    user: Optional[User] = Relationship(back_populates="sessions")
