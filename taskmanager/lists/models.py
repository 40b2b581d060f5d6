"""
Task Manager - List and Task Models

Lists belong to a user; tasks belong to a list. Deleting a list deletes
its tasks.
"""

from uuid import UUID, uuid4

from sqlalchemy import Boolean, Column, ForeignKey, String, Uuid
from sqlmodel import Field, SQLModel


class TaskList(SQLModel, table=True):
    """
    A titled list owned by one user.
    
    Attributes:
        id: Unique identifier (UUIDv4)
        title: Non-empty, trimmed title
        user_id: Owning user
    """
    __tablename__ = "lists"
    
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(sa_column=Column(String(255), nullable=False))
    user_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )


class Task(SQLModel, table=True):
    """
    A task inside a list.
    
    Attributes:
        id: Unique identifier (UUIDv4)
        title: Non-empty, trimmed title
        list_id: Owning list
        completed: Completion flag
    """
    __tablename__ = "tasks"
    
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(sa_column=Column(String(255), nullable=False))
    list_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("lists.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    completed: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
    )
