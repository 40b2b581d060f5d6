"""
Task Manager - Database Configuration

SQLModel database setup with connection pooling.
Supports PostgreSQL (production) and SQLite (development).

Usage:
    from taskmanager.database import get_engine, init_db
    
    engine = get_engine(settings.DATABASE_URL)
    init_db(engine)  # Creates tables
"""

from typing import Generator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine


def get_engine(database_url: str, echo: bool = False):
    """
    Create SQLAlchemy engine with appropriate configuration.
    
    Args:
        database_url: Connection string
        echo: Log SQL statements
        
    Returns:
        SQLAlchemy Engine
    """
    if database_url.startswith("sqlite"):
        # SQLite configuration
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        
        # Enforce ON DELETE CASCADE between users/sessions and lists/tasks
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    else:
        # PostgreSQL configuration with connection pooling
        engine = create_engine(
            database_url,
            echo=echo,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
        )
    
    return engine


def init_db(engine) -> None:
    """
    Initialize database tables.
    
    Safe to call multiple times (uses CREATE IF NOT EXISTS).
    """
    # Import models to register them with SQLModel
    from taskmanager.auth.models import User, Session as UserSession  # noqa: F401
    from taskmanager.lists.models import TaskList, Task  # noqa: F401
    
    SQLModel.metadata.create_all(engine)


def get_session_factory(engine):
    """
    Create a session factory bound to engine.
    
    Returns:
        Callable that creates new database sessions
    """
    def session_factory() -> Session:
        return Session(engine)
    
    return session_factory


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding a database session from app state.
    
    The session is closed once the response has been produced.
    """
    db = request.app.state.db_session_factory()
    try:
        yield db
    finally:
        db.close()
