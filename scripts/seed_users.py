"""
Task Manager - Database Seed Script

Creates a demo user with one list of tasks for local development.

Usage:
    python -m scripts.seed_users
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session, select

from taskmanager.auth import credentials
from taskmanager.config import settings
from taskmanager.database import get_engine, init_db
from taskmanager.errors import DuplicateEmailError
from taskmanager.lists.models import Task, TaskList


DEMO_EMAIL = "demo@taskmanager.local"
DEMO_PASSWORD = "demo-password"
DEMO_TASKS = ["Buy milk", "Write report", "Call the bank"]


def seed_demo_user():
    """Create the demo user and a starter list."""
    engine = get_engine(settings.DATABASE_URL)
    init_db(engine)
    
    with Session(engine) as session:
        try:
            user = credentials.register(session, DEMO_EMAIL, DEMO_PASSWORD)
        except DuplicateEmailError:
            print("Demo user already exists.")
            return
        
        task_list = TaskList(title="Getting started", user_id=user.id)
        session.add(task_list)
        session.commit()
        session.refresh(task_list)
        
        for title in DEMO_TASKS:
            session.add(Task(title=title, list_id=task_list.id))
        session.commit()
        
        count = len(session.exec(select(Task).where(Task.list_id == task_list.id)).all())
        
        print("Demo user created successfully!")
        print(f"  Email: {DEMO_EMAIL}")
        print(f"  Password: {DEMO_PASSWORD}")
        print(f"  Tasks: {count}")


if __name__ == "__main__":
    print("=" * 50)
    print("Task Manager - User Seed Script")
    print("=" * 50)
    
    seed_demo_user()
    
    print()
    print("Done!")
