"""
Task Manager - Seed Script Tests
"""

from sqlmodel import Session, select

from scripts import seed_users
from taskmanager.auth.models import User
from taskmanager.config import Settings
from taskmanager.database import get_engine
from taskmanager.lists.models import Task, TaskList


def test_seed_demo_user_is_idempotent(tmp_path, monkeypatch, capsys):
    """Seeding twice leaves exactly one demo user with one starter list."""
    database_url = f"sqlite:///{tmp_path / 'seed.db'}"
    monkeypatch.setattr(
        seed_users,
        "settings",
        Settings(DATABASE_URL=database_url, SECRET_KEY="seed-secret"),
    )
    
    seed_users.seed_demo_user()
    seed_users.seed_demo_user()
    
    assert "already exists" in capsys.readouterr().out
    
    engine = get_engine(database_url)
    with Session(engine) as session:
        users = session.exec(select(User).where(User.email == seed_users.DEMO_EMAIL)).all()
        lists = session.exec(select(TaskList)).all()
        tasks = session.exec(select(Task)).all()
    engine.dispose()
    
    assert len(users) == 1
    assert len(lists) == 1
    assert sorted(t.title for t in tasks) == sorted(seed_users.DEMO_TASKS)
