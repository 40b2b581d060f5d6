"""
Task Manager - List and Task Routes

All routes require a valid access token and only ever touch lists owned by
the token's user. Task routes re-check list ownership before every read
or write.

Failures are reported as a bare 400; no error details are returned.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session as DBSession, select

from taskmanager.auth.dependencies import get_current_user_id
from taskmanager.database import get_db
from taskmanager.errors import NotFoundError
from taskmanager.lists.models import Task, TaskList
from taskmanager.lists.schemas import (
    ListCreate,
    ListResponse,
    ListUpdate,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)


router = APIRouter(prefix="/lists", tags=["lists"])

logger = logging.getLogger(__name__)


def bad_request() -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST)


def get_owned_list(db: DBSession, list_id: UUID, user_id: UUID) -> TaskList:
    """
    Fetch a list only if it belongs to the user.
    
    Raises:
        NotFoundError: No such list for this user
    """
    statement = select(TaskList).where(
        TaskList.id == list_id,
        TaskList.user_id == user_id,
    )
    task_list = db.exec(statement).first()
    if not task_list:
        raise NotFoundError(f"List {list_id} not found")
    return task_list


def get_list_task(db: DBSession, list_id: UUID, task_id: UUID) -> Task:
    statement = select(Task).where(Task.id == task_id, Task.list_id == list_id)
    task = db.exec(statement).first()
    if not task:
        raise NotFoundError(f"Task {task_id} not found")
    return task


def apply_updates(record, updates: dict) -> None:
    for field, value in updates.items():
        if value is not None:
            setattr(record, field, value)


def delete_tasks_from_list(db: DBSession, list_id: UUID) -> int:
    """Delete every task of a list. Caller commits."""
    tasks = db.exec(select(Task).where(Task.list_id == list_id)).all()
    count = 0
    
    for task in tasks:
        db.delete(task)
        count += 1
    
    db.flush()
    return count


# =============================================================================
# LISTS
# =============================================================================

@router.get("", response_model=list[ListResponse])
async def get_lists(
    user_id: UUID = Depends(get_current_user_id),
    db: DBSession = Depends(get_db),
):
    """All lists owned by the current user."""
    try:
        statement = select(TaskList).where(TaskList.user_id == user_id)
        lists = db.exec(statement).all()
    except SQLAlchemyError:
        raise bad_request()
    
    return [ListResponse.model_validate(task_list) for task_list in lists]


@router.post("", response_model=ListResponse, status_code=status.HTTP_201_CREATED)
async def create_list(
    body: ListCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: DBSession = Depends(get_db),
):
    task_list = TaskList(title=body.title, user_id=user_id)
    
    try:
        db.add(task_list)
        db.commit()
        db.refresh(task_list)
    except SQLAlchemyError:
        db.rollback()
        raise bad_request()
    
    return ListResponse.model_validate(task_list)


@router.patch("/{list_id}", response_model=ListResponse)
async def update_list(
    list_id: UUID,
    body: ListUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: DBSession = Depends(get_db),
):
    """Update the sent fields of an owned list."""
    try:
        task_list = get_owned_list(db, list_id, user_id)
        apply_updates(task_list, body.model_dump(exclude_unset=True))
        db.add(task_list)
        db.commit()
        db.refresh(task_list)
    except NotFoundError:
        raise bad_request()
    except SQLAlchemyError:
        db.rollback()
        raise bad_request()
    
    return ListResponse.model_validate(task_list)


@router.delete("/{list_id}", response_model=ListResponse)
async def delete_list(
    list_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: DBSession = Depends(get_db),
):
    """
    Delete an owned list and all of its tasks.
    
    Returns the deleted list.
    """
    try:
        task_list = get_owned_list(db, list_id, user_id)
        removed = ListResponse.model_validate(task_list)
        count = delete_tasks_from_list(db, list_id)
        db.delete(task_list)
        db.commit()
    except NotFoundError:
        raise bad_request()
    except SQLAlchemyError:
        db.rollback()
        raise bad_request()
    
    logger.info("Deleted list %s and %d task(s)", list_id, count)
    return removed


# =============================================================================
# TASKS
# =============================================================================

@router.get("/{list_id}/tasks", response_model=list[TaskResponse])
async def get_tasks(
    list_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: DBSession = Depends(get_db),
):
    try:
        get_owned_list(db, list_id, user_id)
        tasks = db.exec(select(Task).where(Task.list_id == list_id)).all()
    except (NotFoundError, SQLAlchemyError):
        raise bad_request()
    
    return [TaskResponse.model_validate(task) for task in tasks]


@router.get("/{list_id}/tasks/{task_id}", response_model=TaskResponse)
async def get_task(
    list_id: UUID,
    task_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: DBSession = Depends(get_db),
):
    try:
        get_owned_list(db, list_id, user_id)
        task = get_list_task(db, list_id, task_id)
    except (NotFoundError, SQLAlchemyError):
        raise bad_request()
    
    return TaskResponse.model_validate(task)


@router.post(
    "/{list_id}/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    list_id: UUID,
    body: TaskCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: DBSession = Depends(get_db),
):
    """Add a task to an owned list."""
    try:
        get_owned_list(db, list_id, user_id)
        task = Task(title=body.title, list_id=list_id)
        db.add(task)
        db.commit()
        db.refresh(task)
    except NotFoundError:
        raise bad_request()
    except SQLAlchemyError:
        db.rollback()
        raise bad_request()
    
    return TaskResponse.model_validate(task)


@router.patch("/{list_id}/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    list_id: UUID,
    task_id: UUID,
    body: TaskUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: DBSession = Depends(get_db),
):
    """Update title and/or completion of a task in an owned list."""
    try:
        get_owned_list(db, list_id, user_id)
        task = get_list_task(db, list_id, task_id)
        apply_updates(task, body.model_dump(exclude_unset=True))
        db.add(task)
        db.commit()
        db.refresh(task)
    except NotFoundError:
        raise bad_request()
    except SQLAlchemyError:
        db.rollback()
        raise bad_request()
    
    return TaskResponse.model_validate(task)


@router.delete("/{list_id}/tasks/{task_id}", response_model=TaskResponse)
async def delete_task(
    list_id: UUID,
    task_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: DBSession = Depends(get_db),
):
    """Delete a task from an owned list and return it."""
    try:
        get_owned_list(db, list_id, user_id)
        task = get_list_task(db, list_id, task_id)
        removed = TaskResponse.model_validate(task)
        db.delete(task)
        db.commit()
    except NotFoundError:
        raise bad_request()
    except SQLAlchemyError:
        db.rollback()
        raise bad_request()
    
    return removed
