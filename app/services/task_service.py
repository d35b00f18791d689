import logging
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from app.core.database import commit_or_rollback
from app.core.exceptions import NotFoundError, UnauthorizedError, ValidationError
from app.models.project import Project
from app.models.task import Task
from app.models.user import User
from app.schemas.task import TaskCreate, TaskUpdate
from app.services.access import (
    can_view_project,
    can_view_task,
    require_caller,
    task_visibility_filter,
)

logger = logging.getLogger(__name__)

# Fields that may not be set to null through a patch
_REQUIRED_FIELDS = ("title", "status", "priority")


def _with_relations(query):
    return query.options(
        selectinload(Task.project),
        selectinload(Task.created_by),
        selectinload(Task.assigned_to),
    )


def _check_assignee(db: Session, assigned_to_id: Optional[str]) -> None:
    if assigned_to_id is None:
        return
    if not db.query(User).filter(User.id == assigned_to_id).first():
        raise ValidationError("Assigned user not found")


def _load_visible_task(db: Session, caller_id: str, task_id: str) -> Task:
    task = (
        _with_relations(db.query(Task))
        .filter(Task.id == task_id, task_visibility_filter(caller_id))
        .first()
    )
    if not task:
        raise NotFoundError("Task not found or unauthorized")
    return task


def list_tasks_for_project(db: Session, caller_id: Optional[str], project_id: str) -> List[Task]:
    """Tasks in ``project_id`` that the caller created or is assigned to."""
    caller_id = require_caller(caller_id)
    return (
        _with_relations(db.query(Task))
        .filter(Task.project_id == project_id, task_visibility_filter(caller_id))
        .order_by(Task.created_at.desc())
        .all()
    )


def list_tasks(db: Session, caller_id: Optional[str]) -> List[Task]:
    caller_id = require_caller(caller_id)
    return (
        _with_relations(db.query(Task))
        .filter(task_visibility_filter(caller_id))
        .order_by(Task.created_at.desc())
        .all()
    )


def get_task(db: Session, caller_id: Optional[str], task_id: str) -> Task:
    caller_id = require_caller(caller_id)
    return _load_visible_task(db, caller_id, task_id)


def create_task(db: Session, caller_id: Optional[str], body: TaskCreate) -> Task:
    caller_id = require_caller(caller_id)
    if not body.title or not body.title.strip():
        raise ValidationError("Task title must not be empty")
    if not body.project_id:
        raise ValidationError("Project ID is required to create a task")

    project = (
        db.query(Project)
        .options(selectinload(Project.members))
        .filter(Project.id == body.project_id)
        .first()
    )
    if not project:
        raise NotFoundError("Project not found")
    if not can_view_project(project, caller_id):
        logger.warning(f"User {caller_id} tried to add a task to project {project.id}")
        raise UnauthorizedError("You don't have access to this project")
    _check_assignee(db, body.assigned_to_id)

    # created_by_id always comes from the caller, never from the request
    new_task = Task(
        title=body.title.strip(),
        description=body.description,
        status=body.status.value,
        priority=body.priority.value,
        due_date=body.due_date,
        project_id=project.id,
        assigned_to_id=body.assigned_to_id,
        created_by_id=caller_id,
    )
    db.add(new_task)
    commit_or_rollback(db)
    logger.info(f"User {caller_id} created task {new_task.id} in project {project.id}")
    return _load_visible_task(db, caller_id, new_task.id)


def update_task(
    db: Session, caller_id: Optional[str], task_id: str, body: TaskUpdate
) -> Task:
    """Apply the fields present in ``body``; absent fields keep their values.

    Only the creator or the assignee may update a task. Anyone else gets the
    same "not found" answer as a read would give them.
    """
    caller_id = require_caller(caller_id)
    task = _load_visible_task(db, caller_id, task_id)

    patch = body.model_dump(exclude_unset=True)
    for field in _REQUIRED_FIELDS:
        if field in patch and patch[field] is None:
            raise ValidationError(f"Task {field} cannot be cleared")
    if "title" in patch:
        if not patch["title"].strip():
            raise ValidationError("Task title must not be empty")
        patch["title"] = patch["title"].strip()
    if "assigned_to_id" in patch:
        _check_assignee(db, patch["assigned_to_id"])

    for field, value in patch.items():
        setattr(task, field, getattr(value, "value", value))
    commit_or_rollback(db)
    logger.info(f"User {caller_id} updated task {task_id}: {', '.join(patch) or 'no changes'}")

    db.refresh(task)
    return task


def delete_task(db: Session, caller_id: Optional[str], task_id: str) -> None:
    caller_id = require_caller(caller_id)
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise NotFoundError("Task not found")
    if task.created_by_id != caller_id:
        logger.warning(f"User {caller_id} tried to delete task {task_id} created by someone else")
        raise UnauthorizedError("You can only delete tasks you created")

    db.delete(task)
    commit_or_rollback(db)
    logger.info(f"User {caller_id} deleted task {task_id}")
