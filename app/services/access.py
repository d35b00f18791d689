"""Authorization predicates shared by the project and task services.

Project visibility: the owner or any member.
Task visibility: the creator or the assignee. Project membership alone does
not make a task visible.
"""
from typing import Optional

from sqlalchemy import or_

from app.core.exceptions import NotAuthenticatedError
from app.models.project import Project
from app.models.task import Task


def require_caller(caller_id: Optional[str]) -> str:
    if not caller_id:
        raise NotAuthenticatedError("Not authenticated")
    return caller_id


def is_project_owner(project: Project, caller_id: str) -> bool:
    return project.owner_id == caller_id


def is_project_member(project: Project, caller_id: str) -> bool:
    return any(member.id == caller_id for member in project.members)


def can_view_project(project: Project, caller_id: str) -> bool:
    # The owner is authorized even when not listed in members
    return is_project_owner(project, caller_id) or is_project_member(project, caller_id)


def can_view_task(task: Task, caller_id: str) -> bool:
    return task.created_by_id == caller_id or task.assigned_to_id == caller_id


def project_visibility_filter(caller_id: str):
    return or_(
        Project.owner_id == caller_id,
        Project.members.any(id=caller_id),
    )


def task_visibility_filter(caller_id: str):
    return or_(
        Task.assigned_to_id == caller_id,
        Task.created_by_id == caller_id,
    )
