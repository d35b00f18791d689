import logging
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from app.core.database import commit_or_rollback, utcnow
from app.core.exceptions import NotFoundError, UnauthorizedError, ValidationError
from app.models.project import Project
from app.models.user import User
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.services.access import (
    can_view_project,
    is_project_owner,
    project_visibility_filter,
    require_caller,
)

logger = logging.getLogger(__name__)


def _with_relations(query):
    return query.options(selectinload(Project.owner), selectinload(Project.members))


def _clean_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("Project name must not be empty")
    return name.strip()


def _resolve_members(db: Session, member_ids: Optional[List[str]]) -> List[User]:
    """Load the users behind ``member_ids``, rejecting ids that do not exist."""
    unique_ids = list(dict.fromkeys(member_ids or []))
    if not unique_ids:
        return []
    users = db.query(User).filter(User.id.in_(unique_ids)).all()
    found = {user.id for user in users}
    missing = [user_id for user_id in unique_ids if user_id not in found]
    if missing:
        raise ValidationError(f"Unknown member ids: {', '.join(missing)}")
    return users


def _load_project(db: Session, project_id: str) -> Project:
    project = _with_relations(db.query(Project)).filter(Project.id == project_id).first()
    if not project:
        raise NotFoundError("Project not found")
    return project


def list_projects(db: Session, caller_id: Optional[str]) -> List[Project]:
    caller_id = require_caller(caller_id)
    return (
        _with_relations(db.query(Project))
        .filter(project_visibility_filter(caller_id))
        .order_by(Project.created_at.desc())
        .all()
    )


def get_project(db: Session, caller_id: Optional[str], project_id: str) -> Project:
    caller_id = require_caller(caller_id)
    project = _load_project(db, project_id)
    if not can_view_project(project, caller_id):
        logger.warning(f"User {caller_id} denied access to project {project_id}")
        raise UnauthorizedError("You don't have access to this project")
    return project


def create_project(db: Session, caller_id: Optional[str], body: ProjectCreate) -> Project:
    caller_id = require_caller(caller_id)
    name = _clean_name(body.name)
    members = _resolve_members(db, body.members)

    new_project = Project(
        owner_id=caller_id,
        name=name,
        description=body.description,
        members=members,
    )
    db.add(new_project)
    commit_or_rollback(db)
    db.refresh(new_project)
    logger.info(f"User {caller_id} created project {new_project.id}")
    return new_project


def update_project(
    db: Session, caller_id: Optional[str], project_id: str, body: ProjectUpdate
) -> Project:
    caller_id = require_caller(caller_id)
    project = _load_project(db, project_id)
    if not is_project_owner(project, caller_id):
        logger.warning(f"User {caller_id} tried to update project {project_id} they do not own")
        raise UnauthorizedError("You can only update projects you own")

    # Validate everything before touching the record
    name = _clean_name(body.name)
    members = _resolve_members(db, body.members)

    project.name = name
    project.description = body.description
    project.members = members
    # Member changes touch only project_members, so bump the timestamp here
    project.updated_at = utcnow()
    commit_or_rollback(db)
    db.refresh(project)
    logger.info(f"User {caller_id} updated project {project_id}")
    return project


def delete_project(db: Session, caller_id: Optional[str], project_id: str) -> None:
    caller_id = require_caller(caller_id)
    project = _load_project(db, project_id)
    if not is_project_owner(project, caller_id):
        logger.warning(f"User {caller_id} tried to delete project {project_id} they do not own")
        raise UnauthorizedError("You can only delete projects you own")

    db.delete(project)
    commit_or_rollback(db)
    logger.info(f"User {caller_id} deleted project {project_id} and its tasks")
