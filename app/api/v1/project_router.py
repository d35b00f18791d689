from fastapi import APIRouter, Depends
from app.schemas.project import (
    ProjectCreate,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectUpdate,
    DeleteProjectResponse,
)
from app.schemas.task import TaskListResponse
from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.models.user import User
from app.services import project_service, task_service
from sqlalchemy.orm import Session

router = APIRouter()


@router.post("/", response_model=ProjectDetailResponse)
async def create_project(
    body: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return project_service.create_project(db, current_user.id, body)


@router.get("/", response_model=ProjectListResponse)
async def get_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"projects": project_service.list_projects(db, current_user.id)}


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return project_service.get_project(db, current_user.id, project_id)


@router.put("/{project_id}", response_model=ProjectDetailResponse)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return project_service.update_project(db, current_user.id, project_id, body)


# Deleting a project also deletes its tasks
@router.delete("/{project_id}", response_model=DeleteProjectResponse)
async def delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    project_service.delete_project(db, current_user.id, project_id)
    return {"message": "Project deleted successfully"}


# Only tasks the user created or is assigned to are listed
@router.get("/{project_id}/tasks", response_model=TaskListResponse)
async def get_project_tasks(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"tasks": task_service.list_tasks_for_project(db, current_user.id, project_id)}
