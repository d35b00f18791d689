from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.models.user import User
from app.schemas.task import (
    DeleteTaskResponse,
    TaskCreate,
    TaskDetailResponse,
    TaskListResponse,
    TaskUpdate,
)
from app.services import task_service

router = APIRouter()


@router.get("/", response_model=TaskListResponse)
async def get_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"tasks": task_service.list_tasks(db, current_user.id)}


@router.post("/", response_model=TaskDetailResponse)
async def create_task(
    body: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return task_service.create_task(db, current_user.id, body)


@router.get("/{task_id}", response_model=TaskDetailResponse)
async def get_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return task_service.get_task(db, current_user.id, task_id)


# Partial update: fields left out of the body are not changed
@router.patch("/{task_id}", response_model=TaskDetailResponse)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return task_service.update_task(db, current_user.id, task_id, body)


@router.delete("/{task_id}", response_model=DeleteTaskResponse)
async def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task_service.delete_task(db, current_user.id, task_id)
    return {"message": "Task deleted successfully"}
