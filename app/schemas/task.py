from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum
from datetime import datetime
from app.schemas.project import ProjectResponse
from app.schemas.user import UserSummary


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


class TaskCreate(BaseModel):
    title: str = Field(..., description="Task title")
    project_id: Optional[str] = Field(None, description="Project the task belongs to")
    description: Optional[str] = Field(None, description="Task description")
    status: TaskStatus = Field(TaskStatus.TODO, description="Task status")
    priority: TaskPriority = Field(TaskPriority.NORMAL, description="Task priority")
    due_date: Optional[datetime] = Field(None, description="Task due date")
    assigned_to_id: Optional[str] = Field(None, description="ID of the assigned user")


class TaskUpdate(BaseModel):
    """Partial update: only fields sent by the client are applied.

    Sending ``null`` clears a nullable field; leaving it out keeps the old value.
    """

    title: Optional[str] = Field(None, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    status: Optional[TaskStatus] = Field(None, description="Task status")
    priority: Optional[TaskPriority] = Field(None, description="Task priority")
    due_date: Optional[datetime] = Field(None, description="Task due date")
    assigned_to_id: Optional[str] = Field(None, description="ID of the assigned user")


class TaskResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    project_id: str
    created_by_id: str
    assigned_to_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = {"from_attributes": True}


class TaskDetailResponse(TaskResponse):
    project: ProjectResponse
    created_by: UserSummary
    assigned_to: Optional[UserSummary] = None


class TaskListResponse(BaseModel):
    tasks: List[TaskDetailResponse] = Field(..., description="Tasks created by or assigned to the user")


class DeleteTaskResponse(BaseModel):
    message: str = Field(..., description="Status message confirming deletion")
