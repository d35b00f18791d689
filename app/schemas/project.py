from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from app.schemas.user import UserSummary


class ProjectCreate(BaseModel):
    name: str = Field(..., description="The name of the project")
    description: Optional[str] = Field(None, description="Project description")
    members: List[str] = Field(default_factory=list, description="IDs of the users invited to the project")


class ProjectUpdate(BaseModel):
    name: str = Field(..., description="Updated project name")
    description: Optional[str] = Field(None, description="Updated description")
    members: Optional[List[str]] = Field(
        None, description="Full replacement of the member set; omitted or empty clears it"
    )


class ProjectResponse(BaseModel):
    id: str = Field(..., description="Project unique ID")
    owner_id: str = Field(..., description="ID of the user owning the project")
    name: str = Field(..., description="Project name")
    description: Optional[str] = Field(None, description="Project description")
    created_at: Optional[datetime] = Field(None, description="Timestamp when the project was created")
    updated_at: Optional[datetime] = Field(None, description="Timestamp when the project was last updated")
    model_config = {"from_attributes": True}


class ProjectDetailResponse(ProjectResponse):
    owner: UserSummary = Field(..., description="Project owner")
    members: List[UserSummary] = Field(default_factory=list, description="Project members")


class ProjectListResponse(BaseModel):
    projects: List[ProjectDetailResponse] = Field(..., description="Projects the user owns or is a member of")


class DeleteProjectResponse(BaseModel):
    message: str = Field(..., description="Status message confirming deletion")
