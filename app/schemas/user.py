from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional, List


class UserSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None

    model_config = {"from_attributes": True}


class UserResponse(UserSummary):
    email_verified: Optional[datetime] = None
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, description="New display name")
    email: Optional[EmailStr] = Field(None, description="New sign-in email")


class UserListResponse(BaseModel):
    users: List[UserSummary] = Field(..., description="All registered users")
