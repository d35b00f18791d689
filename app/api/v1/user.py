from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.models.user import User
from app.schemas.user import UserResponse, UserUpdate, UserListResponse
from app.api.v1.auth import get_current_user
from app.services import profile_service

router = APIRouter()


@router.get("/me", response_model=UserResponse)
def get_user_profile(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Return the profile of the signed-in user
    """
    return profile_service.get_profile(db, current_user.id)


@router.put("/me", response_model=UserResponse)
def update_user_profile(
    user_update: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update the name and/or email of the signed-in user
    """
    return profile_service.update_profile(db, current_user.id, user_update)


@router.get("/", response_model=UserListResponse)
def get_users(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List users that can be invited to projects or assigned to tasks
    """
    return {"users": profile_service.list_users(db, current_user.id)}
