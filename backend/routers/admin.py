"""Admin Routes - user administration"""
from fastapi import APIRouter, HTTPException, Depends
from typing import List

from backend.dependencies import get_user_service
from backend.routers.auth import require_admin
from backend.schemas.auth import MessageResponse, UserAdminOut
from backend.services.user_service import UserService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[UserAdminOut])
async def list_users(users: UserService = Depends(get_user_service)):
    return users.get_all_users()


@router.post("/{user_id}/promote", response_model=MessageResponse)
async def promote_user(user_id: int, users: UserService = Depends(get_user_service)):
    if not users.promote_to_admin(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User promoted to admin"}


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: int, users: UserService = Depends(get_user_service)):
    if not users.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User deleted"}
