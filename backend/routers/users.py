from fastapi import APIRouter, Depends
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from database import get_db
from middleware import require_admin
from models import UserUpdate
from services import Identity, ok
from services import admin

router = APIRouter(prefix="/admin/users", tags=["Users"])

@router.get("")
async def get_users(
    page: int = 1,
    limit: int = 10,
    role: Optional[str] = None,
    identity: Identity = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    return ok("Users list", await admin.list_users(db, page=page, limit=limit, role=role))

@router.put("/{user_id}")
async def update_user(
    user_id: str,
    updates: UserUpdate,
    identity: Identity = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    return ok("User updated", await admin.update_user(db, user_id, updates))

@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    identity: Identity = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    await admin.delete_user(db, user_id)
    return ok("User deleted")
