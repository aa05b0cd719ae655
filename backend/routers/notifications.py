from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from database import get_db
from middleware import get_current_identity
from services import Identity, ok
from services import directory

router = APIRouter(prefix="/notifications", tags=["Notifications"])

@router.get("")
async def get_notifications(
    identity: Identity = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    notifications = await directory.list_notifications(db, identity)
    return ok("Dashboard notifications", notifications)

@router.put("/read/{notification_id}")
async def mark_read(
    notification_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    await directory.mark_notification_read(db, notification_id)
    return ok("Notification marked as read")
