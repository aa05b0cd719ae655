"""
Directory & Search
Role-aware lookups over banks, inventory, donors and notifications.
"""
import logging
import re
from typing import Optional, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from middleware.access import build_notification_filter
from models import Notification, NotificationCreate, UserRole
from services.auth import Identity
from services.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

# Static demand table served to admins; not derived from any data.
DEMAND_PREDICTIONS = {
    "A+": 72, "A-": 55, "B+": 64, "B-": 40,
    "O+": 78, "O-": 32, "AB+": 59, "AB-": 44,
}


async def search_inventory(
    db: AsyncIOMotorDatabase, blood_type: Optional[str] = None, region: Optional[str] = None
) -> dict:
    banks = await db.blood_banks.find({}, {"_id": 0}).to_list(None)
    if region:
        needle = region.lower()
        banks = [b for b in banks if needle in (b.get("location") or "").lower()]

    query = {}
    if blood_type:
        query["blood_type"] = blood_type
    inventory = await db.blood_inventory.find(query, {"_id": 0}).to_list(None)
    return {"banks": banks, "inventory": inventory}


async def search_donors(
    db: AsyncIOMotorDatabase,
    blood_type: Optional[str] = None,
    name: Optional[str] = None,
    region: Optional[str] = None,
) -> List[dict]:
    query = {"role": UserRole.DONOR.value}
    if blood_type:
        query["blood_type"] = blood_type
    if region:
        query["region"] = region
    if name:
        query["full_name"] = {"$regex": re.escape(name), "$options": "i"}

    users = await db.users.find(query, {"_id": 0, "password_hash": 0}).sort("full_name", 1).to_list(None)
    if not users:
        return []

    availability = {}
    try:
        profiles = await db.donors.find(
            {"user_id": {"$in": [u["id"] for u in users]}},
            {"_id": 0, "user_id": 1, "availability": 1}
        ).to_list(None)
        availability = {p["user_id"]: p.get("availability") for p in profiles}
    except Exception:
        logger.warning("Donor availability join failed", exc_info=True)

    return [{**u, "availability": availability.get(u["id"])} for u in users]


async def list_notifications(db: AsyncIOMotorDatabase, identity: Identity) -> List[dict]:
    user = await db.users.find_one({"id": identity.id}, {"_id": 0, "id": 1, "role": 1, "region": 1})
    if not user:
        raise NotFound("User not found")
    query = build_notification_filter(user)
    return await db.notifications.find(query, {"_id": 0}).sort("createdAt", -1).to_list(None)


async def mark_notification_read(db: AsyncIOMotorDatabase, notification_id: str) -> dict:
    notification = await db.notifications.find_one_and_update(
        {"id": notification_id},
        {"$set": {"isRead": True}},
        projection={"_id": 0},
        return_document=ReturnDocument.AFTER,
    )
    if not notification:
        raise NotFound("Notification not found")
    return notification


async def broadcast_notification(db: AsyncIOMotorDatabase, data: NotificationCreate) -> dict:
    if not data.title or not data.message:
        raise ValidationError("Title and message are required")
    doc = Notification(
        title=data.title, message=data.message, role=data.role, region=data.region
    ).model_dump(mode="json", by_alias=True)
    await db.notifications.insert_one(dict(doc))
    logger.info("Broadcast notification %s to role=%s region=%s", doc["id"], doc["role"], doc["region"])
    return doc


async def user_dashboard_stats(db: AsyncIOMotorDatabase, identity: Identity) -> dict:
    totals = await db.blood_inventory.aggregate([
        {"$group": {"_id": None, "total": {"$sum": "$available_units"}}}
    ]).to_list(1)
    donors = await db.donors.count_documents({"availability": True})
    requests = await db.requests.count_documents({"requester_id": identity.id})
    return {
        "blood_units": totals[0]["total"] if totals else 0,
        "donors": donors,
        "requests": requests,
    }


def demand_predictions() -> dict:
    return dict(DEMAND_PREDICTIONS)
