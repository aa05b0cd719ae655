"""
Admin user management and the partner blood bank directory.
"""
import logging
import math
from typing import Optional, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from models import BloodBank, BloodBankCreate, Donor, UserRole, UserUpdate
from services.errors import NotFound, ValidationError, Conflict

logger = logging.getLogger(__name__)

USER_PROJECTION = {"_id": 0, "password_hash": 0}


# ==================== Users ====================

async def list_users(
    db: AsyncIOMotorDatabase, page: int = 1, limit: int = 10, role: Optional[str] = None
) -> dict:
    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive")
    query = {"role": role} if role else {}
    users = await db.users.find(query, USER_PROJECTION) \
        .sort("created_at", 1).skip((page - 1) * limit).limit(limit).to_list(limit)
    count = await db.users.count_documents(query)
    return {
        "users": users,
        "total_pages": math.ceil(count / limit),
        "current_page": page,
    }


async def update_user(db: AsyncIOMotorDatabase, user_id: str, updates: UserUpdate) -> dict:
    changes = updates.model_dump(mode="json", exclude_none=True)
    if not changes:
        raise ValidationError("Nothing to update")

    user = await db.users.find_one_and_update(
        {"id": user_id},
        {"$set": changes},
        projection=USER_PROJECTION,
        return_document=ReturnDocument.AFTER,
    )
    if not user:
        raise NotFound("User not found")

    # keep the 1:1 donor profile in step with a promotion
    if user["role"] == UserRole.DONOR.value:
        existing = await db.donors.find_one({"user_id": user_id}, {"_id": 0, "id": 1})
        if not existing:
            try:
                await db.donors.insert_one(Donor(user_id=user_id).model_dump(mode="json"))
            except DuplicateKeyError:
                # created concurrently
                pass
    logger.info("User %s updated: %s", user_id, changes)
    return user


async def delete_user(db: AsyncIOMotorDatabase, user_id: str) -> None:
    result = await db.users.delete_one({"id": user_id})
    if result.deleted_count == 0:
        raise NotFound("User not found")
    await db.donors.delete_one({"user_id": user_id})
    logger.info("User %s deleted", user_id)


# ==================== Blood banks ====================

async def create_bank(db: AsyncIOMotorDatabase, data: BloodBankCreate) -> dict:
    if not data.name or not data.location:
        raise ValidationError("Name and location are required")
    if await db.blood_banks.find_one({"name": data.name}, {"_id": 0, "id": 1}):
        raise Conflict("Blood bank already exists")

    doc = BloodBank(name=data.name, location=data.location, contact=data.contact or "").model_dump(mode="json")
    try:
        await db.blood_banks.insert_one(dict(doc))
    except DuplicateKeyError:
        raise Conflict("Blood bank already exists")
    logger.info("Blood bank %s added", data.name)
    return doc


async def list_banks(db: AsyncIOMotorDatabase) -> List[dict]:
    return await db.blood_banks.find({}, {"_id": 0}).sort("name", 1).to_list(None)


async def update_bank_inventory(db: AsyncIOMotorDatabase, bank_id: str, available_units: dict) -> dict:
    if any(units < 0 for units in available_units.values()):
        raise ValidationError("Units cannot be negative")
    units = {getattr(k, "value", k): v for k, v in available_units.items()}
    bank = await db.blood_banks.find_one_and_update(
        {"id": bank_id},
        {"$set": {"available_units": units}},
        projection={"_id": 0},
        return_document=ReturnDocument.AFTER,
    )
    if not bank:
        raise NotFound("Blood bank not found")
    return bank
