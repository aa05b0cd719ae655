"""
Donation & Inventory Ledger
Donor self-service (availability, donations, history) and the blood inventory counters.
"""
import logging
from typing import Optional, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from models import BloodGroup, BloodInventory, utc_now
from services.auth import Identity
from services.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_DONATION_NOTE = "Recorded via dashboard"


def _new_row_fields(blood_type: str) -> dict:
    # fields an upsert must fill in when the row does not exist yet
    return BloodInventory(blood_type=blood_type).model_dump(mode="json", include={"id", "status"})


async def _get_donor(db: AsyncIOMotorDatabase, user_id: str, projection: Optional[dict] = None) -> dict:
    donor = await db.donors.find_one({"user_id": user_id}, projection or {"_id": 0})
    if not donor:
        raise NotFound("Donor profile not found")
    return donor


async def credit_inventory(db: AsyncIOMotorDatabase, blood_type: str, units: int) -> dict:
    """Atomically add units to a blood type's counter, creating the row if needed."""
    return await db.blood_inventory.find_one_and_update(
        {"blood_type": blood_type},
        {
            "$inc": {"available_units": units},
            "$setOnInsert": _new_row_fields(blood_type),
        },
        projection={"_id": 0},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )


async def record_donation(
    db: AsyncIOMotorDatabase, identity: Identity, units: int = 1, notes: Optional[str] = None
) -> dict:
    if units is None or units < 1:
        raise ValidationError("Units must be at least 1")

    now = utc_now()
    entry = {"date": now, "units": units, "notes": notes or DEFAULT_DONATION_NOTE}

    donor = await db.donors.find_one_and_update(
        {"user_id": identity.id},
        {"$push": {"donation_log": entry}, "$set": {"last_donation_date": now}},
        projection={"_id": 0},
        return_document=ReturnDocument.AFTER,
    )
    if not donor:
        raise NotFound("Donor profile not found")

    # Separate document: the log entry above is not rolled back if this fails
    user = await db.users.find_one({"id": identity.id}, {"_id": 0, "blood_type": 1})
    if not user:
        raise NotFound("User not found")
    inventory = await credit_inventory(db, user["blood_type"], units)

    logger.info("Donation of %d unit(s) of %s recorded for %s", units, user["blood_type"], identity.id)
    return {
        "donor": {
            "id": donor["id"],
            "last_donation_date": donor["last_donation_date"],
            "donation_log": donor.get("donation_log", []),
        },
        "inventory": {
            "blood_type": inventory["blood_type"],
            "available_units": inventory["available_units"],
        },
    }


async def set_availability(db: AsyncIOMotorDatabase, identity: Identity, available: bool) -> dict:
    donor = await db.donors.find_one_and_update(
        {"user_id": identity.id},
        {"$set": {"availability": bool(available)}},
        projection={"_id": 0},
        return_document=ReturnDocument.AFTER,
    )
    if not donor:
        raise NotFound("Donor profile not found")
    return donor


async def get_availability(db: AsyncIOMotorDatabase, identity: Identity) -> dict:
    donor = await _get_donor(db, identity.id, {"_id": 0, "availability": 1})
    return {"availability": donor.get("availability")}


async def get_history(db: AsyncIOMotorDatabase, identity: Identity) -> List[dict]:
    donor = await _get_donor(db, identity.id, {"_id": 0, "donation_log": 1})
    return donor.get("donation_log") or []


async def verify_donor(db: AsyncIOMotorDatabase, user_id: str) -> dict:
    donor = await db.donors.find_one_and_update(
        {"user_id": user_id},
        {"$set": {"reputation": 10}},
        projection={"_id": 0},
        return_document=ReturnDocument.AFTER,
    )
    if not donor:
        raise NotFound("Donor profile not found")
    logger.info("Donor %s verified", user_id)
    return donor


async def set_inventory_units(db: AsyncIOMotorDatabase, blood_type: Optional[str], units: Optional[int]) -> dict:
    """Admin overwrite of a blood type's unit count."""
    if not blood_type or units is None:
        raise ValidationError("blood_type and units are required")
    if units < 0:
        raise ValidationError("Units cannot be negative")
    try:
        blood_type = BloodGroup(blood_type).value
    except ValueError:
        raise ValidationError(f"Invalid blood type: {blood_type}")
    inventory = await db.blood_inventory.find_one_and_update(
        {"blood_type": blood_type},
        {
            "$set": {"available_units": units},
            "$setOnInsert": _new_row_fields(blood_type),
        },
        projection={"_id": 0},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    logger.info("Inventory for %s set to %d", blood_type, units)
    return inventory


async def list_inventory(db: AsyncIOMotorDatabase) -> List[dict]:
    return await db.blood_inventory.find({}, {"_id": 0}).sort("blood_type", 1).to_list(None)
