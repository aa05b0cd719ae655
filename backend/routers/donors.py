from fastapi import APIRouter, Depends
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from database import get_db
from middleware import require_donor, require_admin_or_requester
from models import AvailabilityUpdate, DonationCreate
from services import Identity, ok
from services import directory, ledger, workflow

router = APIRouter(prefix="/donors", tags=["Donors"])

@router.get("/search")
async def search_donors(
    blood_type: Optional[str] = None,
    name: Optional[str] = None,
    region: Optional[str] = None,
    identity: Identity = Depends(require_admin_or_requester),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    donors = await directory.search_donors(db, blood_type=blood_type, name=name, region=region)
    if not donors:
        return ok("No donors found for given criteria", [])
    return ok("Donor search results", donors)

@router.get("/availability")
async def get_availability(
    identity: Identity = Depends(require_donor),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    return ok("Availability fetched successfully", await ledger.get_availability(db, identity))

@router.put("/availability")
async def update_availability(
    data: AvailabilityUpdate,
    identity: Identity = Depends(require_donor),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    donor = await ledger.set_availability(db, identity, data.is_available())
    return ok("Availability updated", {"availability": donor["availability"]})

@router.post("/donate")
async def donate(
    data: Optional[DonationCreate] = None,
    identity: Identity = Depends(require_donor),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    data = data or DonationCreate()
    result = await ledger.record_donation(db, identity, units=data.units, notes=data.notes)
    return ok("Donation recorded and inventory updated", result)

@router.get("/requests")
async def matching_requests(
    identity: Identity = Depends(require_donor),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    requests = await workflow.matching_pending_requests(db, identity)
    return ok("Pending matching requests", requests)

@router.get("/history")
async def donation_history(
    identity: Identity = Depends(require_donor),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    return ok("Donation history fetched", await ledger.get_history(db, identity))
