from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from database import get_db
from middleware import require_admin
from models import (
    BankInventoryUpdate, BloodBankCreate, InventoryUnitsUpdate, NotificationCreate, StatusUpdate
)
from services import Identity, ok
from services import admin, directory, ledger, workflow

router = APIRouter(prefix="/admin", tags=["Admin"])

@router.post("/notifications")
async def create_notification(
    data: NotificationCreate,
    identity: Identity = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    notification = await directory.broadcast_notification(db, data)
    return ok("Notification created", notification, status_code=201)

@router.put("/donors/{user_id}/verify")
async def verify_donor(
    user_id: str,
    identity: Identity = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    donor = await ledger.verify_donor(db, user_id)
    return ok("Donor verified (reputation updated)", donor)

# ==================== Blood banks ====================

@router.post("/banks")
async def create_bank(
    data: BloodBankCreate,
    identity: Identity = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    bank = await admin.create_bank(db, data)
    return ok("Blood bank added", bank, status_code=201)

@router.get("/banks")
async def get_banks(
    identity: Identity = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    return ok("All blood banks fetched", await admin.list_banks(db))

@router.put("/banks/{bank_id}/inventory")
async def update_bank_inventory(
    bank_id: str,
    data: BankInventoryUpdate,
    identity: Identity = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    bank = await admin.update_bank_inventory(db, bank_id, data.available_units)
    return ok("Blood bank inventory updated", bank)

# ==================== Requests & inventory ====================

@router.put("/requests/{request_id}/status")
async def override_request_status(
    request_id: str,
    data: StatusUpdate,
    identity: Identity = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    request = await workflow.update_request_status(db, request_id, data.status, identity)
    return ok("Request status updated", request)

@router.put("/inventory/units")
async def set_inventory_units(
    data: InventoryUnitsUpdate,
    identity: Identity = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    blood_type = data.blood_type.value if data.blood_type else None
    inventory = await ledger.set_inventory_units(db, blood_type, data.units)
    return ok("Inventory units updated", inventory)

@router.get("/inventory/units")
async def get_inventory_units(
    identity: Identity = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    return ok("Inventory data", await ledger.list_inventory(db))
