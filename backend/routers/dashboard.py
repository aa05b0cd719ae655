from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from database import get_db
from middleware import require_admin, require_requester
from services import Identity, ok
from services import directory

router = APIRouter(tags=["Dashboard & Utilities"])

@router.get("/")
async def root():
    return ok("Blood Donation Coordination API", {"status": "healthy"})

@router.get("/dashboard/user-stats")
async def get_user_stats(
    identity: Identity = Depends(require_requester),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    stats = await directory.user_dashboard_stats(db, identity)
    return ok("User dashboard stats", stats)

@router.get("/predictions")
async def get_predictions(identity: Identity = Depends(require_admin)):
    return ok("Mock Demand Prediction Data", directory.demand_predictions())
