from fastapi import APIRouter, Depends, Query
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from database import get_db
from middleware import get_current_identity
from services import Identity, ok
from services import directory

router = APIRouter(prefix="/inventory", tags=["Inventory"])

@router.get("/search")
async def search_inventory(
    blood_type: Optional[str] = Query(None, alias="type"),
    region: Optional[str] = None,
    identity: Identity = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    data = await directory.search_inventory(db, blood_type=blood_type, region=region)
    return ok("Blood search results", data)
