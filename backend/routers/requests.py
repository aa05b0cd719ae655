from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from database import get_db
from middleware import get_current_identity, require_requester
from models import BloodRequestCreate, StatusUpdate
from services import Identity, ok
from services import workflow

router = APIRouter(prefix="/requests", tags=["Blood Requests"])

@router.get("")
async def get_requests(
    identity: Identity = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    requests = await workflow.list_requests(db, identity)
    return ok("Requests fetched successfully", requests)

@router.get("/user")
async def get_own_requests(
    identity: Identity = Depends(require_requester),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    requests = await workflow.list_own_requests(db, identity)
    return ok("Fetched user requests", requests)

@router.post("")
async def create_request(
    data: BloodRequestCreate,
    identity: Identity = Depends(require_requester),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    request = await workflow.submit_request(db, identity.id, data)
    return ok("Blood request submitted", request, status_code=201)

@router.post("/{request_id}/status")
async def update_status(
    request_id: str,
    data: StatusUpdate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    request = await workflow.update_request_status(db, request_id, data.status, identity)
    return ok("Request status updated successfully", request)
