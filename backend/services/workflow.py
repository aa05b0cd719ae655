"""
Request Workflow Engine
Blood request creation with donor fan-out, the status lifecycle, and the
role-scoped request listings.
"""
import logging
from typing import Optional, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from middleware.access import build_request_filter
from models import (
    BloodRequest, BloodRequestCreate, Notification, NotificationAudience,
    RequestStatus, UserRole, BloodGroup, Region, utc_now
)
from services.auth import Identity
from services.errors import ValidationError, NotFound

logger = logging.getLogger(__name__)

VALID_STATUSES = [s.value for s in RequestStatus]
# A requester may flag a new request as urgent but cannot pre-approve it
CREATION_STATUSES = {RequestStatus.PENDING.value, RequestStatus.CRITICAL.value}
REQUESTER_FIELDS = {"_id": 0, "id": 1, "full_name": 1, "blood_type": 1, "phone": 1, "region": 1}


def matching_request_message(blood_group: str, region: str) -> str:
    return f"A new request for {blood_group} has been posted in your region ({region})."


def _parse_choice(value: str, enum_cls, label: str) -> str:
    try:
        return enum_cls(value).value
    except ValueError:
        raise ValidationError(f"Invalid {label}: {value}")


async def submit_request(db: AsyncIOMotorDatabase, requester_id: str, data: BloodRequestCreate) -> dict:
    if not data.blood_group or not data.region:
        raise ValidationError("Blood group and region are required")

    blood_group = _parse_choice(data.blood_group, BloodGroup, "blood group")
    region = _parse_choice(data.region, Region, "region")
    status = data.status or RequestStatus.PENDING.value
    if status not in CREATION_STATUSES:
        raise ValidationError(
            f"Invalid status. Valid options: {', '.join(sorted(CREATION_STATUSES))}"
        )

    request = BloodRequest(
        requester_id=requester_id,
        blood_group=blood_group,
        region=region,
        hospital=data.hospital or "",
        notes=data.notes or "",
        status=status,
    )
    doc = request.model_dump(mode="json", by_alias=True)
    await db.requests.insert_one(dict(doc))

    await fan_out_request(db, blood_group, region)
    return doc


async def fan_out_request(db: AsyncIOMotorDatabase, blood_group: str, region: str) -> int:
    """Notify every donor matching the request. Best-effort: failures are only logged."""
    try:
        donors = await db.users.find(
            {"role": UserRole.DONOR.value, "blood_type": blood_group, "region": region},
            {"_id": 0, "id": 1}
        ).to_list(None)
        notifications = [
            Notification(
                title="New Matching Request",
                message=matching_request_message(blood_group, region),
                role=NotificationAudience.DONOR,
                region=region,
            ).model_dump(mode="json", by_alias=True)
            for _ in donors
        ]
        if notifications:
            await db.notifications.insert_many(notifications, ordered=False)
    except Exception:
        logger.warning("Notification fan-out failed for %s/%s", blood_group, region, exc_info=True)
        return 0
    logger.info("Fanned out %d notification(s) for %s in %s", len(notifications), blood_group, region)
    return len(notifications)


async def update_request_status(
    db: AsyncIOMotorDatabase, request_id: str, new_status: Optional[str], actor: Identity
) -> dict:
    if not new_status or new_status not in VALID_STATUSES:
        raise ValidationError(f"Invalid status. Valid options: {', '.join(VALID_STATUSES)}")

    if not await db.requests.find_one({"id": request_id}, {"_id": 0, "id": 1}):
        raise NotFound("Request not found")

    update = {"status": new_status, "updatedAt": utc_now()}
    if new_status == RequestStatus.APPROVED.value:
        approver = await db.users.find_one({"id": actor.id}, {"_id": 0, "full_name": 1, "phone": 1})
        if not approver:
            raise NotFound("Approver not found")
        # snapshot, not a reference: later profile edits don't change it
        update["approved_by"] = {"name": approver.get("full_name"), "phone": approver.get("phone")}

    updated = await db.requests.find_one_and_update(
        {"id": request_id},
        {"$set": update},
        projection={"_id": 0},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise NotFound("Request not found")
    logger.info("Request %s -> %s by %s", request_id, new_status, actor.id)
    return updated


async def _attach_requesters(db: AsyncIOMotorDatabase, requests: List[dict]) -> List[dict]:
    ids = list({r["requester_id"] for r in requests})
    requesters = {}
    if ids:
        try:
            users = await db.users.find({"id": {"$in": ids}}, REQUESTER_FIELDS).to_list(None)
            requesters = {u["id"]: u for u in users}
        except Exception:
            logger.warning("Requester join failed", exc_info=True)
    return [{**r, "requester": requesters.get(r["requester_id"])} for r in requests]


async def list_requests(db: AsyncIOMotorDatabase, identity: Identity) -> List[dict]:
    user = await db.users.find_one({"id": identity.id}, {"_id": 0, "password_hash": 0})
    if not user:
        raise NotFound("User not found")

    query = build_request_filter(user)
    requests = await db.requests.find(query, {"_id": 0}).sort("createdAt", -1).to_list(None)
    return await _attach_requesters(db, requests)


async def list_own_requests(db: AsyncIOMotorDatabase, identity: Identity) -> List[dict]:
    return await db.requests.find(
        {"requester_id": identity.id}, {"_id": 0}
    ).sort("createdAt", -1).to_list(None)


async def matching_pending_requests(db: AsyncIOMotorDatabase, identity: Identity) -> List[dict]:
    """Pending requests for the calling donor's blood type."""
    user = await db.users.find_one({"id": identity.id}, {"_id": 0, "blood_type": 1})
    if not user:
        raise NotFound("User not found")
    return await db.requests.find(
        {"blood_group": user["blood_type"], "status": RequestStatus.PENDING.value},
        {"_id": 0}
    ).sort("createdAt", -1).to_list(None)
