from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
import uuid
from .enums import BloodGroup, RequestStatus
from .timestamps import utc_now

class Approver(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None

class BloodRequest(BaseModel):
    # stored with the dashboard's camelCase timestamp names; dump with by_alias=True
    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    requester_id: str
    blood_group: BloodGroup
    region: str
    hospital: str = ""
    notes: str = ""
    status: RequestStatus = RequestStatus.PENDING
    approved_by: Optional[Approver] = None
    created_at: str = Field(default_factory=utc_now, alias="createdAt")
    updated_at: str = Field(default_factory=utc_now, alias="updatedAt")

class BloodRequestCreate(BaseModel):
    blood_group: Optional[str] = None
    region: Optional[str] = None
    hospital: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None

class StatusUpdate(BaseModel):
    status: Optional[str] = None
