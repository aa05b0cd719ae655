from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
import uuid
from .enums import BloodGroup, InventoryStatus

class BloodInventory(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    blood_type: BloodGroup
    available_units: int = 0
    status: InventoryStatus = InventoryStatus.MEDIUM

class InventoryUnitsUpdate(BaseModel):
    blood_type: Optional[BloodGroup] = None
    units: Optional[int] = None
