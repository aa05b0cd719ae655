from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Dict
import uuid
from .enums import BloodGroup

class BloodBank(BaseModel):
    """Partner bank directory entry. Its unit map is independent of BloodInventory."""
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    location: str
    contact: str = ""
    available_units: Dict[BloodGroup, int] = {}

class BloodBankCreate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    contact: Optional[str] = None

class BankInventoryUpdate(BaseModel):
    available_units: Dict[BloodGroup, int] = {}
