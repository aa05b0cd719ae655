from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Union
import uuid

class DonationEntry(BaseModel):
    date: str
    units: int = Field(default=1, ge=1)
    notes: str = ""

class Donor(BaseModel):
    """Donor profile; one per donor-role user."""
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    availability: bool = True
    last_donation_date: Optional[str] = None
    reputation: int = 5
    donation_log: List[DonationEntry] = []

class DonationCreate(BaseModel):
    units: int = 1
    notes: Optional[str] = ""

class AvailabilityUpdate(BaseModel):
    # The dashboard posts either a JSON bool or the string "true"
    availability: Union[bool, str, None] = None

    def is_available(self) -> bool:
        return self.availability is True or self.availability == "true"
