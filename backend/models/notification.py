from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
import uuid
from .enums import NotificationAudience, Region
from .timestamps import utc_now

class Notification(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    message: str
    role: NotificationAudience = NotificationAudience.ALL  # "all" means broadcast
    region: Optional[Region] = None
    is_read: bool = Field(default=False, alias="isRead")
    created_at: str = Field(default_factory=utc_now, alias="createdAt")

class NotificationCreate(BaseModel):
    title: Optional[str] = None
    message: Optional[str] = None
    role: NotificationAudience = NotificationAudience.ALL
    region: Optional[Region] = None
