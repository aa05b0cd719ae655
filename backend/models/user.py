from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
import uuid
from .enums import UserRole, BloodGroup, Region
from .timestamps import utc_now

class User(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    full_name: str
    email: str
    phone: str
    password_hash: str
    role: UserRole = UserRole.USER
    blood_type: BloodGroup
    region: Optional[Region] = None
    created_at: str = Field(default_factory=utc_now)

class UserCreate(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    role: UserRole = UserRole.USER
    blood_type: Optional[BloodGroup] = None
    region: Optional[Region] = None

class UserLogin(BaseModel):
    email: str = ""
    password: str = ""

class UserUpdate(BaseModel):
    role: Optional[UserRole] = None
    region: Optional[Region] = None

class UserResponse(BaseModel):
    id: str
    role: UserRole
    full_name: str
    phone: str
    region: Optional[Region] = None
