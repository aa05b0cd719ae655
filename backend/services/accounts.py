"""
Registration, login and the admin bootstrap.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from config import Settings
from models import User, UserCreate, UserResponse, Donor, UserRole
from services.auth import hash_password, verify_password, create_token
from services.errors import ValidationError, Conflict, Unauthenticated

logger = logging.getLogger(__name__)

PUBLIC_PROJECTION = {"_id": 0, "password_hash": 0}


def user_summary(user: dict) -> dict:
    return UserResponse(**user).model_dump(mode="json")


async def register(db: AsyncIOMotorDatabase, data: UserCreate) -> dict:
    if not all([data.full_name, data.email, data.phone, data.password, data.blood_type]):
        raise ValidationError("Missing required fields")
    if data.role == UserRole.ADMIN:
        raise ValidationError("Admin accounts cannot be self-registered")
    if not data.region:
        raise ValidationError("Region is required")

    email = data.email.strip().lower()
    if await db.users.find_one({"email": email}, {"_id": 0, "id": 1}):
        raise Conflict("User already exists")

    user = User(
        full_name=data.full_name,
        email=email,
        phone=data.phone,
        password_hash=hash_password(data.password),
        role=data.role,
        blood_type=data.blood_type,
        region=data.region,
    )
    doc = user.model_dump(mode="json")
    try:
        await db.users.insert_one(dict(doc))
    except DuplicateKeyError:
        raise Conflict("User already exists")

    if user.role == UserRole.DONOR:
        await db.donors.insert_one(Donor(user_id=user.id).model_dump(mode="json"))

    logger.info("Registered %s user %s", doc["role"], user.id)
    return {"token": create_token(user.id, user.role), "user": user_summary(doc)}


async def login(db: AsyncIOMotorDatabase, email: str, password: str) -> dict:
    user = await db.users.find_one({"email": (email or "").strip().lower()}, {"_id": 0})
    if not user or not verify_password(password, user.get("password_hash")):
        raise Unauthenticated("Invalid credentials")
    return {"token": create_token(user["id"], user["role"]), "user": user_summary(user)}


async def seed_admin(db: AsyncIOMotorDatabase, settings: Settings) -> Optional[str]:
    """Create the configured admin account once. Returns the new id, or None."""
    if not settings.admin_email or not settings.admin_pass:
        logger.warning("ADMIN_EMAIL/ADMIN_PASS not set, skipping admin seed")
        return None

    email = settings.admin_email.strip().lower()
    if await db.users.find_one({"email": email}, {"_id": 0, "id": 1}):
        logger.info("Admin user already exists")
        return None

    admin = User(
        full_name=settings.admin_name,
        email=email,
        phone="0000000000",
        password_hash=hash_password(settings.admin_pass, settings),
        role=UserRole.ADMIN,
        blood_type="O+",
    )
    try:
        await db.users.insert_one(admin.model_dump(mode="json"))
    except DuplicateKeyError:
        # another worker seeded it first
        return None
    logger.info("Admin user seeded successfully")
    return admin.id
