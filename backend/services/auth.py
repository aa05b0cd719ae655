"""
Credential Service
Password hashing (bcrypt) and signed session tokens (JWT) carrying {id, role}.
"""
from datetime import datetime, timezone, timedelta
from typing import Optional

import bcrypt
import jwt
from pydantic import BaseModel

from config import get_settings, Settings
from models import UserRole
from services.errors import Unauthenticated, ValidationError

# bcrypt only reads the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


class Identity(BaseModel):
    id: str
    role: UserRole


def hash_password(password: str, settings: Optional[Settings] = None) -> str:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    settings = settings or get_settings()
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash, or a password bcrypt refuses
        return False


def create_token(user_id: str, role, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "role": role.value if isinstance(role, UserRole) else role,
        "iat": now,
        "exp": now + timedelta(hours=settings.jwt_expires_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Optional[Settings] = None) -> Identity:
    """Verify signature and expiry; return the identity the token was issued for."""
    settings = settings or get_settings()
    if not token:
        raise Unauthenticated("Not authorized, no token")
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return Identity(id=payload["id"], role=payload["role"])
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Not authorized, token expired")
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise Unauthenticated("Not authorized, token failed")
