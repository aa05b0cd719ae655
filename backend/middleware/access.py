"""
Access control for the API.
Authentication (bearer token -> Identity), per-route role authorization, and the
role-scoped store filters used by listing endpoints.
"""
from typing import Iterable

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from models import UserRole, NotificationAudience
from services.auth import Identity, decode_token
from services.errors import Forbidden, Unauthenticated, ValidationError

bearer_scheme = HTTPBearer(auto_error=False)


def authenticate(token: str) -> Identity:
    if not token:
        raise Unauthenticated("Not authorized, no token")
    return decode_token(token)


def authorize(identity: Identity, allowed_roles: Iterable) -> None:
    allowed = {UserRole(r) for r in allowed_roles}
    if identity.role not in allowed:
        raise Forbidden("Forbidden: You do not have permission")


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)
) -> Identity:
    return authenticate(credentials.credentials if credentials else None)


class RoleAccess:
    """Dependency that authenticates the caller and checks their role."""

    def __init__(self, *roles):
        self.roles = {UserRole(r) for r in roles}

    async def __call__(self, identity: Identity = Depends(get_current_identity)) -> Identity:
        authorize(identity, self.roles)
        return identity


require_admin = RoleAccess(UserRole.ADMIN)
require_donor = RoleAccess(UserRole.DONOR)
require_requester = RoleAccess(UserRole.USER)
require_admin_or_requester = RoleAccess(UserRole.ADMIN, UserRole.USER)


# ==================== Visibility filters ====================

def _role_value(role) -> str:
    return role.value if isinstance(role, UserRole) else role


def build_request_filter(user: dict) -> dict:
    """Store query for the requests a user may list.

    Admins see everything, donors see their region, requesters see their own.
    """
    role = _role_value(user["role"])
    if role == UserRole.ADMIN.value:
        return {}
    if role == UserRole.DONOR.value:
        if not user.get("region"):
            raise ValidationError("Donor region not set")
        return {"region": user["region"]}
    return {"requester_id": user["id"]}


def build_notification_filter(user: dict) -> dict:
    role = _role_value(user["role"])
    region = user.get("region")
    if role == UserRole.ADMIN.value:
        return {}
    if role == UserRole.DONOR.value and region:
        return {"$or": [
            {"role": NotificationAudience.ALL.value},
            {"role": NotificationAudience.DONOR.value, "region": region},
        ]}
    return {"$or": [
        {"role": NotificationAudience.ALL.value},
        {"role": role, "region": region},
    ]}
