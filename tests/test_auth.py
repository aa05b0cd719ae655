"""
Credential service and access-control tests.
"""
import pytest

from config import Settings
from middleware.access import authenticate, authorize, RoleAccess
from models import UserRole
from services.auth import Identity, hash_password, verify_password, create_token, decode_token
from services.errors import Unauthenticated, Forbidden, ValidationError


class TestPasswords:

    def test_hash_is_one_way_and_verifiable(self):
        hashed = hash_password("hunter2")
        assert hashed != "hunter2"
        assert verify_password("hunter2", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_verify_rejects_missing_or_malformed_hash(self):
        assert verify_password("hunter2", None) is False
        assert verify_password("hunter2", "not-a-bcrypt-hash") is False

    def test_password_length_is_capped_in_bytes(self):
        assert verify_password("p" * 72, hash_password("p" * 72)) is True
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            hash_password("p" * 73)
        # 36 two-byte characters fit, 37 do not
        hash_password("\u00e9" * 36)
        with pytest.raises(ValidationError):
            hash_password("\u00e9" * 37)


class TestTokens:

    def test_token_round_trip(self):
        token = create_token("user-1", UserRole.DONOR)
        identity = decode_token(token)
        assert identity == Identity(id="user-1", role=UserRole.DONOR)

    def test_expired_token_is_rejected(self):
        settings = Settings()
        settings.jwt_expires_hours = -1
        token = create_token("user-1", "user", settings)
        with pytest.raises(Unauthenticated, match="expired"):
            decode_token(token, settings)

    def test_token_signed_with_other_secret_is_rejected(self):
        other = Settings()
        other.jwt_secret = "someone-else"
        token = create_token("user-1", "admin", other)
        with pytest.raises(Unauthenticated):
            decode_token(token)

    def test_garbage_token_is_rejected(self):
        with pytest.raises(Unauthenticated):
            authenticate("abc.def.ghi")

    def test_missing_token_is_rejected(self):
        with pytest.raises(Unauthenticated, match="no token"):
            authenticate(None)


class TestAuthorization:

    def test_allowed_role_passes(self):
        authorize(Identity(id="u", role="admin"), {UserRole.ADMIN})

    def test_other_role_is_forbidden(self):
        with pytest.raises(Forbidden):
            authorize(Identity(id="u", role="user"), ["admin", "donor"])

    async def test_role_access_dependency(self):
        guard = RoleAccess("donor")
        donor = Identity(id="d", role="donor")
        assert await guard(donor) is donor
        with pytest.raises(Forbidden):
            await guard(Identity(id="u", role="user"))
