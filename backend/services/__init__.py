from .errors import (
    ServiceError, ValidationError, Unauthenticated, Forbidden, NotFound, Conflict, InternalError
)
from .auth import Identity, hash_password, verify_password, create_token, decode_token
from .responses import send_response, ok, fail
