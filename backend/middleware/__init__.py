"""
Middleware package for the Blood Donation Coordination API.
"""
from .access import (
    authenticate,
    authorize,
    get_current_identity,
    RoleAccess,
    require_admin,
    require_donor,
    require_requester,
    require_admin_or_requester,
    build_request_filter,
    build_notification_filter
)

__all__ = [
    'authenticate',
    'authorize',
    'get_current_identity',
    'RoleAccess',
    'require_admin',
    'require_donor',
    'require_requester',
    'require_admin_or_requester',
    'build_request_filter',
    'build_notification_filter'
]
