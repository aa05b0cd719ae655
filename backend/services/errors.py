"""
Service error taxonomy.
Each error carries the HTTP status it is rendered with at the API boundary.
"""


class ServiceError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str = None, data=None):
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid input"


class Unauthenticated(ServiceError):
    status_code = 401
    default_message = "Not authorized"


class Forbidden(ServiceError):
    status_code = 403
    default_message = "Forbidden: You do not have permission"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"


class Conflict(ServiceError):
    status_code = 409
    default_message = "Already exists"


class InternalError(ServiceError):
    status_code = 500
