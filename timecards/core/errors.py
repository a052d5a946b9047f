from typing import Optional


class TimecardError(Exception):
    """Base for every error the service maps to a JSON response."""

    status_code = 500
    default_msg = "Server error"

    def __init__(self, msg: Optional[str] = None, detail: Optional[str] = None):
        self.msg = msg or self.default_msg
        self.detail = detail
        super().__init__(self.msg)


class AuthenticationError(TimecardError):
    status_code = 401
    default_msg = "No token, authorization denied"


class AuthorizationError(TimecardError):
    status_code = 401
    default_msg = "User not authorized"


class NotFoundError(TimecardError):
    status_code = 404
    default_msg = "Timecard not found"


class ValidationError(TimecardError):
    status_code = 400
    default_msg = "Invalid timecard data"


class StoreError(TimecardError):
    status_code = 500
    default_msg = "Server error"
