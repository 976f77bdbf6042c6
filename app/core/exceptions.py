"""
API-level errors that are not estimation failures.
"""
from app.utils.constants import ErrorCode


class ApiError(Exception):
    """Error rendered as ``{"error": message, "code": code}``."""

    def __init__(self, message: str, code: str, status_code: int = 500, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict:
        data = {"error": self.message, "code": self.code}
        if self.details:
            data["details"] = self.details
        return data


class DatabaseUnavailable(ApiError):
    def __init__(self):
        super().__init__("Database not available", ErrorCode.DATABASE_UNAVAILABLE, 503)


class AuthenticationError(ApiError):
    def __init__(self, message: str, code: str = ErrorCode.AUTH_ERROR):
        super().__init__(message, code, 401)
