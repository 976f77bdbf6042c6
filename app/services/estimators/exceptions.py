"""
Errors raised by the emissions estimator.

Every failure of ``EmissionEstimator.calculate`` is one of these; raw transport
exceptions are never surfaced.
"""
from app.utils.constants import UNPROCESSABLE_ENTITY, ErrorCode


class EstimationError(Exception):
    """Base class for estimation failures."""

    code = ErrorCode.INTERNAL_ERROR
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message

    def for_activity(self, activity_key: str) -> "EstimationError":
        """Append the attempted activity key to the message and return self."""
        self.message = f"{self.message}. Activity: {activity_key}"
        self.args = (self.message,)
        return self

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class InvalidInput(EstimationError):
    code = ErrorCode.INVALID_INPUT
    status_code = 400


class UnsupportedActivity(EstimationError):
    code = ErrorCode.UNSUPPORTED_ACTIVITY
    status_code = 400

    def __init__(self, activity_key: str):
        super().__init__(f"Unsupported activity: {activity_key}")
        self.activity_key = activity_key


class ServiceMisconfigured(EstimationError):
    code = ErrorCode.SERVICE_MISCONFIGURED
    status_code = 500


class ExternalAuthError(EstimationError):
    code = ErrorCode.API_AUTH_ERROR
    status_code = 500

    def __init__(self, message: str = "Invalid API credentials"):
        super().__init__(message)


class RateLimited(EstimationError):
    """The estimation service is throttling requests; retry later."""

    code = ErrorCode.RATE_LIMIT_EXCEEDED
    status_code = 429

    def __init__(
        self,
        message: str = "API rate limit exceeded. Please try again later.",
        retry_after: float | None = None,
    ):
        super().__init__(message)
        self.retry_after = retry_after

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.retry_after is not None:
            data["retry_after"] = self.retry_after
        return data


class ExternalServiceError(EstimationError):
    code = ErrorCode.EXTERNAL_API_ERROR
    status_code = 500

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status

    @property
    def is_unprocessable(self) -> bool:
        """True when the service rejected the factor id as unprocessable."""
        return self.upstream_status == UNPROCESSABLE_ENTITY


class Timeout(EstimationError):
    code = ErrorCode.TIMEOUT_ERROR
    status_code = 504

    def __init__(self, message: str = "Request timeout. Please try again."):
        super().__init__(message)
