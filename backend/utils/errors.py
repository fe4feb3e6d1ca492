"""
Error types shared by the services and routes.

Each service error carries the HTTP status the API answers with.
"""


class ServiceError(Exception):
    """Base class for failures raised by the service layer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(ServiceError):
    """Missing ids, blank text or malformed input; raised before any store call."""

    status_code = 400


class PermissionDeniedError(ServiceError):
    """The acting user may not perform this operation."""

    status_code = 403


class NotFoundError(ServiceError):
    """The addressed document does not exist."""

    status_code = 404


class ConfigurationError(RuntimeError):
    """Required configuration is missing at process start."""
