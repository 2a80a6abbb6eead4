from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base HTTP error with a default status code and client-safe detail."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class ServiceUnavailableError(AppError):
    """A backing service (the event store) cannot answer right now."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Service unavailable"
