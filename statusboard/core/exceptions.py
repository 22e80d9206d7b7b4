from fastapi import Request
from fastapi.responses import JSONResponse


class StatusboardError(Exception):
    """Base exception for statusboard errors."""

    def __init__(
        self,
        code: str,
        message: str,
        status: int = 500,
        details: dict | None = None,
    ):
        self.code = code
        self.message = message
        self.status = status
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        result = {
            "error": {
                "code": self.code,
                "message": self.message,
                "status": self.status,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class ConfigError(StatusboardError):
    def __init__(self, message: str = "Remote configuration is unavailable.", details: dict | None = None):
        super().__init__(code="config_unavailable", message=message, status=503, details=details)


class PollError(StatusboardError):
    def __init__(self, message: str = "Upstream monitor poll failed.", details: dict | None = None):
        super().__init__(code="poll_failed", message=message, status=502, details=details)


class MutationError(StatusboardError):
    def __init__(self, message: str = "Upstream rejected the change.", details: dict | None = None):
        super().__init__(code="mutation_failed", message=message, status=502, details=details)


class AdminRequiredError(StatusboardError):
    def __init__(self, message: str = "An admin session is required.", details: dict | None = None):
        super().__init__(code="admin_required", message=message, status=403, details=details)


class NotFoundError(StatusboardError):
    def __init__(self, message: str = "Resource not found.", details: dict | None = None):
        super().__init__(code="not_found", message=message, status=404, details=details)


async def statusboard_error_handler(request: Request, exc: StatusboardError) -> JSONResponse:
    """Global exception handler for StatusboardError and subclasses."""
    return JSONResponse(status_code=exc.status, content=exc.to_dict())
