from typing import Optional, Any

class ClarityWebError(Exception):
    """
    Base exception for ClarityWeb application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class UnauthorizedError(ClarityWebError):
    """
    Raised when an operation needs a validated session and none is present.
    """
    def __init__(self, message: str = "Unauthorized", details: Optional[Any] = None):
        super().__init__(message, code="UNAUTHORIZED", status_code=401, details=details)

class NotFoundError(ClarityWebError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)

class ValidationError(ClarityWebError):
    """
    Raised when input validation fails.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=422, details=details)

class UpstreamError(ClarityWebError):
    """
    Raised when an external collaborator (e.g. a fetched web page) fails.
    """
    def __init__(self, message: str = "Upstream service error", details: Optional[Any] = None):
        super().__init__(message, code="UPSTREAM_FAILURE", status_code=502, details=details)

class InternalError(ClarityWebError):
    """
    Raised for unexpected storage or infrastructure faults. The message is always generic.
    """
    def __init__(self, message: str = "Internal server error", details: Optional[Any] = None):
        super().__init__(message, code="INTERNAL_ERROR", status_code=500, details=details)

class LoginRedirect(Exception):
    """
    Raised by the dashboard guard to halt rendering and send the browser to the login page.
    """
    def __init__(self, location: str):
        self.location = location
        super().__init__(location)
