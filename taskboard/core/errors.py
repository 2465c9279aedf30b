"""Error types and classification for task store and controller failures."""

from enum import Enum

from pydantic import BaseModel


class ErrorCategory(Enum):
    """Categories of errors that can occur while managing tasks."""

    NETWORK_ERROR = "network_error"
    AUTHENTICATION_FAILED = "authentication_failed"
    VALIDATION_FAILED = "validation_failed"
    REQUEST_REJECTED = "request_rejected"
    SERVER_ERROR = "server_error"
    TASK_NOT_FOUND = "task_not_found"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Remote errors
    ERR_NETWORK_ERROR = "ERR_NETWORK_ERROR"
    ERR_AUTHENTICATION_FAILED = "ERR_AUTHENTICATION_FAILED"
    ERR_REQUEST_REJECTED = "ERR_REQUEST_REJECTED"
    ERR_SERVER_ERROR = "ERR_SERVER_ERROR"

    # Client-side errors
    ERR_VALIDATION_FAILED = "ERR_VALIDATION_FAILED"
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


class TaskStoreError(Exception):
    """Base error for failed task store operations."""

    category = ErrorCategory.UNKNOWN

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TaskStoreTransportError(TaskStoreError):
    """The request never produced a response (connection refused, timeout, ...)."""

    category = ErrorCategory.NETWORK_ERROR


class TaskStoreAuthError(TaskStoreError):
    """The task store rejected the credential (missing or expired)."""

    category = ErrorCategory.AUTHENTICATION_FAILED


class TaskStoreRejectedError(TaskStoreError):
    """The task store refused the request (4xx other than 401)."""

    category = ErrorCategory.REQUEST_REJECTED


class TaskStoreServerError(TaskStoreError):
    """The task store failed to process the request (5xx)."""

    category = ErrorCategory.SERVER_ERROR


class TaskValidationError(TaskStoreError):
    """Input was rejected client-side; nothing was sent to the task store."""

    category = ErrorCategory.VALIDATION_FAILED


class TaskNotFoundError(TaskStoreError):
    """The referenced task is not part of the in-memory collection."""

    category = ErrorCategory.TASK_NOT_FOUND


_RESPONSES: dict[ErrorCategory, ErrorResponse] = {
    ErrorCategory.NETWORK_ERROR: ErrorResponse(
        code=ErrorCode.ERR_NETWORK_ERROR,
        message="Unable to connect to the server.",
        suggestion="Please ensure the backend is running and try again.",
        severity=ErrorSeverity.MEDIUM,
    ),
    ErrorCategory.AUTHENTICATION_FAILED: ErrorResponse(
        code=ErrorCode.ERR_AUTHENTICATION_FAILED,
        message="Your session has expired.",
        suggestion="Please log in again.",
        severity=ErrorSeverity.HIGH,
    ),
    ErrorCategory.REQUEST_REJECTED: ErrorResponse(
        code=ErrorCode.ERR_REQUEST_REJECTED,
        message="The server rejected the request.",
        suggestion="Check the task details and try again.",
        severity=ErrorSeverity.LOW,
    ),
    ErrorCategory.SERVER_ERROR: ErrorResponse(
        code=ErrorCode.ERR_SERVER_ERROR,
        message="The server failed to process the request.",
        suggestion="Please try again later.",
        severity=ErrorSeverity.MEDIUM,
    ),
    ErrorCategory.VALIDATION_FAILED: ErrorResponse(
        code=ErrorCode.ERR_VALIDATION_FAILED,
        message="The task is invalid.",
        suggestion="Make sure the task has a title.",
        severity=ErrorSeverity.LOW,
    ),
    ErrorCategory.TASK_NOT_FOUND: ErrorResponse(
        code=ErrorCode.ERR_TASK_NOT_FOUND,
        message="I couldn't find that task.",
        suggestion="Reload the task list and try again.",
        severity=ErrorSeverity.LOW,
    ),
}

_UNKNOWN_RESPONSE = ErrorResponse(
    code=ErrorCode.ERR_UNKNOWN,
    message="An unexpected error occurred.",
    suggestion="Please try again later. If the problem persists, contact support.",
    severity=ErrorSeverity.MEDIUM,
)


def classify_error(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Task store errors carry their category; the detail message of rejected and
    validation errors is passed through since it comes from the input itself.

    Args:
        exception: The exception raised during the operation

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    category = exception.category if isinstance(exception, TaskStoreError) else ErrorCategory.UNKNOWN
    response = _RESPONSES.get(category, _UNKNOWN_RESPONSE)

    if category in (ErrorCategory.VALIDATION_FAILED, ErrorCategory.REQUEST_REJECTED) and str(exception):
        return response.model_copy(update={"message": str(exception)})
    return response
