"""
Shared error handling for the Identity Service.
"""

from enum import Enum
from typing import Dict, Any, Optional
from pydantic import BaseModel
from opentelemetry import trace


class AwsErrorCodes(str, Enum):
    """Machine-checkable error codes surfaced to protocol clients."""

    E_CANNOT_CREATE_SSO_TOKEN = "E_CANNOT_CREATE_SSO_TOKEN"
    E_CANNOT_REFRESH_SSO_TOKEN = "E_CANNOT_REFRESH_SSO_TOKEN"
    E_INVALID_SSO_CLIENT = "E_INVALID_SSO_CLIENT"
    E_INVALID_SSO_SESSION = "E_INVALID_SSO_SESSION"
    E_INVALID_SSO_TOKEN = "E_INVALID_SSO_TOKEN"
    E_UNKNOWN = "E_UNKNOWN"


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class IdentityLayerException(Exception):
    """Base exception for Identity Service errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        trace_id = None
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            if span_context.trace_id != 0:
                trace_id = f"{span_context.trace_id:032x}"

        return ErrorResponse(
            trace_id=trace_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class AwsError(IdentityLayerException):
    """Error raised by SSO operations, keyed by an AwsErrorCodes value."""

    def __init__(self, message: str, aws_error_code: AwsErrorCodes, details: Optional[Dict[str, Any]] = None):
        super().__init__(AwsErrorCodes(aws_error_code).value, message, details)
        self.aws_error_code = AwsErrorCodes(aws_error_code)

    @staticmethod
    def wrap(error: Exception, aws_error_code: AwsErrorCodes) -> "AwsError":
        """Return error as an AwsError, keeping existing AwsErrors intact."""
        if isinstance(error, AwsError):
            return error

        return AwsError(
            str(error) or "Unknown error",
            aws_error_code,
            details={"cause": type(error).__name__}
        )
