"""
Error response schemas for API documentation.
Mirrors the body produced by ErrorHandlerService.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["check_out"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Check-out date must be after check-in date"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["value_error"]
    )

    input: Optional[Any] = Field(
        None,
        description="Input value that caused the error"
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(
        ...,
        description="Error code identifier",
        examples=["VALIDATION_ERROR"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Request validation failed"]
    )

    timestamp: str = Field(
        ...,
        description="Error timestamp in ISO format",
        examples=["2024-06-01T00:00:00Z"]
    )

    request_id: Optional[str] = Field(
        None,
        description="Request identifier, echoed in the X-Request-ID header",
        examples=["abc12345"]
    )

    details: Optional[List[ErrorDetail]] = Field(
        None,
        description="Detailed error information for validation errors"
    )


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse = Field(
        ...,
        description="Error information"
    )


def _example(code: str, message: str, details: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "code": code,
        "message": message,
        "timestamp": "2024-06-01T00:00:00Z",
        "request_id": "abc12345"
    }
    if details:
        body["details"] = details
    return {"error": body}


def _response(description: str, examples: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "description": description,
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    name: {"summary": summary, "value": value}
                    for name, (summary, value) in examples.items()
                }
            }
        }
    }


# Common error response examples for documentation
COMMON_ERROR_RESPONSES = {
    400: _response("Bad Request - Invalid request parameters", {
        "unavailable": ("Property Unavailable", _example(
            "BAD_REQUEST", "Property 3fa85f64-5717-4562-b3fc-2c963f66afa6 is not available for booking"
        )),
    }),
    401: _response("Unauthorized - Authentication required", {
        "unauthorized": ("Authentication Required", _example("UNAUTHORIZED", "Authentication required")),
        "booking": ("Sign In To Book", _example("UNAUTHORIZED", "Please sign in to book this property")),
        "token_expired": ("Token Expired", _example("UNAUTHORIZED", "Token has expired")),
    }),
    403: _response("Forbidden - Access denied", {
        "insufficient_permissions": ("Insufficient Permissions", _example(
            "FORBIDDEN", "Insufficient permissions to access the admin panel"
        )),
        "self_role_change": ("Own Role", _example("FORBIDDEN", "You can't change your own role")),
    }),
    404: _response("Not Found - Resource does not exist", {
        "property": ("Property Not Found", _example(
            "NOT_FOUND", "Property not found with ID: 3fa85f64-5717-4562-b3fc-2c963f66afa6"
        )),
    }),
    409: _response("Conflict - Resource already exists", {
        "duplicate_email": ("Duplicate Email", _example(
            "CONFLICT", "User with identifier 'guest@example.com' already exists"
        )),
    }),
    422: _response("Unprocessable Entity - Validation failed", {
        "date_range": ("Invalid Stay", _example(
            "VALIDATION_ERROR",
            "Check-out date must be after check-in date",
            [{"field": "check_out", "message": "Check-out date must be after check-in date"}]
        )),
        "guests": ("Guest Limit", _example(
            "VALIDATION_ERROR",
            "Guest count 9 is outside the allowed range 1-6",
            [{"field": "guests", "message": "Guest count 9 is outside the allowed range 1-6"}]
        )),
    }),
    500: _response("Internal Server Error", {
        "internal": ("Unexpected Error", _example("INTERNAL_SERVER_ERROR", "An unexpected error occurred")),
    }),
}
