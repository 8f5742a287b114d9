"""
Error response schemas for API documentation.
Mirrors the envelope produced by ``ErrorHandlerService.format_error_response``.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Location of the field that caused the error",
        examples=["body -> regularPrice"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Input should be a valid number"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["float_parsing"]
    )


class ErrorResponse(BaseModel):
    """Schema for the standard error envelope."""

    success: bool = Field(
        False,
        description="Always false for errors"
    )

    statusCode: int = Field(
        ...,
        description="HTTP status code",
        examples=[404]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Listing not found!"]
    )

    code: str = Field(
        ...,
        description="Error code identifier",
        examples=["NOT_FOUND"]
    )

    timestamp: str = Field(
        ...,
        description="Error timestamp in ISO format",
        examples=["2024-01-01T00:00:00Z"]
    )

    requestId: Optional[str] = Field(
        None,
        description="Request identifier for tracking",
        examples=["abc12345"]
    )

    details: Optional[List[ErrorDetail]] = Field(
        None,
        description="Field errors for request validation failures"
    )


def _error_example(status_code: int, code: str, message: str) -> dict:
    return {
        "success": False,
        "statusCode": status_code,
        "message": message,
        "code": code,
        "timestamp": "2024-01-01T00:00:00Z",
        "requestId": "abc12345",
    }


COMMON_ERROR_RESPONSES = {
    400: {
        "description": "Bad Request - Invalid input",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "validation_error": {
                        "summary": "Listing validation failure",
                        "value": _error_example(
                            400, "VALIDATION_ERROR", "Discount price must be less than regular price"
                        )
                    },
                    "missing_fields": {
                        "summary": "Missing required fields",
                        "value": _error_example(400, "VALIDATION_ERROR", "All fields are required!")
                    }
                }
            }
        }
    },
    401: {
        "description": "Unauthorized - Authentication required or self-only rule violated",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "unauthorized": {
                        "summary": "Authentication Required",
                        "value": _error_example(401, "UNAUTHORIZED", "Authentication required")
                    },
                    "self_only": {
                        "summary": "Not your account",
                        "value": _error_example(401, "UNAUTHORIZED", "You can update only your own account!")
                    }
                }
            }
        }
    },
    403: {
        "description": "Forbidden - Caller does not own the listing",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "example": _error_example(403, "FORBIDDEN", "You can only update your own listings!")
            }
        }
    },
    404: {
        "description": "Not Found - Resource not found",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "listing_not_found": {
                        "summary": "Listing Not Found",
                        "value": _error_example(404, "NOT_FOUND", "Listing not found!")
                    },
                    "user_not_found": {
                        "summary": "User Not Found",
                        "value": _error_example(404, "NOT_FOUND", "User not found!")
                    }
                }
            }
        }
    },
    500: {
        "description": "Internal Server Error - Unexpected error",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "example": _error_example(
                    500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."
                )
            }
        }
    },
}


def get_error_responses(*status_codes: int) -> dict:
    """
    Get error responses for the given status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error responses for OpenAPI documentation
    """
    return {code: COMMON_ERROR_RESPONSES[code] for code in status_codes if code in COMMON_ERROR_RESPONSES}
