"""Standardized API Response Schemas"""

from typing import Generic, TypeVar

from pydantic import BaseModel


T = TypeVar('T')


class SuccessResponse(BaseModel, Generic[T]):
    """
    Standard success response envelope.

    Example:
        {
            "success": true,
            "data": {"bill_id": "..."},
            "message": "Payment proof submitted."
        }
    """
    success: bool = True
    data: T
    message: str = "Operation successful"


class ErrorDetail(BaseModel):
    """Machine-readable code plus a human message."""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """
    Standard error response envelope.

    Example:
        {
            "success": false,
            "error": {
                "code": "CONFLICT",
                "message": "Bill not found or payment hasn't been submitted."
            }
        }
    """
    success: bool = False
    error: ErrorDetail
