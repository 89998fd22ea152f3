"""Domain errors raised by the billing services and rendered by app.main"""

from fastapi import status


class BillingError(Exception):
    """Base class. status_code and code drive the ErrorResponse envelope."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "BILLING_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(BillingError):
    """Missing or empty required field. Never retried."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_INPUT"


class NotFoundError(BillingError):
    """Referenced bill, tenant or rate does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "RESOURCE_NOT_FOUND"


class ConflictError(BillingError):
    """
    Conditional state transition did not apply because the expected
    payment_status no longer held. Callers should re-fetch before retrying.
    """

    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
