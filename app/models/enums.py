"""Centralized Enum Definitions"""

import enum


class PaymentStatus(str, enum.Enum):
    """Per-cycle payment state of a bill"""
    PENDING = "pending"
    SUBMITTED = "submitted"
    PAID = "paid"


class UtilityType(str, enum.Enum):
    """Metered utilities a tenant can be billed for"""
    ELECTRICITY = "electricity"
    WATER = "water"
    GENERATOR = "generator"


class BillKind(str, enum.Enum):
    """Bill tables that share the billing-cycle lifecycle"""
    RENT = "rent"
    UTILITY = "utility"
