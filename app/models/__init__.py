"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel, TenantScopedMixin, BillingCycleMixin
from app.models.enums import *
from app.models.tenant import Tenant
from app.models.billing import RentBill, UtilityBill, UtilityRate


__all__ = [
    # Base classes
    "BaseModel",
    "TenantScopedMixin",
    "BillingCycleMixin",

    # Enums
    "PaymentStatus",
    "UtilityType",
    "BillKind",

    # Tenants
    "Tenant",

    # Billing
    "RentBill",
    "UtilityBill",
    "UtilityRate",
]
