"""Billing Models: rent bills and utility bills"""

from sqlalchemy import Column, Numeric
from sqlalchemy.dialects.postgresql import UUID, ENUM
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, TenantScopedMixin, BillingCycleMixin
from app.models.enums import UtilityType


class RentBill(BaseModel, TenantScopedMixin, BillingCycleMixin):
    """
    Recurring rent bill. One row per tenant lease, rolled forward in place
    on every approved payment.
    """
    __tablename__ = "rent_bills"

    # Relationships
    tenant = relationship("Tenant", back_populates="rent_bills")

    def __repr__(self) -> str:
        return f"<RentBill {self.amount} - {self.payment_status}>"


class UtilityBill(BaseModel, TenantScopedMixin, BillingCycleMixin):
    """
    Metered utility bill. amount is consumption times the building rate
    at generation time.
    """
    __tablename__ = "utility_bills"

    utility_type = Column(
        ENUM(UtilityType, name="utility_type", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        index=True,
    )
    previous_reading = Column(Numeric(12, 2), nullable=False)
    current_reading = Column(Numeric(12, 2), nullable=False)
    rate = Column(Numeric(12, 4), nullable=False)

    # Relationships
    tenant = relationship("Tenant", back_populates="utility_bills")

    def __repr__(self) -> str:
        return f"<UtilityBill {self.utility_type} {self.amount} - {self.payment_status}>"


class UtilityRate(BaseModel):
    """Per-building utility tariff. The newest row for a building is current."""
    __tablename__ = "utility_rates"

    building_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    electricity_rate = Column(Numeric(12, 4), nullable=False)
    water_rate = Column(Numeric(12, 4), nullable=False)
    generator_rate = Column(Numeric(12, 4), nullable=False)

    def rate_for(self, utility_type: UtilityType):
        return getattr(self, f"{utility_type.value}_rate")

    def __repr__(self) -> str:
        return f"<UtilityRate building={self.building_id}>"
