"""Tenant Model - the subject every bill belongs to"""

from sqlalchemy import Column, String, Integer, Numeric, Boolean
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.models.base import BaseModel


class Tenant(BaseModel):
    """
    Lease holder. payment_term is the number of days granted per billing
    cycle; NULL means the configured default applies.
    """
    __tablename__ = "tenants"

    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(50), nullable=True)

    building_id = Column(UUID(as_uuid=True), nullable=True, index=True)
    payment_term = Column(Integer, nullable=True)
    rent_amount = Column(Numeric(12, 2), nullable=True)

    # Utility responsibilities
    pays_electricity = Column(Boolean, default=False, nullable=False)
    pays_water = Column(Boolean, default=False, nullable=False)
    pays_generator = Column(Boolean, default=False, nullable=False)

    # Meter readings at move-in
    initial_electricity_reading = Column(Numeric(12, 2), default=0, nullable=False)
    initial_water_reading = Column(Numeric(12, 2), default=0, nullable=False)

    # Relationships
    rent_bills = relationship("RentBill", back_populates="tenant")
    utility_bills = relationship("UtilityBill", back_populates="tenant")

    def __repr__(self) -> str:
        return f"<Tenant {self.full_name}>"
