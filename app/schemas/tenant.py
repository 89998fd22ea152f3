from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from uuid import UUID
from datetime import datetime
from decimal import Decimal

from app.config import settings


class TenantBase(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    building_id: Optional[UUID] = None
    payment_term: Optional[int] = Field(
        None,
        le=settings.MAX_PAYMENT_TERM_DAYS,
        description="Days per billing cycle; default applies when unset",
    )
    rent_amount: Optional[Decimal] = Field(None, ge=0)
    pays_electricity: bool = False
    pays_water: bool = False
    pays_generator: bool = False
    initial_electricity_reading: Decimal = Field(Decimal("0"), ge=0)
    initial_water_reading: Decimal = Field(Decimal("0"), ge=0)


class TenantCreate(TenantBase):
    pass


class TenantResponse(TenantBase):
    id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
