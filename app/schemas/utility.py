from pydantic import BaseModel, Field, ConfigDict
from uuid import UUID
from datetime import datetime
from decimal import Decimal


class UtilityRateCreate(BaseModel):
    """All three tariffs are required, per building."""
    building_id: UUID
    electricity_rate: Decimal = Field(..., gt=0)
    water_rate: Decimal = Field(..., gt=0)
    generator_rate: Decimal = Field(..., gt=0)


class UtilityRateResponse(UtilityRateCreate):
    id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
