"""Utility Service - building tariffs and meter-based utility bills"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidInputError, NotFoundError
from app.models.billing import UtilityBill, UtilityRate
from app.models.enums import BillKind, UtilityType
from app.models.tenant import Tenant
from app.schemas.billing import UtilityBillGenerate
from app.schemas.utility import UtilityRateCreate
from app.services.bill_service import BillingCycleService
from app.utils.time import get_utc_now

# Tenant flag that must be set for the tenant to be billed for a utility
RESPONSIBILITY_FLAGS = {
    UtilityType.ELECTRICITY: "pays_electricity",
    UtilityType.WATER: "pays_water",
    UtilityType.GENERATOR: "pays_generator",
}

# Generators have no move-in meter; their first reading starts from zero
INITIAL_READINGS = {
    UtilityType.ELECTRICITY: "initial_electricity_reading",
    UtilityType.WATER: "initial_water_reading",
}


class UtilityRateService:

    @staticmethod
    async def get_latest_rate(db: AsyncSession, building_id: UUID) -> Optional[UtilityRate]:
        result = await db.execute(
            select(UtilityRate)
            .where(UtilityRate.building_id == building_id)
            .order_by(UtilityRate.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def create_rate(db: AsyncSession, data: UtilityRateCreate) -> UtilityRate:
        rate = UtilityRate(**data.model_dump())
        db.add(rate)
        await db.commit()
        await db.refresh(rate)
        return rate


class UtilityBillService(BillingCycleService):
    model = UtilityBill
    kind = BillKind.UTILITY

    @staticmethod
    async def previous_reading(db: AsyncSession, tenant: Tenant, utility_type: UtilityType) -> Decimal:
        """Reading on the tenant's latest bill for this utility, else the move-in reading."""
        result = await db.execute(
            select(UtilityBill.current_reading)
            .where(
                UtilityBill.subject_id == tenant.id,
                UtilityBill.utility_type == utility_type,
            )
            .order_by(UtilityBill.created_at.desc())
            .limit(1)
        )
        last = result.scalar_one_or_none()
        if last is not None:
            return Decimal(last)
        column = INITIAL_READINGS.get(utility_type)
        if column is None:
            return Decimal("0")
        return Decimal(getattr(tenant, column) or 0)

    @classmethod
    async def generate_bill(
        cls,
        db: AsyncSession,
        data: UtilityBillGenerate,
        now: Optional[datetime] = None,
    ) -> UtilityBill:
        missing = [
            name for name in ("subject_id", "utility_type", "current_reading")
            if getattr(data, name) is None
        ]
        if missing:
            raise InvalidInputError(f"Missing required fields: {', '.join(missing)}.")

        tenant = await cls._require_tenant(db, data.subject_id)
        if tenant.building_id is None:
            raise InvalidInputError("Tenant is not assigned to a valid building.")
        if not getattr(tenant, RESPONSIBILITY_FLAGS[data.utility_type]):
            raise InvalidInputError(
                f"Tenant is not responsible for {data.utility_type.value} usage."
            )

        previous = await cls.previous_reading(db, tenant, data.utility_type)
        if data.current_reading < previous:
            raise InvalidInputError(
                f"Current reading ({data.current_reading}) must be >= previous reading ({previous})."
            )

        rates = await UtilityRateService.get_latest_rate(db, tenant.building_id)
        if not rates:
            raise NotFoundError("Utility rates not configured for this building.")
        rate = Decimal(rates.rate_for(data.utility_type))
        amount = ((data.current_reading - previous) * rate).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )

        bill_date = data.bill_date or (now or get_utc_now())
        fields = cls._open_cycle(tenant, bill_date, data.due_date, data.original_due_date)
        fields.update(
            amount=amount,
            utility_type=data.utility_type,
            previous_reading=previous,
            current_reading=data.current_reading,
            rate=rate,
        )
        return await cls._insert(db, fields)
