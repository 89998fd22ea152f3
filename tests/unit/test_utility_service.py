"""Unit tests for meter-based utility bill generation."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidInputError, NotFoundError
from app.models.billing import UtilityRate
from app.models.enums import PaymentStatus, UtilityType
from app.models.tenant import Tenant
from app.schemas.billing import UtilityBillGenerate
from app.services.utility_service import UtilityBillService

GET_TENANT = "app.services.bill_service.TenantService.get_tenant_by_id"
PREVIOUS_READING = "app.services.utility_service.UtilityBillService.previous_reading"
LATEST_RATE = "app.services.utility_service.UtilityRateService.get_latest_rate"


def _tenant(**overrides) -> Tenant:
    fields = dict(
        id=uuid4(),
        full_name="Meron",
        building_id=uuid4(),
        payment_term=30,
        pays_electricity=True,
        pays_water=False,
        pays_generator=True,
        initial_electricity_reading=Decimal("120"),
        initial_water_reading=Decimal("15"),
    )
    fields.update(overrides)
    return Tenant(**fields)


def _rates(building_id) -> UtilityRate:
    return UtilityRate(
        building_id=building_id,
        electricity_rate=Decimal("2.5000"),
        water_rate=Decimal("10.0000"),
        generator_rate=Decimal("4.0000"),
    )


def _request(tenant: Tenant, utility_type=UtilityType.ELECTRICITY, reading="170") -> UtilityBillGenerate:
    return UtilityBillGenerate(
        subject_id=tenant.id,
        utility_type=utility_type,
        current_reading=Decimal(reading),
        bill_date=datetime(2024, 1, 1),
    )


@pytest.mark.asyncio
async def test_generate_utility_bill_prices_consumption():
    db = AsyncMock(spec=AsyncSession)
    tenant = _tenant()

    with patch(GET_TENANT, new_callable=AsyncMock) as mock_tenant, \
            patch(PREVIOUS_READING, new_callable=AsyncMock) as mock_previous, \
            patch(LATEST_RATE, new_callable=AsyncMock) as mock_rate:
        mock_tenant.return_value = tenant
        mock_previous.return_value = Decimal("120")
        mock_rate.return_value = _rates(tenant.building_id)

        bill = await UtilityBillService.generate_bill(db, _request(tenant))

    assert bill.previous_reading == Decimal("120")
    assert bill.current_reading == Decimal("170")
    assert bill.rate == Decimal("2.5000")
    assert bill.amount == Decimal("125.00")
    assert bill.utility_type == UtilityType.ELECTRICITY
    assert bill.due_date == datetime(2024, 1, 31, 23, 59, 59)
    assert bill.payment_status == PaymentStatus.PENDING
    assert bill.penalty == Decimal("0.00")
    db.add.assert_called_once_with(bill)


@pytest.mark.asyncio
async def test_generate_utility_bill_missing_fields():
    db = AsyncMock(spec=AsyncSession)

    with pytest.raises(InvalidInputError) as exc:
        await UtilityBillService.generate_bill(db, UtilityBillGenerate(subject_id=uuid4()))

    assert "utility_type" in exc.value.message
    assert "current_reading" in exc.value.message


@pytest.mark.asyncio
async def test_generate_utility_bill_unknown_tenant():
    db = AsyncMock(spec=AsyncSession)

    with patch(GET_TENANT, new_callable=AsyncMock) as mock_tenant:
        mock_tenant.return_value = None
        with pytest.raises(NotFoundError):
            await UtilityBillService.generate_bill(db, _request(_tenant()))


@pytest.mark.asyncio
async def test_generate_utility_bill_requires_building():
    db = AsyncMock(spec=AsyncSession)
    tenant = _tenant(building_id=None)

    with patch(GET_TENANT, new_callable=AsyncMock) as mock_tenant:
        mock_tenant.return_value = tenant
        with pytest.raises(InvalidInputError):
            await UtilityBillService.generate_bill(db, _request(tenant))


@pytest.mark.asyncio
async def test_generate_utility_bill_tenant_not_responsible():
    db = AsyncMock(spec=AsyncSession)
    tenant = _tenant()

    with patch(GET_TENANT, new_callable=AsyncMock) as mock_tenant:
        mock_tenant.return_value = tenant
        with pytest.raises(InvalidInputError) as exc:
            await UtilityBillService.generate_bill(db, _request(tenant, UtilityType.WATER))

    assert "water" in exc.value.message


@pytest.mark.asyncio
async def test_generate_utility_bill_rejects_reading_below_previous():
    db = AsyncMock(spec=AsyncSession)
    tenant = _tenant()

    with patch(GET_TENANT, new_callable=AsyncMock) as mock_tenant, \
            patch(PREVIOUS_READING, new_callable=AsyncMock) as mock_previous:
        mock_tenant.return_value = tenant
        mock_previous.return_value = Decimal("200")
        with pytest.raises(InvalidInputError):
            await UtilityBillService.generate_bill(db, _request(tenant, reading="150"))

    assert not db.add.called


@pytest.mark.asyncio
async def test_generate_utility_bill_without_rates():
    db = AsyncMock(spec=AsyncSession)
    tenant = _tenant()

    with patch(GET_TENANT, new_callable=AsyncMock) as mock_tenant, \
            patch(PREVIOUS_READING, new_callable=AsyncMock) as mock_previous, \
            patch(LATEST_RATE, new_callable=AsyncMock) as mock_rate:
        mock_tenant.return_value = tenant
        mock_previous.return_value = Decimal("120")
        mock_rate.return_value = None
        with pytest.raises(NotFoundError):
            await UtilityBillService.generate_bill(db, _request(tenant))


@pytest.mark.asyncio
async def test_previous_reading_prefers_last_bill():
    db = AsyncMock(spec=AsyncSession)
    result = MagicMock()
    result.scalar_one_or_none.return_value = Decimal("340.50")
    db.execute.return_value = result

    reading = await UtilityBillService.previous_reading(db, _tenant(), UtilityType.ELECTRICITY)

    assert reading == Decimal("340.50")


@pytest.mark.asyncio
@pytest.mark.parametrize("utility_type, expected", [
    (UtilityType.ELECTRICITY, Decimal("120")),
    (UtilityType.WATER, Decimal("15")),
    (UtilityType.GENERATOR, Decimal("0")),
])
async def test_previous_reading_falls_back_to_move_in_reading(utility_type, expected):
    db = AsyncMock(spec=AsyncSession)
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    db.execute.return_value = result

    reading = await UtilityBillService.previous_reading(db, _tenant(), utility_type)

    assert reading == expected
